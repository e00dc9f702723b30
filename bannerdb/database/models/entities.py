"""
Entity Models
--------------

Banner, Feature and Tag models.

Banners carry the content payload; features and tags are the two
dimensions a banner is looked up by. Feature and tag ids are supplied by
the caller, banner ids are generated.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import List, Optional

# --- Third party imports ---
from sqlalchemy import Boolean, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from .associations import banner_feature, banner_tag
from .base import Base, IdType, utcnow


class Banner(Base):
    """
    Content payload shown for a (feature, tag) pair.

    Attributes:
        id: Generated primary key
        content: Opaque payload (unique; identical content reuses the row)
        is_active: Whether the banner is active
        created_at: When the banner was first stored
        updated_at: When the banner was last written

    Relationships:
        feature: The single associated Feature, if any (read-only)
        tags: Associated tags ordered by id (read-only)

    Junction rows are written through the association tables directly,
    so both relationships are view-only.
    """

    __tablename__ = "banner"

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # ---- Timestamps ----
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # ---- Relationships ----
    feature: Mapped[Optional["Feature"]] = relationship(
        "Feature", secondary=banner_feature, uselist=False, viewonly=True
    )
    tags: Mapped[List["Tag"]] = relationship(
        "Tag", secondary=banner_tag, order_by="Tag.id", viewonly=True
    )

    # ---- Computed properties ----
    @property
    def feature_id(self) -> Optional[int]:
        """Id of the associated feature, or None."""
        return self.feature.id if self.feature is not None else None

    @property
    def tag_ids(self) -> List[int]:
        """Ids of all associated tags, ascending."""
        return [tag.id for tag in self.tags]

    def __repr__(self) -> str:
        return f"<Banner(id={self.id}, is_active={self.is_active})>"


class Feature(Base):
    """
    Feature dimension of the banner lookup.

    Attributes:
        id: Caller-supplied primary key
        created_at: When the feature was first referenced
        used_at: Last-used timestamp
    """

    __tablename__ = "feature"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    used_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<Feature(id={self.id})>"


class Tag(Base):
    """
    Tag dimension of the banner lookup.

    Attributes:
        id: Caller-supplied primary key
        created_at: When the tag was first referenced
        used_at: Last-used timestamp
    """

    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    used_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id})>"
