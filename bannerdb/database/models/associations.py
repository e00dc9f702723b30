"""
Association Tables
-------------------

Junction tables linking banners to features and tags.

- banner_feature: at most one feature per banner (banner_id is the key)
- banner_tag: any number of tags per banner

These are pure association tables with no additional metadata. Rows are
removed explicitly by the cascade deleter; the ON DELETE clauses only
guard against orphans left by manual edits.
"""
# --- Third party imports ---
from sqlalchemy import Column, ForeignKey, Table

# --- Local imports ---
from .base import Base, IdType

banner_feature = Table(
    "banner_feature",
    Base.metadata,
    Column(
        "banner_id",
        IdType,
        ForeignKey("banner.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "feature_id",
        IdType,
        ForeignKey("feature.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
)

banner_tag = Table(
    "banner_tag",
    Base.metadata,
    Column(
        "banner_id",
        IdType,
        ForeignKey("banner.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        IdType,
        ForeignKey("tag.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)
