#!/usr/bin/env python3
"""
query_builder.py
----------------
Composable read query for banners.

The read path has up to eight shapes (feature filter on/off, tag filter
on/off, page window on/off). Instead of enumerating them, BannerQuery
starts from one ``select`` and folds in each optional predicate; a zero
value leaves the statement unchanged.

Every statement is ordered by ``banner.id`` ascending so page windows are
stable and single-row lookups pick the lowest matching id.

Examples:
    >>> stmt = BannerQuery().with_feature(1).with_tag(10).paginate(5, 0).build()
    >>> banners = session.scalars(stmt).all()

    >>> stmt = BannerQuery.for_content().with_feature(1).with_tag(10).paginate(1).build()
    >>> content = session.scalar(stmt)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional

# --- Third party imports ---
from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

# --- Local imports ---
from .models import Banner, banner_feature, banner_tag


class BannerQuery:
    """
    Builder for banner SELECT statements.

    Attributes:
        statement: The statement built so far
    """

    def __init__(self, statement: Optional[Select] = None, eager: bool = True) -> None:
        """
        Args:
            statement: Base statement (defaults to ``select(Banner)``)
            eager: Preload feature and tags when building
        """
        base = statement if statement is not None else select(Banner)
        self.statement: Select = base.order_by(Banner.id.asc())
        self._eager = eager

    @classmethod
    def for_content(cls) -> "BannerQuery":
        """Builder that selects only ``banner.content``."""
        return cls(select(Banner.content), eager=False)

    def with_feature(self, feature_id: int) -> "BannerQuery":
        """Restrict to banners linked to ``feature_id`` (0 = no filter)."""
        if feature_id:
            self.statement = self.statement.join(
                banner_feature, banner_feature.c.banner_id == Banner.id
            ).where(banner_feature.c.feature_id == feature_id)
        return self

    def with_tag(self, tag_id: int) -> "BannerQuery":
        """Restrict to banners linked to ``tag_id`` (0 = no filter)."""
        if tag_id:
            self.statement = self.statement.join(
                banner_tag, banner_tag.c.banner_id == Banner.id
            ).where(banner_tag.c.tag_id == tag_id)
        return self

    def paginate(self, limit: int, offset: int = 0) -> "BannerQuery":
        """Apply a page window (limit 0 = unbounded, offset ignored)."""
        if limit:
            self.statement = self.statement.limit(limit)
            if offset:
                self.statement = self.statement.offset(offset)
        return self

    def build(self) -> Select:
        """Return the final statement."""
        if self._eager:
            return self.statement.options(
                selectinload(Banner.feature), selectinload(Banner.tags)
            ).execution_options(populate_existing=True)
        return self.statement
