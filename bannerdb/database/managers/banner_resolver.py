#!/usr/bin/env python3
"""
banner_resolver.py
--------------------
Read path for banners.

Two lookups:
    - resolve_content: the content of one banner for a (feature, tag) pair
    - resolve_banners: banners under optional feature/tag filters and an
      optional page window, each with its complete tag-id set

Tag sets are loaded by a second query keyed on the returned banner ids,
so a banner matched through tag 10 still reports every tag it carries.
"""
from typing import List, Tuple

from bannerdb.core.exceptions import BannerNotFoundError
from bannerdb.core.validators import DataValidator
from bannerdb.database.decorators import handle_db_errors, log_database_operation
from bannerdb.database.models import Banner
from bannerdb.database.query_builder import BannerQuery
from .base_manager import BaseManager


class BannerResolver(BaseManager):
    """Resolves banners by feature, tag and page window."""

    @handle_db_errors
    @log_database_operation("resolve_content")
    def resolve_content(self, feature_id: int, tag_id: int) -> str:
        """
        Get the content of the banner linked to both ``feature_id`` and ``tag_id``.

        When several banners match, the one with the lowest id wins.

        Args:
            feature_id: Feature identifier (positive)
            tag_id: Tag identifier (positive)

        Returns:
            Banner content

        Raises:
            ValidationError: If either id is not a positive integer
            BannerNotFoundError: If no banner matches the pair
        """
        feature_id = DataValidator.validate_id(feature_id, "feature_id")
        tag_id = DataValidator.validate_id(tag_id, "tag_id")

        stmt = (
            BannerQuery.for_content()
            .with_feature(feature_id)
            .with_tag(tag_id)
            .paginate(1)
            .build()
        )

        self._checkpoint("resolve_content")
        content = self.session.scalar(stmt)
        if content is None:
            raise BannerNotFoundError(
                f"No banner for feature_id={feature_id}, tag_id={tag_id}"
            )
        return content

    @handle_db_errors
    @log_database_operation("resolve_banners")
    def resolve_banners(
        self,
        feature_id: int = 0,
        tag_id: int = 0,
        limit: int = 0,
        offset: int = 0,
    ) -> Tuple[List[Banner], List[List[int]]]:
        """
        List banners matching the optional filters.

        Args:
            feature_id: Feature filter (0 = any)
            tag_id: Tag filter (0 = any)
            limit: Page size (0 = unbounded; offset is then ignored)
            offset: Number of matching banners to skip

        Returns:
            (banners, tag_ids) where ``tag_ids[i]`` lists every tag of
            ``banners[i]`` in ascending order

        Raises:
            ValidationError: If any argument is negative
            BannerNotFoundError: If nothing matches
        """
        feature_id = DataValidator.validate_optional_id(feature_id, "feature_id")
        tag_id = DataValidator.validate_optional_id(tag_id, "tag_id")
        limit, offset = DataValidator.validate_page(limit, offset)

        stmt = (
            BannerQuery()
            .with_feature(feature_id)
            .with_tag(tag_id)
            .paginate(limit, offset)
            .build()
        )

        # Feature and tags are loaded by selectin queries during this call
        self._checkpoint("resolve_banners")
        banners = list(self.session.scalars(stmt).all())
        if not banners:
            raise BannerNotFoundError(
                "No banners for "
                f"feature_id={feature_id}, tag_id={tag_id}, "
                f"limit={limit}, offset={offset}"
            )

        tag_ids = [banner.tag_ids for banner in banners]

        if self.logger:
            self.logger.log_debug(
                "Resolved banners",
                {"count": len(banners), "ids": [banner.id for banner in banners]},
            )
        return banners, tag_ids
