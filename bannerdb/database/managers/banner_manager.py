#!/usr/bin/env python3
"""
banner_manager.py
--------------------
Write path for banners: create and update together with their feature
and tag associations.

Both operations run inside the caller's transaction and never commit;
any exception raised here rolls back everything written so far.

Key Features:
    - Content is the natural key: creating identical content reuses the row
    - Features and tags are created lazily on first reference
    - A banner has at most one feature; a new one replaces the old one
    - Update replaces the whole tag set

Usage:
    with db.session_scope() as session:
        mgr = BannerManager(session, logger)
        banner_id = mgr.create({"content": "..."}, feature_id=1, tag_ids=[10, 20])
        mgr.update({"id": banner_id, "content": "..."}, feature_id=2, tag_ids=[30])
"""
from typing import Any, Dict, Optional, Sequence

from sqlalchemy import delete, select, update

from bannerdb.core.exceptions import BannerNotFoundError
from bannerdb.core.validators import DataValidator
from bannerdb.database.decorators import handle_db_errors, log_database_operation
from bannerdb.database.models import Banner, Feature, Tag, banner_feature, banner_tag
from bannerdb.database.models.base import utcnow
from .base_manager import BaseManager


class BannerManager(BaseManager):
    """Creates and updates banners with their feature and tag links."""

    # -------------------------------------------------------------------------
    # Core Operations
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_banner")
    def create(
        self,
        banner: Dict[str, Any],
        feature_id: int,
        tag_ids: Sequence[int],
    ) -> int:
        """
        Create a banner, or reuse the one with identical content, and link it.

        Args:
            banner: Dictionary with keys:
                - content: Banner payload (required)
                - is_active: Active flag (default True)
            feature_id: Feature to associate (created if absent)
            tag_ids: Tags to associate (each created if absent)

        Returns:
            Id of the new or reused banner

        Raises:
            ValidationError: If content is missing or an id is invalid
            DatabaseError: If a statement fails

        Notes:
            - Reuse is silent; existing tag links are kept
            - If the reused banner points at another feature it is retargeted
        """
        content, is_active = self._validate_payload(banner)
        feature_id = DataValidator.validate_id(feature_id, "feature_id")
        tags = DataValidator.normalize_id_list(tag_ids, "tag_ids")
        now = utcnow()

        banner_obj = self._get_or_create(
            Banner,
            {"content": content},
            {"is_active": is_active, "created_at": now, "updated_at": now},
        )
        self._ensure_feature(feature_id, now)
        self._attach_feature(banner_obj.id, feature_id)

        for tag_id in tags:
            self._ensure_tag(tag_id, now)
            self._link_if_absent(banner_tag, {"banner_id": banner_obj.id, "tag_id": tag_id})

        return banner_obj.id

    @handle_db_errors
    @log_database_operation("update_banner")
    def update(
        self,
        banner: Dict[str, Any],
        feature_id: int,
        tag_ids: Sequence[int],
    ) -> None:
        """
        Overwrite a banner, its feature link and its whole tag set.

        Args:
            banner: Dictionary with keys:
                - id: Banner to update (required)
                - content: New payload (required)
                - is_active: Active flag (default True)
            feature_id: Feature that replaces the current one
            tag_ids: Tags that replace the current set

        Raises:
            ValidationError: If a field is missing or an id is invalid
            BannerNotFoundError: If no banner has the given id
            DatabaseError: If a statement fails
        """
        DataValidator.validate_required_fields(banner, ["id"])
        banner_id = DataValidator.validate_id(banner["id"], "id")
        content, is_active = self._validate_payload(banner)
        feature_id = DataValidator.validate_id(feature_id, "feature_id")
        tags = DataValidator.normalize_id_list(tag_ids, "tag_ids")
        now = utcnow()

        self._checkpoint("update_banner")
        result = self.session.execute(
            update(Banner)
            .where(Banner.id == banner_id)
            .values(content=content, is_active=is_active, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise BannerNotFoundError(f"Banner not found: {banner_id}")

        self._ensure_feature(feature_id, now)
        self._replace_feature(banner_id, feature_id)

        self._checkpoint("clear_banner_tags")
        self.session.execute(delete(banner_tag).where(banner_tag.c.banner_id == banner_id))

        for tag_id in tags:
            self._ensure_tag(tag_id, now)
            self._link_if_absent(banner_tag, {"banner_id": banner_id, "tag_id": tag_id})

        if self.logger:
            self.logger.log_debug(
                f"Updated banner {banner_id}",
                {"feature_id": feature_id, "tag_ids": tags},
            )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate_payload(banner: Dict[str, Any]) -> tuple:
        DataValidator.validate_required_fields(banner, ["content"])
        is_active = DataValidator.normalize_bool(banner.get("is_active", True))
        return str(banner["content"]), True if is_active is None else is_active

    def _ensure_feature(self, feature_id: int, now) -> Feature:
        return self._get_or_create(
            Feature, {"id": feature_id}, {"created_at": now, "used_at": now}
        )

    def _ensure_tag(self, tag_id: int, now) -> Tag:
        return self._get_or_create(
            Tag, {"id": tag_id}, {"created_at": now, "used_at": now}
        )

    def _current_feature(self, banner_id: int) -> Optional[int]:
        self._checkpoint("get_banner_feature")
        return self.session.scalar(
            select(banner_feature.c.feature_id).where(
                banner_feature.c.banner_id == banner_id
            )
        )

    def _attach_feature(self, banner_id: int, feature_id: int) -> None:
        """Link a feature during create; retarget if another one is linked."""
        current = self._current_feature(banner_id)
        if current is None:
            self._link_if_absent(
                banner_feature, {"banner_id": banner_id, "feature_id": feature_id}
            )
        elif current != feature_id:
            if self.logger:
                self.logger.log_warning(
                    f"Banner {banner_id} moved to another feature",
                    {"from_feature_id": current, "to_feature_id": feature_id},
                )
            self._replace_feature(banner_id, feature_id)

    def _replace_feature(self, banner_id: int, feature_id: int) -> None:
        """Point the banner's feature link at ``feature_id``, inserting if absent."""
        self._checkpoint("update_banner_feature")
        result = self.session.execute(
            update(banner_feature)
            .where(banner_feature.c.banner_id == banner_id)
            .values(feature_id=feature_id)
        )
        if result.rowcount == 0:
            self._link_if_absent(
                banner_feature, {"banner_id": banner_id, "feature_id": feature_id}
            )
