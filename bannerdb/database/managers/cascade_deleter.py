#!/usr/bin/env python3
"""
cascade_deleter.py
--------------------
Removes a banner together with its junction rows.

Rows go in dependency order: banner_tag, banner_feature, then banner.
Each step checks its affected-row count. A banner without tags or
without a feature is still deletable, so the two junction not-found
conditions are logged and absorbed; a missing banner is an error.
Feature and tag rows are never removed.
"""
from typing import Type

from sqlalchemy import Table, delete

from bannerdb.core.exceptions import (
    BannerFeatureRelationNotFoundError,
    BannerNotFoundError,
    BannerTagRelationNotFoundError,
    NotFoundError,
)
from bannerdb.core.logging_manager import safe_logger
from bannerdb.core.validators import DataValidator
from bannerdb.database.decorators import handle_db_errors, log_database_operation
from bannerdb.database.models import Banner, banner_feature, banner_tag
from .base_manager import BaseManager


class CascadeDeleter(BaseManager):
    """Deletes banners and their associations in one transaction."""

    @handle_db_errors
    @log_database_operation("delete_banner")
    def delete(self, banner_id: int) -> None:
        """
        Delete a banner and its feature and tag links.

        Args:
            banner_id: Banner to delete

        Raises:
            ValidationError: If banner_id is not a positive integer
            BannerNotFoundError: If no banner has the given id
            DatabaseError: If a statement fails
        """
        banner_id = DataValidator.validate_id(banner_id, "banner_id")

        for table, error_class in (
            (banner_tag, BannerTagRelationNotFoundError),
            (banner_feature, BannerFeatureRelationNotFoundError),
        ):
            try:
                self._delete_links(table, banner_id, error_class)
            except (BannerTagRelationNotFoundError, BannerFeatureRelationNotFoundError) as e:
                safe_logger(self.logger).log_debug(str(e), {"banner_id": banner_id})

        self._checkpoint("delete_banner")
        result = self.session.execute(
            delete(Banner.__table__).where(Banner.__table__.c.id == banner_id)
        )
        if result.rowcount == 0:
            raise BannerNotFoundError(f"Banner not found: {banner_id}")

    def _delete_links(
        self, table: Table, banner_id: int, error_class: Type[NotFoundError]
    ) -> int:
        self._checkpoint(f"delete_{table.name}")
        result = self.session.execute(delete(table).where(table.c.banner_id == banner_id))
        if result.rowcount == 0:
            raise error_class(f"No {table.name} rows for banner {banner_id}")
        return result.rowcount
