#!/usr/bin/env python3
"""
Banner Database Package
-----------------------
SQLAlchemy access layer for banners, features and tags.

Modules:
- manager: BannerDB facade (engine, sessions, public operations)
- managers: read, write and delete logic per transaction
- models: ORM models and junction tables
- query_builder: composable read statements
- decorators: logging and error translation
"""

from .manager import BannerDB
from bannerdb.core.context import RequestContext
from bannerdb.core.exceptions import (
    BannerFeatureRelationNotFoundError,
    BannerNotFoundError,
    BannerTagRelationNotFoundError,
    DatabaseError,
    NotFoundError,
    OperationCancelledError,
    ValidationError,
)
from .decorators import handle_db_errors, log_database_operation

__all__ = [
    # Main manager
    "BannerDB",
    "RequestContext",
    # Exceptions
    "NotFoundError",
    "BannerNotFoundError",
    "BannerTagRelationNotFoundError",
    "BannerFeatureRelationNotFoundError",
    "DatabaseError",
    "OperationCancelledError",
    "ValidationError",
    # Decorators
    "log_database_operation",
    "handle_db_errors",
]
