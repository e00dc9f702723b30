#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the bannerdb project.

Exception Hierarchy:
    Exception (built-in)
    ├── NotFoundError - A lookup or affected-row count proved absence
    │   ├── BannerNotFoundError - The banner row itself is missing
    │   ├── BannerTagRelationNotFoundError - No banner_tag rows for a banner
    │   └── BannerFeatureRelationNotFoundError - No banner_feature row
    ├── DatabaseError - Infrastructure failures from the store
    │   └── OperationCancelledError - Deadline exceeded or context cancelled
    ├── ValidationError - Bad identifiers, pagination or payloads
    └── ConfigError - Unreadable or invalid configuration

NotFoundError does not derive from DatabaseError, so ``except DatabaseError``
never catches a not-found condition.

Usage:
    from bannerdb.core.exceptions import BannerNotFoundError, DatabaseError

    try:
        content = db.resolve_content(feature_id, tag_id)
    except BannerNotFoundError:
        ...  # 404
    except DatabaseError as e:
        logger.error(f"Database operation failed: {e}")  # 500
"""


class NotFoundError(Exception):
    """
    Base exception for "target does not exist" conditions.

    Raised when a lookup returns no rows or when a write statement affects
    zero rows where at least one was required.
    """

    pass


class BannerNotFoundError(NotFoundError):
    """
    Exception raised when the banner row is absent.

    Examples:
        >>> raise BannerNotFoundError("banner not found: id=42")
    """

    pass


class BannerTagRelationNotFoundError(NotFoundError):
    """Exception raised when a banner has no banner_tag rows."""

    pass


class BannerFeatureRelationNotFoundError(NotFoundError):
    """Exception raised when a banner has no banner_feature row."""

    pass


class DatabaseError(Exception):
    """
    Base exception for infrastructure errors.

    Raised when database operations fail due to connection issues,
    statement errors, integrity violations or decode failures. The message
    is prefixed with the name of the failing operation and the driver
    exception is chained as ``__cause__``.

    Examples:
        >>> raise DatabaseError("create_banner: Database operation failed: ...")
    """

    pass


class OperationCancelledError(DatabaseError):
    """
    Exception raised when a request context expires or is cancelled.

    The transaction in progress is rolled back before this propagates.
    """

    pass


class ValidationError(Exception):
    """
    Exception for input validation failures.

    Examples:
        >>> raise ValidationError("feature_id must be a positive integer")
        >>> raise ValidationError("Required field 'content' missing or empty")
    """

    pass


class ConfigError(Exception):
    """
    Exception for configuration loading failures.

    Examples:
        >>> raise ConfigError("Config file does not exist: config/local.yaml")
        >>> raise ConfigError("DB_PASSWORD must come from the environment")
    """

    pass
