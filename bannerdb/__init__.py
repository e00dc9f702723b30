"""
bannerdb
========

Relational access layer for banners resolved by feature and tag.

Banners are opaque content payloads. Each banner is linked to at most one
feature and to any number of tags; callers look banners up through a
(feature, tag) pair or list them under optional filters and a page window.

Main Components:
    - core: Configuration, logging, validation, request context, exceptions
    - database: SQLAlchemy models, managers and the BannerDB facade
    - database.cli: Command-line interface

Example Usage:
    >>> from bannerdb import BannerDB
    >>> db = BannerDB("sqlite:///data/banner.db")
    >>> db.initialize_schema()
    >>> banner_id = db.create_banner({"content": "hello"}, feature_id=1, tag_ids=[10])
    >>> db.resolve_content(1, 10)
    'hello'
"""
from bannerdb.database import BannerDB

__version__ = "1.0.0"

__all__ = ["BannerDB", "__version__"]
