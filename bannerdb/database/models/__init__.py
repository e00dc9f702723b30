"""
Database Models Package
------------------------

SQLAlchemy ORM models for the banner database.

- base: Base class and shared column helpers
- associations: banner_feature and banner_tag junction tables
- entities: Banner, Feature, Tag

Usage:
    from bannerdb.database.models import Banner, Feature, Tag
"""
# Base classes
from .base import Base

# Association tables
from .associations import banner_feature, banner_tag

# Entity models
from .entities import Banner, Feature, Tag

__all__ = [
    "Base",
    "banner_feature",
    "banner_tag",
    "Banner",
    "Feature",
    "Tag",
]
