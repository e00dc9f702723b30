"""
Banner managers.

Each manager works inside one caller-owned session:
    - BannerResolver: read path
    - BannerManager: create and update
    - CascadeDeleter: delete
"""
from .base_manager import BaseManager
from .banner_manager import BannerManager
from .banner_resolver import BannerResolver
from .cascade_deleter import CascadeDeleter

__all__ = [
    "BaseManager",
    "BannerManager",
    "BannerResolver",
    "CascadeDeleter",
]
