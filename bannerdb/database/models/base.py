"""
Base Classes
------------

Foundational ORM classes for the banner database.

Classes:
    - Base: Declarative base for all SQLAlchemy models

Column types:
    - IdType: 64-bit identifier that still maps to SQLite's rowid alias
    - utcnow: Default factory for timezone-aware timestamps
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone

# --- Third party ---
from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase


# SQLite only autoincrements an INTEGER PRIMARY KEY column
IdType = BigInteger().with_variant(Integer, "sqlite")


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation.
    """

    pass
