#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing the shared primitives of the banner managers.

Key Features:
    - Conflict-aware get-or-create for banner, feature and tag rows
    - Insert-if-absent for junction rows
    - Request context checkpoints before every statement

Both insert helpers run the INSERT inside a SAVEPOINT. When a concurrent
transaction wins the race the savepoint is rolled back, the outer
transaction stays usable and the row written by the winner is re-read.

Usage:
    Subclass BaseManager and call the helpers from public methods:

    class BannerManager(BaseManager):
        def create(self, banner, feature_id, tag_ids) -> int:
            feature = self._get_or_create(Feature, {"id": feature_id})
            ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Dict, Optional, Protocol, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import Table, and_, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Mapped, Session

# --- Local imports ---
from bannerdb.core.context import RequestContext
from bannerdb.core.exceptions import DatabaseError
from bannerdb.core.logging_manager import BannerLogger, safe_logger


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)


class BaseManager(ABC):
    """
    Abstract base for managers working inside one transaction.

    Attributes:
        session: SQLAlchemy session owned by the caller's transaction
        logger: Optional logger for operation tracking
        ctx: Optional request context checked before each statement
    """

    def __init__(
        self,
        session: Session,
        logger: Optional[BannerLogger] = None,
        ctx: Optional[RequestContext] = None,
    ):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
            ctx: Optional deadline / cancellation handle
        """
        self.session = session
        self.logger = logger
        self.ctx = ctx

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _checkpoint(self, step: str) -> None:
        """Raise OperationCancelledError if the request context is no longer live."""
        if self.ctx is not None:
            self.ctx.check(step)

    def _get_or_create(
        self,
        model_class: Type[T],
        lookup_fields: Dict[str, Any],
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> T:
        """
        Get an existing row or create it if it doesn't exist.

        Handles the race where another transaction creates the row between
        our lookup and our insert.

        Args:
            model_class: ORM model class to query or create
            lookup_fields: Dictionary of field_name: value to filter/create
            extra_fields: Additional fields for new object creation only

        Returns:
            ORM instance of the model class

        Raises:
            DatabaseError: If the insert fails and no row can be re-read
        """
        name = model_class.__name__.lower()

        self._checkpoint(f"get_{name}")
        obj = self._find(model_class, lookup_fields)
        if obj is not None:
            safe_logger(self.logger).log_debug(f"Reusing {name}", lookup_fields)
            return obj

        fields = lookup_fields.copy()
        if extra_fields:
            fields.update(extra_fields)

        self._checkpoint(f"insert_{name}")
        try:
            with self.session.begin_nested():
                obj = model_class(**fields)
                self.session.add(obj)
                self.session.flush()
        except IntegrityError:
            obj = self._find(model_class, lookup_fields)
            if obj is None:
                raise
            safe_logger(self.logger).log_debug(
                f"Concurrent insert of {name}, reusing", lookup_fields
            )
            return obj

        safe_logger(self.logger).log_debug(f"Created {name}", {"id": obj.id})
        return obj

    def _find(self, model_class: Type[T], lookup_fields: Dict[str, Any]) -> Optional[T]:
        return self.session.scalars(
            select(model_class).filter_by(**lookup_fields)
        ).first()

    def _link_if_absent(self, table: Table, values: Dict[str, Any]) -> bool:
        """
        Insert a junction row unless an identical row already exists.

        Args:
            table: Association table
            values: Column values of the row

        Returns:
            True if a row was inserted, False if it already existed

        Raises:
            DatabaseError: If the insert conflicts with a different row
        """
        self._checkpoint(f"get_{table.name}")
        if self._row_exists(table, values):
            return False

        self._checkpoint(f"insert_{table.name}")
        try:
            with self.session.begin_nested():
                self.session.execute(insert(table).values(**values))
        except IntegrityError as e:
            if self._row_exists(table, values):
                return False
            raise DatabaseError(
                f"Conflicting {table.name} row for {values}"
            ) from e
        return True

    def _row_exists(self, table: Table, values: Dict[str, Any]) -> bool:
        condition = and_(*(table.c[column] == value for column, value in values.items()))
        return self.session.execute(select(table).where(condition)).first() is not None
