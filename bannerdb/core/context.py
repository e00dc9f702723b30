#!/usr/bin/env python3
"""
context.py
--------------------
Request-scoped deadline and cancellation handle.

A RequestContext travels with one call into the access layer. Managers
call ``check()`` before each statement; an expired or cancelled context
raises OperationCancelledError, which rolls back the surrounding
transaction.

Usage:
    ctx = RequestContext(timeout=2.0)
    db.create_banner({"content": "..."}, feature_id=1, tag_ids=[10], ctx=ctx)

    # From another thread
    ctx.cancel()
"""
from __future__ import annotations

import threading
import time
from typing import Optional

from .exceptions import OperationCancelledError


class RequestContext:
    """
    Deadline and cancellation flag for a single request.

    Attributes:
        deadline: Monotonic clock value after which the context is expired,
            or None for no deadline
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        """
        Args:
            timeout: Seconds from now until the context expires (None = never)
        """
        self.deadline: Optional[float] = (
            time.monotonic() + timeout if timeout is not None else None
        )
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "RequestContext":
        """Return a context that never expires."""
        return cls()

    def cancel(self) -> None:
        """Mark the context as cancelled."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (never negative), or None."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self, operation: str) -> None:
        """
        Raise if the context is cancelled or past its deadline.

        Args:
            operation: Name of the step about to run, used in the message

        Raises:
            OperationCancelledError: If the context is no longer live
        """
        if self.cancelled:
            raise OperationCancelledError(f"{operation}: context cancelled")
        if self.expired:
            raise OperationCancelledError(f"{operation}: deadline exceeded")
