"""
Tests for RequestContext deadlines and cancellation.
"""
import threading
import pytest

from bannerdb.core.context import RequestContext
from bannerdb.core.exceptions import DatabaseError, OperationCancelledError


class TestRequestContext:
    """Tests for RequestContext state."""

    def test_background_never_expires(self):
        """A background context has no deadline."""
        ctx = RequestContext.background()
        assert ctx.deadline is None
        assert ctx.remaining() is None
        assert ctx.expired is False
        ctx.check("noop")

    def test_zero_timeout_is_expired(self):
        """A zero timeout expires immediately."""
        ctx = RequestContext(timeout=0)
        assert ctx.expired is True
        assert ctx.remaining() == 0.0

    def test_remaining_is_bounded_by_timeout(self):
        """remaining() never exceeds the requested timeout."""
        ctx = RequestContext(timeout=30)
        assert 0 < ctx.remaining() <= 30

    def test_check_raises_when_expired(self):
        """check() raises with a deadline message."""
        ctx = RequestContext(timeout=0)
        with pytest.raises(OperationCancelledError, match="deadline exceeded"):
            ctx.check("insert_banner")

    def test_check_raises_when_cancelled(self):
        """check() raises after cancel()."""
        ctx = RequestContext(timeout=30)
        ctx.cancel()
        assert ctx.cancelled is True
        with pytest.raises(OperationCancelledError, match="insert_banner: context cancelled"):
            ctx.check("insert_banner")

    def test_cancel_from_other_thread(self):
        """Cancellation is visible across threads."""
        ctx = RequestContext()
        worker = threading.Thread(target=ctx.cancel)
        worker.start()
        worker.join()
        assert ctx.cancelled is True

    def test_cancellation_is_a_database_error(self):
        """OperationCancelledError is caught by except DatabaseError."""
        assert issubclass(OperationCancelledError, DatabaseError)
