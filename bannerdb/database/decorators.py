#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators for database operations.
"""
from functools import wraps
from typing import Callable
from datetime import datetime

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from bannerdb.core.exceptions import DatabaseError, OperationCancelledError

# PostgreSQL SQLSTATE for a statement cancelled by statement_timeout
QUERY_CANCELED = "57014"


def log_database_operation(operation_name: str):
    """
    Decorator to log database operations with timing and context.

    Args:
        operation_name: Name of the operation being logged

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            start_time = datetime.now()
            operation_id = f"{operation_name}_{start_time.strftime('%Y%m%d_%H%M%S_%f')}"

            if hasattr(self, "logger") and self.logger:
                self.logger.log_debug(
                    f"Starting {operation_name}",
                    {
                        "operation_id": operation_id,
                        "args_count": len(args),
                        "kwargs_keys": list(kwargs.keys()),
                    },
                )

            try:
                result = function(self, *args, **kwargs)

                duration = (datetime.now() - start_time).total_seconds()
                if hasattr(self, "logger") and self.logger:
                    self.logger.log_operation(
                        f"{operation_name}_completed",
                        {
                            "operation_id": operation_id,
                            "duration_seconds": duration,
                            "success": True,
                        },
                    )

                return result

            except Exception as e:
                duration = (datetime.now() - start_time).total_seconds()
                if hasattr(self, "logger") and self.logger:
                    self.logger.log_error(
                        e,
                        {
                            "operation": operation_name,
                            "operation_id": operation_id,
                            "duration_seconds": duration,
                        },
                    )
                raise

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Decorator to translate SQLAlchemy errors into DatabaseError.

    The wrapped function's name prefixes the message and the driver error
    is chained as ``__cause__``. Domain errors (not-found, validation,
    cancellation) propagate unchanged.

    Args:
        function: Function to wrap

    Returns:
        Wrapped function with error handling
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        operation = function.__name__
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            raise DatabaseError(f"{operation}: data integrity violation: {e}") from e
        except OperationalError as e:
            if getattr(e.orig, "sqlstate", None) == QUERY_CANCELED:
                raise OperationCancelledError(
                    f"{operation}: statement timeout exceeded"
                ) from e
            raise DatabaseError(f"{operation}: database operation failed: {e}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"{operation}: database operation failed: {e}") from e

    return wrapper
