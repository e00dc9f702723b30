#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for bannerdb operations.

Each BannerLogger owns two rotating files in its log directory:
    <component>.log   every operation, debug trace and warning
    errors.log        failures with their context and traceback

Console output goes to stderr at a level chosen by the deployment
environment. Without a log directory the package logs nothing; callers
go through ``safe_logger`` so they never test for None.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

# --- Local imports ---
from .exceptions import NotFoundError


# Console verbosity per deployment environment
CONSOLE_LEVELS: Dict[str, int] = {
    "local": logging.DEBUG,
    "dev": logging.INFO,
    "prod": logging.WARNING,
}

FILE_FORMAT = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
CONSOLE_FORMAT = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
)


def format_cli_error(error: Exception, show_traceback: bool = False) -> str:
    """
    Render an exception as the one-line message printed by the CLI.

    Examples:
        >>> format_cli_error(DatabaseError("Connection failed"))
        '❌ DatabaseError: Connection failed'
    """
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        trace = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
        return f"{message}\n\n{trace}"
    return message


class BannerLogger:
    """
    Rotating file logger for one bannerdb component.

    Attributes:
        log_dir: Directory for log files
        component_name: Component label, also the main log file's stem
        console_level: Level of the stderr handler
        main_logger: Operations, debug traces and warnings
        error_logger: Failures only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "bannerdb",
        env: str = "prod",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        """
        Args:
            log_dir: Directory for log files; created if missing
            component_name: Component label (e.g. 'database', 'cli')
            env: Deployment environment; selects console verbosity
            max_bytes: Size at which a log file rotates (default: 10MB)
            backup_count: Rotated files kept per log (default: 5)
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.console_level = CONSOLE_LEVELS.get(env, logging.WARNING)
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)
        prefix = f"bannerdb.{component_name}"
        self.main_logger = self._build_logger(
            f"{prefix}.operations", f"{component_name}.log", logging.DEBUG
        )
        self.error_logger = self._build_logger(
            f"{prefix}.errors", "errors.log", logging.ERROR
        )

        console_handler = logging.StreamHandler()
        console_handler.setLevel(self.console_level)
        console_handler.setFormatter(CONSOLE_FORMAT)
        self.main_logger.addHandler(console_handler)

    def _build_logger(self, name: str, filename: str, level: int) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        # Reset only this logger's handlers (not global logger state)
        logger.handlers = []

        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(FILE_FORMAT)
        logger.addHandler(handler)
        return logger

    def close(self) -> None:
        """Flush and detach all handlers owned by this logger."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def _emit(
        self, level: int, label: str, message: str, details: Optional[Dict[str, Any]]
    ) -> None:
        line = f"{label} - {message}"
        if details:
            line = f"{line}: {json.dumps(details, default=str)}"
        self.main_logger.log(level, line, stacklevel=3)

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a completed store operation with its JSON details."""
        self._emit(logging.INFO, "OPERATION", operation, details or {})

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.DEBUG, "DEBUG", message, details)

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self._emit(logging.WARNING, "WARNING", message, details)

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write a failure to errors.log.

        Args:
            error: Exception that occurred; its traceback is attached
            context: Operation name, ids and filters in effect
        """
        line = f"ERROR - {type(error).__name__}: {error}"
        if context:
            line += " | " + ", ".join(f"{k}={v}" for k, v in context.items())
        self.error_logger.error(line, exc_info=error)

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log a command failure and return the message shown to the user.

        Args:
            error: Exception raised by the command
            context: Where the error occurred; defaults to ``source=cli``
            show_traceback: Append the traceback to the returned message
        """
        self.log_error(error, context or {"source": "cli"})
        return format_cli_error(error, show_traceback)


class NullLogger:
    """Stand-in for BannerLogger when file logging is off."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return format_cli_error(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[BannerLogger]) -> BannerLogger:
    """
    Return the provided logger, or a shared NullLogger when it is None.

    Usage:
        safe_logger(self.logger).log_debug("Reusing tag", {"id": 3})
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Report a failed CLI command and exit.

    Logs the error with its context, prints a one-line message on stderr
    and exits with code 2 for not-found conditions, 1 for anything else.

    Args:
        ctx: Click context carrying ``logger`` and ``verbose``
        error: Exception raised by the command
        operation: Command name (e.g. 'create', 'delete')
        additional_context: Ids and filters the command ran with
    """
    logger: Optional[BannerLogger] = ctx.obj.get("logger")
    verbose: bool = ctx.obj.get("verbose", False)

    context = {"operation": operation}
    if additional_context:
        context.update(additional_context)

    message = safe_logger(logger).log_cli_error(error, context, show_traceback=verbose)
    click.echo(message, err=True)
    sys.exit(2 if isinstance(error, NotFoundError) else 1)
