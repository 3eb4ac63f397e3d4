#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for the blog engine: imports, database access and site requests.

A BlogLogger writes three rotating files into its log directory:
    <component>.log   operations, queries, imports (DEBUG and up)
    requests.log      one line per dispatched request and per not-found
    errors.log        exceptions with context and traceback

Warnings are echoed to the console as well. Every message is a label,
a text and an optional JSON details object, e.g.::

    QUERY - list_entries_by_month: {"seconds": 0.0008, "rows": 2}
    NOT FOUND - no posted entry with slug: {"slug": "monads"}

Code that may run without logging configured takes ``safe_logger(logger)``,
which substitutes a NullLogger for None.
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
from typing import Any, Dict, Iterable, Optional

# --- Third party imports ---
import click

Details = Optional[Dict[str, Any]]

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
REQUEST_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def format_message(label: str, message: str, details: Details = None) -> str:
    """``LABEL - message`` with the details appended as JSON when given."""
    if details:
        return f"{label} - {message}: {json.dumps(details, default=str)}"
    return f"{label} - {message}"


def format_cli_error(error: Exception, show_traceback: bool = False) -> str:
    """One-line error message for the terminal."""
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        return f"{message}\n\n{traceback.format_exc()}"
    return message


class BlogLogger:
    """
    File logger shared by the CLI, the database layer and the site.

    Attributes:
        log_dir: Directory for log files
        component_name: Prefix of the logger names and of the main log file
        main_logger: Operations, queries and warnings
        request_logger: Request dispatch and not-found redirects
        error_logger: Errors only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "blog",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        """
        Create the log directory and attach the handlers.

        Args:
            log_dir: Directory for log files
            component_name: Name for the component loggers
                (e.g. 'database', 'import', 'site')
            max_bytes: Maximum log file size before rotation (default: 10MB)
            backup_count: Number of backup files to keep (default: 5)
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self._setup_loggers()

    def _setup_loggers(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._reset(f"{self.component_name}.operations", logging.DEBUG)
        self._add_file(self.main_logger, f"{self.component_name}.log", logging.DEBUG, FILE_FORMAT)

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

        self.request_logger = self._reset(f"{self.component_name}.requests", logging.DEBUG)
        self._add_file(self.request_logger, "requests.log", logging.DEBUG, REQUEST_FORMAT)

        self.error_logger = self._reset(f"{self.component_name}.errors", logging.ERROR)
        self._add_file(self.error_logger, "errors.log", logging.ERROR, FILE_FORMAT)

    @staticmethod
    def _reset(name: str, level: int) -> logging.Logger:
        """Named logger with its own handlers cleared; global state is left alone."""
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers = []
        logger.propagate = False
        return logger

    def _add_file(self, logger: logging.Logger, filename: str, level: int, fmt: str) -> None:
        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    # -------------------------------------------------------------------------
    # General messages
    # -------------------------------------------------------------------------

    def log_operation(self, operation: str, details: Details = None) -> None:
        """Record a completed operation (import, init, write)."""
        self.main_logger.info(format_message("OPERATION", operation, details or {}))

    def log_debug(self, message: str, details: Details = None) -> None:
        self.main_logger.debug(format_message("DEBUG", message, details))

    def log_info(self, message: str, details: Details = None) -> None:
        self.main_logger.info(format_message("INFO", message, details))

    def log_warning(self, message: str, details: Details = None) -> None:
        self.main_logger.warning(format_message("WARNING", message, details))

    def log_error(self, error: Exception, context: Details = None) -> None:
        """
        Log an exception with its context and the current traceback.

        Args:
            error: Exception that occurred
            context: Where it happened (operation name, file, handler)
        """
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            context_str = ", ".join(f"{k}={v}" for k, v in context.items())
            self.error_logger.error(f"Context: {context_str}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    # -------------------------------------------------------------------------
    # Database
    # -------------------------------------------------------------------------

    def log_query(self, operation: str, seconds: float, rows: Optional[int] = None) -> None:
        """
        Record a read-only manager call.

        Args:
            operation: Manager operation name, e.g. ``list_entries_by_year``
            seconds: Wall time of the call
            rows: Number of rows returned, for list results
        """
        details: Dict[str, Any] = {"seconds": round(seconds, 6)}
        if rows is not None:
            details["rows"] = rows
        self.main_logger.debug(format_message("QUERY", operation, details))

    # -------------------------------------------------------------------------
    # Site requests
    # -------------------------------------------------------------------------

    def log_request(self, handler: str, args: Iterable[Any] = ()) -> None:
        """Record a request about to be served by a route handler."""
        self.request_logger.debug(
            format_message("REQUEST", handler, {"args": [str(a) for a in args]})
        )

    def log_not_found(self, reason: str, details: Details = None) -> None:
        """Record a request answered with the not-found redirect."""
        self.request_logger.info(format_message("NOT FOUND", reason, details))

    def log_request_error(self, error: Exception, handler: str) -> None:
        """Record a handler failure in both the request and the error log."""
        self.request_logger.error(
            format_message("FAILED", handler, {"error": type(error).__name__})
        )
        self.log_error(error, {"operation": "dispatch", "handler": handler})

    # -------------------------------------------------------------------------
    # CLI
    # -------------------------------------------------------------------------

    def log_cli_error(
        self,
        error: Exception,
        context: Details = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log full error details to file and return the terminal message.

        Examples:
            >>> logger.log_cli_error(DatabaseError("Connection failed"))
            '❌ DatabaseError: Connection failed'
        """
        self.log_error(error, context or {"source": "cli"})
        return format_cli_error(error, show_traceback)


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Details = None,
    exit_code: int = 1,
) -> None:
    """
    Standardized error handling for all CLI commands.

    Logs complete error details, prints a clean message to stderr and
    exits with ``exit_code``. Never returns.

    Args:
        ctx: Click context object containing logger and verbose flag
        error: Exception that occurred
        operation: Name of the operation that failed (e.g., 'import', 'init')
        additional_context: Optional extra context (file path, etc.)
        exit_code: Exit code for sys.exit() (default: 1)
    """
    logger: Optional[BlogLogger] = ctx.obj.get("logger")
    verbose: bool = ctx.obj.get("verbose", False)

    context = {"operation": operation, **(additional_context or {})}
    error_msg = safe_logger(logger).log_cli_error(error, context, show_traceback=verbose)

    click.echo(error_msg, err=True)
    sys.exit(exit_code)


class NullLogger:
    """BlogLogger interface with every method a no-op."""

    def log_operation(self, operation: str, details: Details = None) -> None:
        pass

    def log_debug(self, message: str, details: Details = None) -> None:
        pass

    def log_info(self, message: str, details: Details = None) -> None:
        pass

    def log_warning(self, message: str, details: Details = None) -> None:
        pass

    def log_error(self, error: Exception, context: Details = None) -> None:
        pass

    def log_query(self, operation: str, seconds: float, rows: Optional[int] = None) -> None:
        pass

    def log_request(self, handler: str, args: Iterable[Any] = ()) -> None:
        pass

    def log_not_found(self, reason: str, details: Details = None) -> None:
        pass

    def log_request_error(self, error: Exception, handler: str) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Details = None,
        show_traceback: bool = False,
    ) -> str:
        return format_cli_error(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[BlogLogger]) -> BlogLogger:
    """
    Return the provided logger or a null logger if None.

    Use ``safe_logger(logger).log_info("message")`` instead of
    guarding every call with ``if logger:``.
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
