#!/usr/bin/env python3
"""
decorators.py
--------------------
The ``db_operation`` decorator wrapped around every manager method.

It does two things around the call:
    - SQLAlchemy errors become DatabaseError, so callers above the
      database layer only ever see BlogError subclasses.
    - The call is timed and reported to the manager's logger. Reads go
      to ``log_query`` at debug level since every page request makes
      several; writes go to ``log_operation``.

Engine errors raised on purpose inside a manager (ValidationError for a
bad month, say) pass through untouched and unlogged; the caller decides
what they mean. Anything else is logged with the operation name before
it propagates.

Usage:
    class EntryManager(BaseManager):
        @db_operation("list_posted_entries")
        def all_posted(self) -> List[Entry]:
            ...

        @db_operation("create_entry", write=True)
        def create(self, metadata) -> Entry:
            ...
"""
from functools import wraps
from time import perf_counter
from typing import Any, Callable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from blog.core.exceptions import BlogError, DatabaseError


def translate_db_error(error: SQLAlchemyError) -> DatabaseError:
    """DatabaseError carrying the SQLAlchemy error's message."""
    if isinstance(error, IntegrityError):
        return DatabaseError(f"Data integrity violation: {error}")
    return DatabaseError(f"Database operation failed: {error}")


def _row_count(result: Any) -> Optional[int]:
    return len(result) if isinstance(result, list) else None


def db_operation(operation_name: str, write: bool = False) -> Callable:
    """
    Decorate a manager method with error translation and timing.

    The wrapped method's instance must expose a ``logger`` attribute
    (a BlogLogger or None).

    Args:
        operation_name: Name reported in the logs
        write: Whether the method modifies the database

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = getattr(self, "logger", None)
            start = perf_counter()

            def report(error: Exception) -> None:
                if logger:
                    logger.log_error(error, {
                        "operation": operation_name,
                        "duration_seconds": perf_counter() - start,
                    })

            try:
                result = function(self, *args, **kwargs)
            except SQLAlchemyError as e:
                error = translate_db_error(e)
                report(error)
                raise error from e
            except BlogError:
                raise
            except Exception as e:
                report(e)
                raise

            if logger:
                elapsed = perf_counter() - start
                if write:
                    logger.log_operation(
                        f"{operation_name}_completed", {"duration_seconds": elapsed}
                    )
                else:
                    logger.log_query(operation_name, elapsed, _row_count(result))
            return result

        return wrapper

    return decorator
