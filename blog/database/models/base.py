"""
Base Classes and Mixins
------------------------

Foundational ORM classes for the blog database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - UTCDateTime: Column type storing timezone-aware datetimes as UTC
    - TimestampMixin: created_at / updated_at bookkeeping

This module provides the core infrastructure that other model modules build upon.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone
from typing import Any, Optional

# --- Third party ---
from sqlalchemy import DateTime
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


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


class UTCDateTime(TypeDecorator):
    """
    DateTime column that always round-trips aware UTC datetimes.

    SQLite drops offsets, so values are normalised to naive UTC on the
    way in and tagged with UTC on the way out. Naive input is assumed
    to already be UTC.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(
        self, value: Optional[datetime], dialect: Dialect
    ) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.replace(tzinfo=None)

    def process_result_value(
        self, value: Optional[Any], dialect: Dialect
    ) -> Optional[datetime]:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class TimestampMixin:
    """
    Mixin adding record bookkeeping timestamps.

    Attributes:
        created_at: When the database record was created
        updated_at: When the database record was last updated
    """

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, doc="Record creation time"
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, onupdate=utcnow, doc="Last record update"
    )
