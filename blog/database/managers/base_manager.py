#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common utilities for entity managers.

Key Features:
    - Shared session and logger wiring
    - Generic get-or-create utility

Usage:
    class TagManager(BaseManager):
        def get_or_create(self, kind, label):
            return self._get_or_create(Tag, {"kind": kind, "label": label})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Dict, Optional, Protocol, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import select
from sqlalchemy.orm import Mapped, Session

# --- Local imports ---
from blog.core.logging_manager import BlogLogger, safe_logger


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)


class BaseManager(ABC):
    """
    Abstract base manager.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[BlogLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    def _get_or_create(
        self,
        model_class: Type[T],
        lookup_fields: Dict[str, Any],
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> T:
        """
        Get an existing row matching ``lookup_fields`` or create it.

        Args:
            model_class: ORM model class to query or create
            lookup_fields: Dictionary of field_name: value to filter/create
            extra_fields: Additional fields for new object creation only

        Returns:
            ORM instance of the model class
        """
        stmt = select(model_class).filter_by(**lookup_fields)
        existing = self.session.scalars(stmt).first()
        if existing is not None:
            return existing

        obj = model_class(**lookup_fields, **(extra_fields or {}))
        self.session.add(obj)
        self.session.flush()

        safe_logger(self.logger).log_debug(
            f"Created {model_class.__name__}",
            {"id": obj.id, **{k: str(v) for k, v in lookup_fields.items()}},
        )
        return obj
