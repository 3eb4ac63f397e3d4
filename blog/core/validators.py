#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for blog operations.

Provides type-safe conversion, validation, and normalization functions
used by the database managers, the entry importer and the config loader.
"""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional

from .exceptions import ValidationError


class DataValidator:
    """Centralized data validation for engine operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        for field in required_fields:
            if field not in data or not data[field]:
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Strip surrounding whitespace; empty results become None.

        Args:
            value: Value to normalize

        Returns:
            Normalized string or None
        """
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def normalize_list(value: Any) -> List[str]:
        """
        Coerce a scalar or sequence of labels into a list of strings.

        Blank items are dropped and duplicates removed, first occurrence
        wins.

        Examples:
            >>> DataValidator.normalize_list("haskell")
            ['haskell']
            >>> DataValidator.normalize_list(["a", " b ", "a", ""])
            ['a', 'b']
        """
        if value is None:
            return []
        items = [value] if isinstance(value, (str, int, float)) else list(value)

        result: List[str] = []
        for item in items:
            text = DataValidator.normalize_string(item)
            if text and text not in result:
                result.append(text)
        return result

    @staticmethod
    def normalize_datetime(value: Any) -> Optional[datetime]:
        """
        Normalize date-like input to a timezone-aware UTC datetime.

        Dates become midnight UTC. Naive datetimes are assumed to be UTC.
        Strings are parsed as ISO 8601.

        Args:
            value: Date string, date, datetime or None

        Returns:
            Aware datetime or None

        Raises:
            ValidationError: If a string cannot be parsed
        """
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime.combine(value, time.min)
        elif isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError as e:
                raise ValidationError(f"Invalid date: '{value}'") from e
        else:
            raise ValidationError(f"Cannot convert {type(value).__name__} to datetime")

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    @staticmethod
    def normalize_positive_int(value: Any, field: str) -> int:
        """
        Convert value to a strictly positive integer.

        Raises:
            ValidationError: If value is not an integer greater than zero
        """
        if isinstance(value, bool):
            raise ValidationError(f"{field} must be an integer, got {value!r}")
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"{field} must be an integer, got {value!r}") from e
        if number < 1:
            raise ValidationError(f"{field} must be positive, got {number}")
        return number
