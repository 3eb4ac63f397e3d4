#!/usr/bin/env python3
"""
filters.py
----------
Custom Jinja2 filters for site pages.

These filters are pure functions over dates, years and URLs. They are
registered on the Jinja2 environment by SiteRenderer.

Filters:
    - friendly_time: "Sunday January 5, 2020"
    - datetime_attr: ISO 8601 UTC timestamp for ``<time datetime=...>``
    - month_display: "February 2020"
    - year_path / month_path: archive URLs for a year or month
    - comments_url: Disqus anchor of an entry URL
    - page_path: URL of a home listing page
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import calendar
from datetime import date, datetime, timezone
from typing import Optional, Union

DateLike = Union[date, datetime]


def _as_utc(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def friendly_time(value: Optional[DateLike]) -> str:
    """
    Format a posting time for readers.

    Examples:
        >>> friendly_time(datetime(2020, 1, 5, 12, 0, tzinfo=timezone.utc))
        'Sunday January 5, 2020'
    """
    if value is None:
        return "Unposted"
    moment = _as_utc(value)
    return f"{moment:%A} {moment:%B} {moment.day}, {moment.year}"


def datetime_attr(value: Optional[DateLike]) -> str:
    """Machine-readable UTC timestamp (``2020-01-05T12:00:00Z``)."""
    if value is None:
        return ""
    return _as_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def month_display(year: int, month: int) -> str:
    """
    Format a year/month pair for display.

    Examples:
        >>> month_display(2020, 2)
        'February 2020'
    """
    return f"{calendar.month_name[month]} {year}"


def year_path(year: int) -> str:
    return f"/entries/in/{year}"


def month_path(year: int, month: int) -> str:
    """Archive URL of a month, zero-padded (``/entries/in/2020/02``)."""
    return f"/entries/in/{year}/{month:02d}"


def comments_url(url: str) -> str:
    return f"{url}#disqus_thread"


def page_path(page: int) -> str:
    """URL of a home listing page; page 1 is the site root."""
    if page <= 1:
        return "/"
    return f"/home/{page}"
