#!/usr/bin/env python3
"""
sidebar.py
----------
Archive sidebar: the archive index navigation and the recent entries.

The sidebar is rebuilt on every request. It runs its own query for the
most recent posted entries, independent of whatever the page itself
lists.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

# --- Third-party imports ---
from markupsafe import Markup

if TYPE_CHECKING:
    from blog.database.managers import EntryManager
    from blog.site.renderer import SiteRenderer

RECENT_COUNT = 5


class ViewArchiveIndex(Enum):
    """The archive index pages reachable from the sidebar."""

    DATE = "date"
    TAG = "tag"
    CATEGORY = "category"
    SERIES = "series"


NAV_ITEMS: List[Tuple[str, str, ViewArchiveIndex]] = [
    ("History", "/entries", ViewArchiveIndex.DATE),
    ("Tags", "/tags", ViewArchiveIndex.TAG),
    ("Categories", "/categories", ViewArchiveIndex.CATEGORY),
    ("Series", "/series", ViewArchiveIndex.SERIES),
]


def build_sidebar(
    entry_manager: "EntryManager",
    renderer: "SiteRenderer",
    active: Optional[ViewArchiveIndex] = None,
    count: int = RECENT_COUNT,
) -> Markup:
    """
    Render the sidebar.

    Args:
        entry_manager: Entry manager bound to the current request's session
        renderer: Site renderer providing ``sidebar.jinja2``
        active: Index page being shown; rendered as plain text, not a link
        count: Number of recent entries to list

    Returns:
        Safe markup for the sidebar column
    """
    nav = [
        {"label": label, "url": url, "current": index == active}
        for label, url, index in NAV_ITEMS
    ]
    recent = entry_manager.recent(count)
    return renderer.render_fragment("sidebar.jinja2", {"nav": nav, "recent": recent})
