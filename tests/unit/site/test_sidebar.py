#!/usr/bin/env python3
"""
test_sidebar.py
---------------
Tests for the archive sidebar: index navigation and recent entries.

Usage:
    python -m pytest tests/unit/site/test_sidebar.py -v
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import datetime, timedelta, timezone

# --- Third-party imports ---
import pytest

# --- Local imports ---
from blog.site.sidebar import NAV_ITEMS, ViewArchiveIndex, build_sidebar

BASE = datetime(2020, 1, 1, 12, tzinfo=timezone.utc)


def recent_titles(html):
    recents = html.split('class="archive-recents tile"', 1)[1]
    return re.findall(r'<li><a href="/entry/[^"]+">([^<]+)</a></li>', recents)


class TestSidebarRecent:
    """The "Recent" panel."""

    @pytest.mark.parametrize("total", [0, 1, 4, 5, 6, 9])
    def test_length_is_min_of_five_and_total(self, entry_manager, make_entry, renderer, total):
        """Recent lists min(5, n) entries."""
        for i in range(total):
            make_entry(f"Entry {i}", BASE + timedelta(days=i), slug=f"entry-{i}")

        html = build_sidebar(entry_manager, renderer)

        assert len(recent_titles(html)) == min(5, total)

    def test_newest_first(self, entry_manager, make_entry, renderer):
        """Recent entries are ordered by posting time, descending."""
        for i in range(7):
            make_entry(f"Entry {i}", BASE + timedelta(days=i), slug=f"entry-{i}")

        titles = recent_titles(build_sidebar(entry_manager, renderer))

        assert titles == ["Entry 6", "Entry 5", "Entry 4", "Entry 3", "Entry 2"]

    def test_ties_broken_by_id(self, entry_manager, make_entry, renderer):
        """Entries sharing a posting time list the later-created one first."""
        make_entry("First", BASE, slug="first")
        make_entry("Second", BASE, slug="second")

        assert recent_titles(build_sidebar(entry_manager, renderer)) == ["Second", "First"]

    def test_drafts_excluded(self, entry_manager, make_entry, renderer):
        """Drafts and scheduled entries never appear."""
        make_entry("Posted", BASE, slug="posted")
        make_entry("Draft", None, slug="draft")
        make_entry("Later", datetime.now(timezone.utc) + timedelta(days=3), slug="later")

        assert recent_titles(build_sidebar(entry_manager, renderer)) == ["Posted"]

    def test_custom_count(self, entry_manager, make_entry, renderer):
        """The number of recent entries can be configured."""
        for i in range(4):
            make_entry(f"Entry {i}", BASE + timedelta(days=i), slug=f"entry-{i}")

        assert len(recent_titles(build_sidebar(entry_manager, renderer, count=2))) == 2


class TestSidebarNavigation:
    """The index navigation panel."""

    def test_all_links_without_active(self, entry_manager, renderer):
        """With no active index every item is a link."""
        html = build_sidebar(entry_manager, renderer)

        for label, url, _ in NAV_ITEMS:
            assert f'<li><a href="{url}">{label}</a></li>' in html
        assert "curr-index" not in html

    @pytest.mark.parametrize("label,url,index", NAV_ITEMS)
    def test_active_item_is_plain_text(self, entry_manager, renderer, label, url, index):
        """The active index is rendered as text, the others as links."""
        html = build_sidebar(entry_manager, renderer, active=index)

        assert f'<li class="curr-index">{label}</li>' in html
        assert f'<a href="{url}">' not in html
        assert html.count("<li><a href=\"/") - len(recent_titles(html)) == 3

    def test_panels_present(self, entry_manager, renderer):
        """Both panels have their headings."""
        html = build_sidebar(entry_manager, renderer, active=ViewArchiveIndex.TAG)

        assert '<nav class="archive-nav tile">' in html
        assert "<h2>Entries</h2>" in html
        assert "<h2>Recent</h2>" in html
