#!/usr/bin/env python3
"""
test_tag_manager.py
-------------------
Tests for TagManager: lookup, creation, counts and entry tag sets.

Usage:
    python -m pytest tests/unit/managers/test_tag_manager.py -v
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone

# --- Third-party imports ---
import pytest

# --- Local imports ---
from blog.core.exceptions import ValidationError
from blog.database.managers import coerce_kind
from blog.database.models import TagKind


class TestCoerceKind:
    """Conversion of kind values."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (TagKind.TAG, TagKind.TAG),
            ("category", TagKind.CATEGORY),
            (" Series ", TagKind.SERIES),
        ],
    )
    def test_valid(self, value, expected):
        assert coerce_kind(value) is expected

    def test_invalid(self):
        with pytest.raises(ValidationError, match="Unknown tag kind"):
            coerce_kind("topic")


class TestGetOrCreate:
    """Tag creation."""

    def test_creates_with_slug(self, tag_manager):
        """Slugs derive from the label."""
        tag = tag_manager.get_or_create(TagKind.SERIES, "Hamiltonian Dynamics")

        assert tag.id is not None
        assert tag.slug == "hamiltonian-dynamics"
        assert tag.url == "/series/hamiltonian-dynamics"
        assert tag.display_label == "+Hamiltonian Dynamics"
        assert tag.css_class == "tag-a-series"

    def test_returns_existing(self, tag_manager):
        """Same kind and label yields the same tag."""
        first = tag_manager.get_or_create("tag", "haskell")
        assert tag_manager.get_or_create(TagKind.TAG, " haskell ") is first

    def test_same_label_different_kind(self, tag_manager):
        """Labels are unique per kind only."""
        tag = tag_manager.get_or_create(TagKind.TAG, "physics")
        category = tag_manager.get_or_create(TagKind.CATEGORY, "physics")
        assert tag is not category

    def test_description_fills_empty_only(self, tag_manager):
        tag = tag_manager.get_or_create(TagKind.TAG, "x", "first")
        tag_manager.get_or_create(TagKind.TAG, "x", "second")
        assert tag.description == "first"

    @pytest.mark.parametrize("label", ["", "   ", "!!!"])
    def test_rejects_unusable_labels(self, tag_manager, label):
        with pytest.raises(ValidationError):
            tag_manager.get_or_create(TagKind.TAG, label)


class TestLookup:
    """Retrieval by slug and label."""

    def test_get(self, tag_manager):
        tag = tag_manager.get_or_create(TagKind.CATEGORY, "Functional Programming")
        assert tag_manager.get("category", "functional-programming") is tag
        assert tag_manager.get(TagKind.TAG, "functional-programming") is None
        assert tag_manager.get(TagKind.CATEGORY, "") is None

    def test_get_by_label(self, tag_manager):
        tag = tag_manager.get_or_create(TagKind.TAG, "haskell")
        assert tag_manager.get_by_label(TagKind.TAG, "haskell") is tag
        assert tag_manager.get_by_label(TagKind.TAG, "Haskell") is None


class TestAllOfKind:
    """Per-kind listings with posted counts."""

    def test_counts_posted_entries_only(self, tag_manager, make_entry):
        """Drafts do not count; tags only used by drafts count zero."""
        posted = datetime(2020, 1, 1, tzinfo=timezone.utc)
        make_entry("A", posted, slug="a", tags={TagKind.TAG: ["haskell", "physics"]})
        make_entry("B", posted, slug="b", tags={TagKind.TAG: ["haskell"]})
        make_entry("C", None, slug="c", tags={TagKind.TAG: ["haskell", "secret"]})

        counts = {tag.label: count for tag, count in tag_manager.all_of_kind(TagKind.TAG)}

        assert counts == {"haskell": 2, "physics": 1, "secret": 0}

    def test_ordered_by_label_case_insensitively(self, tag_manager):
        for label in ["beta", "Alpha", "gamma"]:
            tag_manager.get_or_create(TagKind.CATEGORY, label)

        labels = [tag.label for tag, _ in tag_manager.all_of_kind(TagKind.CATEGORY)]

        assert labels == ["Alpha", "beta", "gamma"]


class TestMutation:
    """Descriptions and entry tag sets."""

    def test_set_description(self, tag_manager):
        tag_manager.get_or_create(TagKind.SERIES, "S")
        assert tag_manager.set_description(TagKind.SERIES, "S", "About S") is True
        assert tag_manager.set_description(TagKind.SERIES, "S", "About S") is False
        assert tag_manager.get_by_label(TagKind.SERIES, "S").description == "About S"

    def test_set_description_missing_tag(self, tag_manager):
        assert tag_manager.set_description(TagKind.SERIES, "Nope", "x") is False

    def test_update_entry_tags_replaces_and_orders(self, tag_manager, make_entry):
        """Tags are replaced wholesale, ordered by kind then label, deduplicated."""
        entry = make_entry("E", None, slug="e", tags={TagKind.TAG: ["old"]})

        tags = tag_manager.update_entry_tags(entry, {
            TagKind.TAG: ["zeta", "alpha", "zeta"],
            TagKind.CATEGORY: "Code",
        })

        assert [t.display_label for t in tags] == ["@Code", "#alpha", "#zeta"]
        assert entry.tags == tags
