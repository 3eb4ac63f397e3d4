#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages Tag entities and their relationships with entries.

A tag is a label of one kind (plain tag, category, series). Labels are
unique per kind, and so are the slugs derived from them.

Key Features:
    - Lookup by slug (routing) or by label (import)
    - Get-or-create semantics with slug derivation
    - Per-kind listings with posted-entry counts for index pages
    - Replacement of an entry's full tag set

Usage:
    tag_mgr = TagManager(session, logger)

    tag = tag_mgr.get_or_create(TagKind.SERIES, "Hamiltonian Dynamics")
    tag_mgr.update_entry_tags(entry, {TagKind.TAG: ["haskell", "physics"]})
    for tag, count in tag_mgr.all_of_kind(TagKind.CATEGORY):
        ...
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import and_, func, select

from blog.core.exceptions import ValidationError
from blog.core.validators import DataValidator
from blog.database.decorators import db_operation
from blog.database.models import Entry, Tag, TagKind, entry_tags, utcnow
from blog.utils.slugify import slugify
from .base_manager import BaseManager


def coerce_kind(kind: Any) -> TagKind:
    """
    Convert a TagKind or its string value into a TagKind.

    Raises:
        ValidationError: If the value names no kind
    """
    if isinstance(kind, TagKind):
        return kind
    try:
        return TagKind(str(kind).strip().lower())
    except ValueError as e:
        raise ValidationError(
            f"Unknown tag kind: {kind!r} (expected one of {', '.join(TagKind.choices())})"
        ) from e


class TagManager(BaseManager):
    """Manages Tag table operations and entry-tag links."""

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @db_operation("get_tag")
    def get(self, kind: Any, slug: str) -> Optional[Tag]:
        """
        Retrieve a tag by kind and slug.

        Args:
            kind: TagKind or its value
            slug: URL slug

        Returns:
            Tag if found, None otherwise
        """
        slug = DataValidator.normalize_string(slug)
        if not slug:
            return None
        stmt = select(Tag).where(Tag.kind == coerce_kind(kind), Tag.slug == slug)
        return self.session.scalars(stmt).first()

    @db_operation("get_tag_by_label")
    def get_by_label(self, kind: Any, label: str) -> Optional[Tag]:
        """Retrieve a tag by kind and exact (whitespace-normalized) label."""
        label = DataValidator.normalize_string(label)
        if not label:
            return None
        stmt = select(Tag).where(Tag.kind == coerce_kind(kind), Tag.label == label)
        return self.session.scalars(stmt).first()

    @db_operation("get_or_create_tag", write=True)
    def get_or_create(
        self, kind: Any, label: str, description: Optional[str] = None
    ) -> Tag:
        """
        Get a tag by kind and label, creating it when missing.

        A description given here only fills an empty description; use
        ``set_description`` to overwrite.

        Raises:
            ValidationError: If the label is empty or yields an empty slug
        """
        kind = coerce_kind(kind)
        normalized = DataValidator.normalize_string(label)
        if not normalized:
            raise ValidationError("Tag label cannot be empty")

        slug = slugify(normalized)
        if not slug:
            raise ValidationError(f"Tag label {normalized!r} has no URL-safe characters")

        tag = self._get_or_create(
            Tag,
            {"kind": kind, "label": normalized},
            {"slug": slug, "description": DataValidator.normalize_string(description)},
        )
        if description and not tag.description:
            tag.description = DataValidator.normalize_string(description)
        return tag

    @db_operation("list_tags_of_kind")
    def all_of_kind(self, kind: Any) -> List[Tuple[Tag, int]]:
        """
        All tags of one kind with the number of posted entries using each.

        Tags used only by drafts are listed with a count of zero.

        Returns:
            List of (tag, posted_count) ordered by label
        """
        posted_entry = and_(
            Entry.id == entry_tags.c.entry_id,
            Entry.posted_at.is_not(None),
            Entry.posted_at <= utcnow(),
        )
        stmt = (
            select(Tag, func.count(Entry.id))
            .outerjoin(entry_tags, entry_tags.c.tag_id == Tag.id)
            .outerjoin(Entry, posted_entry)
            .where(Tag.kind == coerce_kind(kind))
            .group_by(Tag.id)
            .order_by(func.lower(Tag.label))
        )
        return [(tag, count) for tag, count in self.session.execute(stmt).all()]

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    @db_operation("set_tag_description", write=True)
    def set_description(self, kind: Any, label: str, description: Optional[str]) -> bool:
        """
        Overwrite a tag's description.

        Returns:
            True if the tag exists and was changed
        """
        tag = self.get_by_label(kind, label)
        if tag is None:
            return False
        new_description = DataValidator.normalize_string(description)
        if tag.description == new_description:
            return False
        tag.description = new_description
        return True

    @db_operation("update_entry_tags", write=True)
    def update_entry_tags(
        self, entry: Entry, labels_by_kind: Dict[Any, Iterable[str]]
    ) -> List[Tag]:
        """
        Replace an entry's tags.

        Args:
            entry: Entry to update
            labels_by_kind: Mapping of kind → labels; kinds not present
                end up with no tags

        Returns:
            The entry's new tag list, in display order
        """
        tags: List[Tag] = []
        for kind, labels in labels_by_kind.items():
            for label in DataValidator.normalize_list(labels):
                tag = self.get_or_create(kind, label)
                if tag not in tags:
                    tags.append(tag)

        tags.sort(key=lambda t: (t.kind.value, t.label))
        entry.tags = tags
        return tags
