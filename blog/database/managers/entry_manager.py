#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Manages Entry queries (the entry store read interface) and writes.

Every listing query returns *posted* entries only: a non-null
``posted_at`` that is not in the future. Listings are ordered by
``posted_at`` with ``id`` as the secondary key, so entries sharing a
posting time always come back in the same order.

Key Features:
    - Posted-entry listings filtered by year, month or tag
    - Pagination and recent-entry queries
    - Lookup by numeric id or slug
    - Previous/next neighbours in posting order
    - Create, update and source-keyed upsert for the importer

Usage:
    entry_mgr = EntryManager(session, logger)

    recent = entry_mgr.recent(5)
    february = entry_mgr.by_month(2020, 2)
    entry = entry_mgr.get_by_slug("introducing-the-hamiltonian")
"""
from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.orm import selectinload

from blog.core.exceptions import ValidationError
from blog.core.validators import DataValidator
from blog.database.decorators import db_operation
from blog.database.models import Entry, Tag, utcnow
from .base_manager import BaseManager
from .tag_manager import TagManager

# Fields the importer and CLI may set directly on an entry
ENTRY_FIELDS = ("title", "slug", "content", "lede", "posted_at", "source_path", "source_hash")


def _check_year(year: int) -> None:
    if not MINYEAR <= year < MAXYEAR:
        raise ValidationError(f"Year must be between {MINYEAR} and {MAXYEAR - 1}, got {year}")


def _year_bounds(year: int) -> Tuple[datetime, datetime]:
    _check_year(year)
    return (
        datetime(year, 1, 1, tzinfo=timezone.utc),
        datetime(year + 1, 1, 1, tzinfo=timezone.utc),
    )


def _month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    _check_year(year)
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        return start, datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    return start, datetime(year, month + 1, 1, tzinfo=timezone.utc)


class EntryManager(BaseManager):
    """Manages Entry queries and writes."""

    # -------------------------------------------------------------------------
    # Query building
    # -------------------------------------------------------------------------

    def _posted(
        self, now: Optional[datetime] = None, newest_first: bool = True
    ) -> Select:
        """Base statement for posted entries with tags eagerly loaded."""
        now = now or utcnow()
        stmt = (
            select(Entry)
            .options(selectinload(Entry.tags))
            .where(Entry.posted_at.is_not(None), Entry.posted_at <= now)
        )
        if newest_first:
            return stmt.order_by(Entry.posted_at.desc(), Entry.id.desc())
        return stmt.order_by(Entry.posted_at.asc(), Entry.id.asc())

    def _fetch(self, stmt: Select) -> List[Entry]:
        return list(self.session.scalars(stmt).all())

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    @db_operation("list_posted_entries")
    def all_posted(self) -> List[Entry]:
        """All posted entries, newest first."""
        return self._fetch(self._posted())

    @db_operation("list_entries_by_year")
    def by_year(self, year: int) -> List[Entry]:
        """
        Posted entries from one calendar year (UTC), newest first.

        Raises:
            ValidationError: If year is outside the calendar range
        """
        start, end = _year_bounds(year)
        stmt = self._posted().where(Entry.posted_at >= start, Entry.posted_at < end)
        return self._fetch(stmt)

    @db_operation("list_entries_by_month")
    def by_month(self, year: int, month: int) -> List[Entry]:
        """
        Posted entries from one calendar month (UTC), newest first.

        Raises:
            ValidationError: If month is outside 1..12 or year is outside
                the calendar range
        """
        if not 1 <= month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}")
        start, end = _month_bounds(year, month)
        stmt = self._posted().where(Entry.posted_at >= start, Entry.posted_at < end)
        return self._fetch(stmt)

    @db_operation("list_entries_by_tag")
    def by_tag(self, tag: Tag) -> List[Entry]:
        """Posted entries carrying ``tag``, newest first."""
        stmt = self._posted().where(Entry.tags.any(Tag.id == tag.id))
        return self._fetch(stmt)

    @db_operation("list_recent_entries")
    def recent(self, limit: int = 5) -> List[Entry]:
        """The ``limit`` most recently posted entries."""
        return self._fetch(self._posted().limit(limit))

    @db_operation("list_entries_page")
    def page(self, page: int, per_page: int) -> List[Entry]:
        """
        One page of posted entries, newest first.

        Args:
            page: 1-based page number
            per_page: Entries per page

        Raises:
            ValidationError: If page or per_page is not positive
        """
        page = DataValidator.normalize_positive_int(page, "page")
        per_page = DataValidator.normalize_positive_int(per_page, "per_page")
        stmt = self._posted().limit(per_page).offset((page - 1) * per_page)
        return self._fetch(stmt)

    @db_operation("count_posted_entries")
    def count_posted(self) -> int:
        """Number of posted entries."""
        now = utcnow()
        stmt = select(func.count(Entry.id)).where(
            Entry.posted_at.is_not(None), Entry.posted_at <= now
        )
        return self.session.scalar(stmt) or 0

    @db_operation("list_drafts")
    def drafts(self) -> List[Entry]:
        """Unposted and scheduled entries, ordered by id."""
        now = utcnow()
        stmt = (
            select(Entry)
            .options(selectinload(Entry.tags))
            .where(or_(Entry.posted_at.is_(None), Entry.posted_at > now))
            .order_by(Entry.id)
        )
        return self._fetch(stmt)

    # -------------------------------------------------------------------------
    # Single-entry lookup
    # -------------------------------------------------------------------------

    @db_operation("get_entry_by_id")
    def get_by_id(self, entry_id: int, posted_only: bool = True) -> Optional[Entry]:
        """Retrieve an entry by id; drafts are hidden unless posted_only is False."""
        entry = self.session.get(Entry, entry_id)
        if entry is None or (posted_only and not entry.is_posted()):
            return None
        return entry

    @db_operation("get_entry_by_slug")
    def get_by_slug(self, slug: str, posted_only: bool = True) -> Optional[Entry]:
        """Retrieve an entry by slug; drafts are hidden unless posted_only is False."""
        slug = DataValidator.normalize_string(slug)
        if not slug:
            return None
        entry = self.session.scalars(select(Entry).where(Entry.slug == slug)).first()
        if entry is None or (posted_only and not entry.is_posted()):
            return None
        return entry

    @db_operation("get_entry_by_source")
    def get_by_source(self, source_path: str) -> Optional[Entry]:
        """Retrieve an entry by the markdown file it was imported from."""
        stmt = select(Entry).where(Entry.source_path == source_path)
        return self.session.scalars(stmt).first()

    @db_operation("get_entry_neighbors")
    def neighbors(self, entry: Entry) -> Tuple[Optional[Entry], Optional[Entry]]:
        """
        The posted entries immediately before and after ``entry``.

        Returns:
            Tuple of (older, newer); either may be None
        """
        if entry.posted_at is None:
            return None, None

        older_clause = or_(
            Entry.posted_at < entry.posted_at,
            and_(Entry.posted_at == entry.posted_at, Entry.id < entry.id),
        )
        newer_clause = or_(
            Entry.posted_at > entry.posted_at,
            and_(Entry.posted_at == entry.posted_at, Entry.id > entry.id),
        )
        older = self.session.scalars(self._posted().where(older_clause).limit(1)).first()
        newer = self.session.scalars(
            self._posted(newest_first=False).where(newer_clause).limit(1)
        ).first()
        return older, newer

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def _apply(self, entry: Entry, metadata: Dict[str, Any]) -> None:
        """Copy known fields and tags from ``metadata`` onto ``entry``."""
        for field in ENTRY_FIELDS:
            if field not in metadata:
                continue
            value = metadata[field]
            if field == "posted_at":
                value = DataValidator.normalize_datetime(value)
            elif field == "content":
                value = value or ""
            elif field != "title":
                value = DataValidator.normalize_string(value)
            setattr(entry, field, value)

        if "tags" in metadata:
            TagManager(self.session, self.logger).update_entry_tags(
                entry, metadata["tags"] or {}
            )

    @db_operation("create_entry", write=True)
    def create(self, metadata: Dict[str, Any]) -> Entry:
        """
        Create an entry.

        Args:
            metadata: Entry fields (title required) plus optional ``tags``,
                a mapping of TagKind → labels

        Returns:
            The new, flushed entry

        Raises:
            ValidationError: If the title is missing
            DatabaseError: On constraint violations (duplicate slug)
        """
        DataValidator.validate_required_fields(metadata, ["title"])
        entry = Entry(title=str(metadata["title"]).strip())
        self.session.add(entry)
        self._apply(entry, metadata)
        self.session.flush()
        return entry

    @db_operation("update_entry", write=True)
    def update(self, entry: Entry, metadata: Dict[str, Any]) -> Entry:
        """
        Update an entry's fields and, when given, its tags.

        Raises:
            ValidationError: If a title is given but empty
        """
        if "title" in metadata:
            DataValidator.validate_required_fields(metadata, ["title"])
            metadata = {**metadata, "title": str(metadata["title"]).strip()}
        self._apply(entry, metadata)
        self.session.flush()
        return entry

    @db_operation("upsert_entry_from_source", write=True)
    def upsert_from_source(
        self, metadata: Dict[str, Any], force: bool = False
    ) -> Tuple[Entry, str]:
        """
        Create or update the entry imported from ``metadata['source_path']``.

        Args:
            metadata: Entry fields including ``source_path`` and ``source_hash``
            force: Update even when the source hash is unchanged

        Returns:
            Tuple of (entry, status) with status one of
            "created", "updated", "skipped"
        """
        DataValidator.validate_required_fields(metadata, ["source_path"])
        existing = self.get_by_source(metadata["source_path"])

        if existing is None:
            return self.create(metadata), "created"

        if not force and existing.source_hash == metadata.get("source_hash"):
            return existing, "skipped"

        return self.update(existing, metadata), "updated"
