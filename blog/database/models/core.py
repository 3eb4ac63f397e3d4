"""
Core Models
------------

Central model for the blog database.

Models:
    - Entry: A blog post (published or draft)

Entries are written by the import pipeline and read-only for the web
layer.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import entry_tags
from .base import Base, TimestampMixin, UTCDateTime, utcnow
from .entities import Tag
from .enums import TagKind


class Entry(Base, TimestampMixin):
    """
    A blog entry.

    An entry is posted once ``posted_at`` is set and not in the future.
    Entries with no ``posted_at`` are drafts and never listed.

    Attributes:
        id: Primary key (the numeric identifier used by ``/entry/id/<id>``)
        title: Entry title
        slug: Canonical URL segment (``/entry/<slug>``), unique
        content: Markdown body
        lede: Optional explicit summary; the first paragraph is used otherwise
        posted_at: Posting time (aware, UTC), None for drafts
        source_path: Markdown file the entry was imported from, unique
        source_hash: Hash of the source file for change detection
        created_at: When this database record was created
        updated_at: When this database record was last updated

    Relationships:
        tags: Many-to-many with Tag, ordered by kind then label
    """

    __tablename__ = "entries"
    __table_args__ = (
        CheckConstraint("title != ''", name="ck_entry_non_empty_title"),
        CheckConstraint("slug != ''", name="ck_entry_non_empty_slug"),
    )

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String(255), unique=True, index=True)
    content: Mapped[str] = mapped_column(Text, default="")
    lede: Mapped[Optional[str]] = mapped_column(Text)
    posted_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, index=True)
    source_path: Mapped[Optional[str]] = mapped_column(String(1024), unique=True)
    source_hash: Mapped[Optional[str]] = mapped_column(String(64))

    # ---- Many-to-many Relationships ----
    tags: Mapped[List[Tag]] = relationship(
        Tag,
        secondary=entry_tags,
        back_populates="entries",
        order_by=[Tag.kind, Tag.label],
    )

    # ---- Computed properties ----
    @property
    def url(self) -> str:
        """Canonical site-relative URL."""
        if self.slug:
            return f"/entry/{self.slug}"
        return f"/entry/id/{self.id}"

    def is_posted(self, now: Optional[datetime] = None) -> bool:
        """True when the entry has a posting time that is not in the future."""
        if self.posted_at is None:
            return False
        return self.posted_at <= (now or utcnow())

    def tags_of_kind(self, kind: TagKind) -> List[Tag]:
        """Tags of one kind, in display order."""
        return [tag for tag in self.tags if tag.kind == kind]

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, slug={self.slug}, posted_at={self.posted_at})>"

    def __str__(self) -> str:
        return self.title
