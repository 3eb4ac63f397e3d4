"""
Entity Models
--------------

Models for the labels attached to entries.

Models:
    - Tag: A label of a given kind (plain tag, category or series)
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import CheckConstraint, Enum, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import entry_tags
from .base import Base
from .enums import TagKind

if TYPE_CHECKING:
    from .core import Entry


class Tag(Base):
    """
    Label attached to entries.

    Tags are many-to-many with entries. The kind decides where the tag's
    archive lives and how it is displayed.

    Attributes:
        id: Primary key
        label: Human-readable label (unique per kind)
        kind: TagKind (tag, category, series)
        slug: URL path segment (unique per kind)
        description: Optional description shown under archive titles

    Relationships:
        entries: Many-to-many with Entry
    """

    __tablename__ = "tags"
    __table_args__ = (
        CheckConstraint("label != ''", name="ck_tag_non_empty_label"),
        CheckConstraint("slug != ''", name="ck_tag_non_empty_slug"),
        UniqueConstraint("kind", "label", name="uq_tag_kind_label"),
        UniqueConstraint("kind", "slug", name="uq_tag_kind_slug"),
    )

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    kind: Mapped[TagKind] = mapped_column(
        Enum(
            TagKind,
            name="tag_kind",
            values_callable=lambda kinds: [k.value for k in kinds],
        ),
        nullable=False,
        default=TagKind.TAG,
    )
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ---- Relationships ----
    entries: Mapped[List["Entry"]] = relationship(
        "Entry", secondary=entry_tags, back_populates="tags"
    )

    # ---- Computed properties ----
    @property
    def url(self) -> str:
        """Site-relative URL of this tag's archive page."""
        return f"{self.kind.index_path}/{self.slug}"

    @property
    def display_label(self) -> str:
        """Label prefixed with the kind's sigil (``#haskell``)."""
        return f"{self.kind.sigil}{self.label}"

    @property
    def css_class(self) -> str:
        """CSS class for inline links to this tag."""
        return self.kind.css_class

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, kind={self.kind.value}, label={self.label})>"

    def __str__(self) -> str:
        return self.display_label
