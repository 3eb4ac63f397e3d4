#!/usr/bin/env python3
"""
archive.py
----------
Archive views: grouping posted entries by year and month, and rendering
the six archive slices (all, year, month, tag, category, series).

The grouper turns a newest-first entry list into nested year → month →
row buckets in one forward pass. The renderer picks a nesting depth per
view type: all entries render year headers, month headers and rows;
a year renders month headers and rows; month and tag-like views render
a flat list.

Preconditions:
    ``group_entries`` requires every row to have a posting time and the
    rows to be ordered newest first. Violations raise
    ArchiveGroupingError rather than producing misfiled buckets.

    ``render_archive`` assumes every bucket it receives is non-empty,
    which holds for anything built by ``group_entries``. It is not
    re-checked.

Usage:
    from blog.site.archive import ArchiveYear, build_rows, group_entries, render_archive

    rows = build_rows(entry_mgr.by_year(2020))
    html = render_archive(renderer, ArchiveYear(2020), group_entries(rows),
                          page_title="Entries from 2020", sidebar=sidebar_html)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple, Union

# --- Third-party imports ---
from markupsafe import Markup

# --- Local imports ---
from blog.core.exceptions import ArchiveGroupingError
from blog.database.models import Entry, Tag, TagKind
from blog.site.filters import month_display, month_path, year_path
from blog.site.renderer import SiteRenderer
from blog.site.sidebar import ViewArchiveIndex


# ═══════════════════════════════════════════════════════════════════════════
# VIEW TYPES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ArchiveAll:
    """Every posted entry."""


@dataclass(frozen=True)
class ArchiveYear:
    year: int


@dataclass(frozen=True)
class ArchiveMonth:
    year: int
    month: int


@dataclass(frozen=True)
class ArchiveTag:
    tag: Tag


@dataclass(frozen=True)
class ArchiveCategory:
    tag: Tag


@dataclass(frozen=True)
class ArchiveSeries:
    tag: Tag


ViewArchiveType = Union[
    ArchiveAll, ArchiveYear, ArchiveMonth, ArchiveTag, ArchiveCategory, ArchiveSeries
]


def _unknown_view(view: object) -> TypeError:
    return TypeError(f"Unknown archive view: {view!r}")


def archive_view_for_tag(tag: Tag) -> ViewArchiveType:
    """The archive view filtering by ``tag``, chosen by its kind."""
    if tag.kind == TagKind.TAG:
        return ArchiveTag(tag)
    if tag.kind == TagKind.CATEGORY:
        return ArchiveCategory(tag)
    if tag.kind == TagKind.SERIES:
        return ArchiveSeries(tag)
    raise ValueError(f"Unknown tag kind: {tag.kind!r}")


# ═══════════════════════════════════════════════════════════════════════════
# GROUPING
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ArchiveRow:
    """
    One entry as listed in an archive.

    Attributes:
        entry: The posted entry
        url: Canonical entry URL
        tags: The entry's tags in display order
    """
    entry: Entry
    url: str
    tags: Tuple[Tag, ...]

    @classmethod
    def from_entry(cls, entry: Entry) -> "ArchiveRow":
        return cls(entry=entry, url=entry.url, tags=tuple(entry.tags))

    @property
    def posted_at(self) -> Optional[datetime]:
        return self.entry.posted_at


@dataclass
class MonthGroup:
    year: int
    month: int
    rows: List[ArchiveRow] = field(default_factory=list)

    @property
    def label(self) -> str:
        return month_display(self.year, self.month)

    @property
    def path(self) -> str:
        return month_path(self.year, self.month)


@dataclass
class YearGroup:
    year: int
    months: List[MonthGroup] = field(default_factory=list)

    @property
    def label(self) -> str:
        return str(self.year)

    @property
    def path(self) -> str:
        return year_path(self.year)

    @property
    def rows(self) -> List[ArchiveRow]:
        return [row for month in self.months for row in month.rows]


def build_rows(entries: Iterable[Entry]) -> List[ArchiveRow]:
    return [ArchiveRow.from_entry(entry) for entry in entries]


def group_entries(rows: Sequence[ArchiveRow]) -> List[YearGroup]:
    """
    Partition newest-first rows into year and month buckets.

    Years and months appear in the order first seen, which is newest
    first; rows keep their input order inside each month. Buckets use
    the UTC year and month of ``posted_at``.

    Args:
        rows: Archive rows ordered by posting time, newest first

    Returns:
        Year groups, each holding its non-empty month groups

    Raises:
        ArchiveGroupingError: If a row has no posting time or the rows
            are not in descending posting order
    """
    groups: List[YearGroup] = []
    previous: Optional[datetime] = None

    for index, row in enumerate(rows):
        posted = row.posted_at
        if posted is None:
            raise ArchiveGroupingError(
                f"Row {index} ({row.entry!r}) has no posting time"
            )
        if previous is not None and posted > previous:
            raise ArchiveGroupingError(
                f"Rows are not ordered newest first: row {index} posted "
                f"{posted.isoformat()} after {previous.isoformat()}"
            )
        previous = posted

        if not groups or groups[-1].year != posted.year:
            groups.append(YearGroup(year=posted.year))
        year_group = groups[-1]

        if not year_group.months or year_group.months[-1].month != posted.month:
            year_group.months.append(MonthGroup(year=posted.year, month=posted.month))
        year_group.months[-1].rows.append(row)

    return groups


def flatten_groups(groups: Sequence[YearGroup]) -> List[ArchiveRow]:
    """Concatenate every month of every year back into one row list."""
    return [row for year in groups for row in year.rows]


# ═══════════════════════════════════════════════════════════════════════════
# PER-VIEW LOOKUPS
# ═══════════════════════════════════════════════════════════════════════════

def up_path(view: ViewArchiveType) -> Optional[str]:
    """Target of the "back" link, or None for the full archive."""
    if isinstance(view, ArchiveAll):
        return None
    if isinstance(view, ArchiveYear):
        return "/entries"
    if isinstance(view, ArchiveMonth):
        return year_path(view.year)
    if isinstance(view, ArchiveTag):
        return TagKind.TAG.index_path
    if isinstance(view, ArchiveCategory):
        return TagKind.CATEGORY.index_path
    if isinstance(view, ArchiveSeries):
        return TagKind.SERIES.index_path
    raise _unknown_view(view)


def filtered_tag(view: ViewArchiveType) -> Optional[Tag]:
    """The tag a view filters by, if any."""
    if isinstance(view, (ArchiveAll, ArchiveYear, ArchiveMonth)):
        return None
    if isinstance(view, (ArchiveTag, ArchiveCategory, ArchiveSeries)):
        return view.tag
    raise _unknown_view(view)


def description(view: ViewArchiveType) -> Optional[str]:
    """Subtitle under the page heading: the filtering tag's description."""
    tag = filtered_tag(view)
    if tag is None:
        return None
    return tag.description or None


def render_shape(view: ViewArchiveType) -> str:
    """Nesting depth of the listing: "years", "months" or "flat"."""
    if isinstance(view, ArchiveAll):
        return "years"
    if isinstance(view, ArchiveYear):
        return "months"
    if isinstance(view, (ArchiveMonth, ArchiveTag, ArchiveCategory, ArchiveSeries)):
        return "flat"
    raise _unknown_view(view)


def list_class(view: ViewArchiveType) -> str:
    """CSS class of the innermost entry list."""
    if isinstance(view, (ArchiveAll, ArchiveYear)):
        return "entry-list"
    if isinstance(view, (ArchiveMonth, ArchiveTag, ArchiveCategory, ArchiveSeries)):
        return "tile entry-list"
    raise _unknown_view(view)


def month_list_class(view: ViewArchiveType) -> str:
    """CSS class of the list of month headers."""
    if isinstance(view, ArchiveAll):
        return "entry-list"
    if isinstance(view, (ArchiveYear, ArchiveMonth, ArchiveTag, ArchiveCategory, ArchiveSeries)):
        return "tile entry-list"
    raise _unknown_view(view)


def page_title(view: ViewArchiveType) -> str:
    if isinstance(view, ArchiveAll):
        return "History"
    if isinstance(view, ArchiveYear):
        return f"Entries from {view.year}"
    if isinstance(view, ArchiveMonth):
        return f"Entries from {month_display(view.year, view.month)}"
    if isinstance(view, ArchiveTag):
        return f"Entries tagged {view.tag.display_label}"
    if isinstance(view, ArchiveCategory):
        return f"Entries in category {view.tag.display_label}"
    if isinstance(view, ArchiveSeries):
        return f"Entries in series {view.tag.display_label}"
    raise _unknown_view(view)


def sidebar_index(view: ViewArchiveType) -> Optional[ViewArchiveIndex]:
    """Sidebar item shown as current: History for the full archive only."""
    if isinstance(view, ArchiveAll):
        return ViewArchiveIndex.DATE
    if isinstance(view, (ArchiveYear, ArchiveMonth, ArchiveTag, ArchiveCategory, ArchiveSeries)):
        return None
    raise _unknown_view(view)


def _same_tag(a: Tag, b: Tag) -> bool:
    return a is b or (a.id is not None and a.id == b.id)


def visible_tags(view: ViewArchiveType, tags: Iterable[Tag]) -> List[Tag]:
    """An entry's tags minus the one the view filters by, order preserved."""
    hidden = filtered_tag(view)
    if hidden is None:
        return list(tags)
    return [tag for tag in tags if not _same_tag(tag, hidden)]


# ═══════════════════════════════════════════════════════════════════════════
# RENDERING
# ═══════════════════════════════════════════════════════════════════════════

def render_archive(
    renderer: SiteRenderer,
    view: ViewArchiveType,
    groups: Sequence[YearGroup],
    page_title: Optional[str] = None,
    sidebar: Optional[Markup] = None,
) -> Markup:
    """
    Render an archive listing as an HTML fragment.

    Args:
        renderer: Site renderer providing ``archive.jinja2``
        view: Which archive slice is shown
        groups: Output of ``group_entries`` for the view's entries
        page_title: Heading text; "Entries" when None
        sidebar: Rendered sidebar markup

    Returns:
        Safe markup with the sidebar column and the listing section
    """
    shape = render_shape(view)
    context = {
        "shape": shape,
        "groups": list(groups),
        "months": [month for year in groups for month in year.months],
        "rows": flatten_groups(groups),
        "up_link": up_path(view),
        "title": page_title,
        "description": description(view),
        "list_class": list_class(view),
        "month_list_class": month_list_class(view),
        "visible_tags": lambda tags: visible_tags(view, tags),
        "sidebar": sidebar or Markup(""),
    }
    return renderer.render_fragment("archive.jinja2", context)
