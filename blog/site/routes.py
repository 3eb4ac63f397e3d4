#!/usr/bin/env python3
"""
routes.py
---------
Route handlers for the blog site.

Handlers are plain functions of a SiteContext (the request's managers,
renderer, config and logger) plus URL parameters. Each returns either a
Redirect or a Page; the web layer converts both uniformly, redirecting
for the former and wrapping the latter in the site layout.

Missing entries, unknown tags and out-of-range pages are not errors:
they produce a Redirect to ``/not-found``.

Handlers:
    - route_home: Paginated home listing
    - route_entry_id / route_entry_slug: Single entry pages
    - route_legacy_entry / route_legacy_entry_id: Short-link redirects
    - route_archive and the year/month/tag wrappers: Archive listings
    - route_tag_index: Every tag of one kind
    - route_not_found: The 404 page
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import math
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR
from typing import Any, List, Optional, Union
from urllib.parse import quote

# --- Third-party imports ---
from markupsafe import Markup

# --- Local imports ---
from blog.core.config import SiteConfig
from blog.core.logging_manager import BlogLogger
from blog.database.managers import EntryManager, TagManager, coerce_kind
from blog.database.models import Entry, TagKind
from blog.site.archive import (
    ArchiveAll,
    ArchiveCategory,
    ArchiveMonth,
    ArchiveSeries,
    ArchiveTag,
    ArchiveYear,
    ViewArchiveType,
    archive_view_for_tag,
    build_rows,
    group_entries,
    page_title,
    render_archive,
    sidebar_index,
)
from blog.site.filters import page_path
from blog.site.markdown import render_lede, render_markdown
from blog.site.renderer import SiteRenderer
from blog.site.sidebar import ViewArchiveIndex, build_sidebar

NOT_FOUND_PATH = "/not-found"

# Archive queries need the following year as an upper bound
ARCHIVE_YEARS = range(MINYEAR, MAXYEAR)

# SQLite INTEGER is a signed 64-bit value
MAX_ENTRY_ID = 2**63 - 1

INDEX_FOR_KIND = {
    TagKind.TAG: ViewArchiveIndex.TAG,
    TagKind.CATEGORY: ViewArchiveIndex.CATEGORY,
    TagKind.SERIES: ViewArchiveIndex.SERIES,
}


# ═══════════════════════════════════════════════════════════════════════════
# RESULT TYPES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Redirect:
    target: str


@dataclass
class PageData:
    """
    Page metadata consumed by the layout.

    Attributes:
        title: Page title; the site title alone when None
        description: Meta description; the site description when None
        canonical_url: Site-relative canonical URL
        status: HTTP status code
    """
    title: Optional[str] = None
    description: Optional[str] = None
    canonical_url: Optional[str] = None
    status: int = 200


@dataclass
class Page:
    body: Markup
    data: PageData


RouteResult = Union[Redirect, Page]


@dataclass
class SiteContext:
    """Everything a handler may use while serving one request."""
    config: SiteConfig
    renderer: SiteRenderer
    entries: EntryManager
    tags: TagManager
    logger: BlogLogger


@dataclass
class HomeItem:
    entry: Entry
    lede: Markup


def not_found(ctx: SiteContext, reason: str, **details: Any) -> Redirect:
    """Redirect to the not-found page, logging why."""
    ctx.logger.log_not_found(reason, details or None)
    return Redirect(NOT_FOUND_PATH)


# ═══════════════════════════════════════════════════════════════════════════
# HOME
# ═══════════════════════════════════════════════════════════════════════════

def route_home(ctx: SiteContext, page: int = 1) -> RouteResult:
    """
    One page of the home listing.

    Pages past the last one, and pages below 1, are not found. An empty
    blog still has a (blank) page 1.
    """
    per_page = ctx.config.entries_per_page
    total = ctx.entries.count_posted()
    last_page = max(1, math.ceil(total / per_page))
    if page < 1 or page > last_page:
        return not_found(ctx, "home page out of range", page=page, last_page=last_page)

    entries = ctx.entries.page(page, per_page)
    items = [HomeItem(entry=entry, lede=render_lede(entry)) for entry in entries]
    body = ctx.renderer.render_fragment(
        "home.jinja2",
        {
            "entries": items,
            "page": page,
            "last_page": last_page,
            "newer_page": page - 1 if page > 1 else None,
            "older_page": page + 1 if page < last_page else None,
        },
    )
    title = None if page == 1 else f"Page {page}"
    return Page(body, PageData(title=title, canonical_url=page_path(page)))


# ═══════════════════════════════════════════════════════════════════════════
# ENTRIES
# ═══════════════════════════════════════════════════════════════════════════

def route_legacy_entry(ident: str) -> Redirect:
    """``/e/<ident>`` short link."""
    return Redirect(f"/entry/{quote(ident)}")


def route_legacy_entry_id(ident: str) -> Redirect:
    """``/e/id/<ident>`` and ``/id/e/<ident>`` short links."""
    return Redirect(f"/entry/id/{quote(ident)}")


def route_entry_id(ctx: SiteContext, entry_id: int) -> RouteResult:
    """Entry by numeric id; entries with a slug redirect to their slug URL."""
    if not 1 <= entry_id <= MAX_ENTRY_ID:
        return not_found(ctx, "entry id out of range", entry_id=entry_id)
    entry = ctx.entries.get_by_id(entry_id)
    if entry is None:
        return not_found(ctx, "no posted entry with id", entry_id=entry_id)
    if entry.slug:
        return Redirect(entry.url)
    return entry_page(ctx, entry)


def route_entry_slug(ctx: SiteContext, slug: str) -> RouteResult:
    entry = ctx.entries.get_by_slug(slug)
    if entry is None:
        return not_found(ctx, "no posted entry with slug", slug=slug)
    return entry_page(ctx, entry)


def entry_page(ctx: SiteContext, entry: Entry) -> Page:
    """Render a single entry with its neighbours and comments."""
    older, newer = ctx.entries.neighbors(entry)
    tag_sections = [
        (kind, entry.tags_of_kind(kind))
        for kind in (TagKind.CATEGORY, TagKind.SERIES, TagKind.TAG)
        if entry.tags_of_kind(kind)
    ]
    body = ctx.renderer.render_fragment(
        "entry.jinja2",
        {
            "entry": entry,
            "body": render_markdown(entry.content),
            "tag_sections": tag_sections,
            "older": older,
            "newer": newer,
            "disqus_shortname": ctx.config.disqus_shortname,
            "disqus_identifier": f"entry-{entry.id}",
        },
    )
    return Page(body, PageData(title=entry.title, canonical_url=entry.url))


# ═══════════════════════════════════════════════════════════════════════════
# ARCHIVES
# ═══════════════════════════════════════════════════════════════════════════

def archive_entries(ctx: SiteContext, view: ViewArchiveType) -> List[Entry]:
    """Query the posted entries a view lists, newest first."""
    if isinstance(view, ArchiveAll):
        return ctx.entries.all_posted()
    if isinstance(view, ArchiveYear):
        return ctx.entries.by_year(view.year)
    if isinstance(view, ArchiveMonth):
        return ctx.entries.by_month(view.year, view.month)
    if isinstance(view, (ArchiveTag, ArchiveCategory, ArchiveSeries)):
        return ctx.entries.by_tag(view.tag)
    raise TypeError(f"Unknown archive view: {view!r}")


def route_archive(ctx: SiteContext, view: ViewArchiveType) -> Page:
    """Group, render and wrap the archive listing for ``view``."""
    groups = group_entries(build_rows(archive_entries(ctx, view)))
    title = page_title(view)
    sidebar = build_sidebar(
        ctx.entries, ctx.renderer, sidebar_index(view), ctx.config.recent_count
    )
    body = render_archive(ctx.renderer, view, groups, page_title=title, sidebar=sidebar)
    data = PageData(title=title)
    if isinstance(view, (ArchiveTag, ArchiveCategory, ArchiveSeries)):
        data.description = view.tag.description
    return Page(body, data)


def route_archive_year(ctx: SiteContext, year: int) -> RouteResult:
    if year not in ARCHIVE_YEARS:
        return not_found(ctx, "year out of range", year=year)
    return route_archive(ctx, ArchiveYear(year))


def route_archive_month(ctx: SiteContext, year: int, month: int) -> RouteResult:
    if year not in ARCHIVE_YEARS or not 1 <= month <= 12:
        return not_found(ctx, "month out of range", year=year, month=month)
    return route_archive(ctx, ArchiveMonth(year, month))


def route_archive_tag(ctx: SiteContext, kind: Any, slug: str) -> RouteResult:
    """Archive of one tag, category or series, looked up by slug."""
    tag = ctx.tags.get(kind, slug)
    if tag is None:
        return not_found(ctx, "unknown tag", kind=str(kind), slug=slug)
    return route_archive(ctx, archive_view_for_tag(tag))


def route_tag_index(ctx: SiteContext, kind: Any) -> Page:
    """Every tag of one kind that labels at least one posted entry."""
    kind = coerce_kind(kind)
    tags = [(tag, count) for tag, count in ctx.tags.all_of_kind(kind) if count > 0]
    sidebar = build_sidebar(
        ctx.entries, ctx.renderer, INDEX_FOR_KIND[kind], ctx.config.recent_count
    )
    body = ctx.renderer.render_fragment(
        "tag_index.jinja2",
        {"kind": kind, "tags": tags, "title": kind.plural_name, "sidebar": sidebar},
    )
    return Page(body, PageData(title=kind.plural_name, canonical_url=kind.index_path))


# ═══════════════════════════════════════════════════════════════════════════
# NOT FOUND
# ═══════════════════════════════════════════════════════════════════════════

def route_not_found(ctx: SiteContext) -> Page:
    body = ctx.renderer.render_fragment("not_found.jinja2", {})
    return Page(body, PageData(title="Not Found", status=404))
