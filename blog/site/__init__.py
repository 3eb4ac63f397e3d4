"""
Site package: archive grouping and rendering, the sidebar, route
handlers and the Flask application factory.
"""
from .app import create_app
from .archive import (
    ArchiveAll,
    ArchiveCategory,
    ArchiveMonth,
    ArchiveRow,
    ArchiveSeries,
    ArchiveTag,
    ArchiveYear,
    MonthGroup,
    ViewArchiveType,
    YearGroup,
    archive_view_for_tag,
    build_rows,
    flatten_groups,
    group_entries,
    render_archive,
)
from .renderer import SiteRenderer
from .sidebar import ViewArchiveIndex, build_sidebar

__all__ = [
    "create_app",
    "ArchiveAll",
    "ArchiveCategory",
    "ArchiveMonth",
    "ArchiveRow",
    "ArchiveSeries",
    "ArchiveTag",
    "ArchiveYear",
    "MonthGroup",
    "ViewArchiveType",
    "YearGroup",
    "archive_view_for_tag",
    "build_rows",
    "flatten_groups",
    "group_entries",
    "render_archive",
    "SiteRenderer",
    "ViewArchiveIndex",
    "build_sidebar",
]
