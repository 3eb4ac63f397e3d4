"""
Scriptorium Blog Package
========================

A database-backed weblog engine.

Entries are written as Markdown files with YAML frontmatter, imported
into a SQLite database, and served as HTML by a small Flask site with
a home listing, single-entry pages and archives by date, tag, category
and series.

Main Components:
    - core: Configuration, logging, validation, paths, exceptions
    - database: SQLAlchemy ORM models and entity managers
    - pipeline: Markdown → database import
    - site: Archive grouping/rendering, route handlers, Flask app
    - cli: The ``blog`` command
    - utils: Slugs and markdown file helpers

Primary Interfaces:
    - blog.cli: Command-line interface
    - blog.database.manager.BlogDB: Main database interface
    - blog.site.app.create_app: WSGI application factory

Example Usage:
    >>> from blog.database import BlogDB
    >>> db = BlogDB(db_path="data/db/blog.db")
    >>> with db.session_scope():
    ...     recent = db.entries.recent(5)
"""

__version__ = "1.0.0"
__author__ = "Scriptorium Project"

# Expose primary interfaces for convenience
from blog.database.manager import BlogDB
from blog.core.paths import DATA_DIR, DB_PATH, ENTRIES_DIR, LOG_DIR

__all__ = [
    "BlogDB",
    "DATA_DIR",
    "DB_PATH",
    "ENTRIES_DIR",
    "LOG_DIR",
]
