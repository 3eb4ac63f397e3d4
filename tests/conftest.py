"""
conftest.py
-----------
Shared pytest fixtures for blog tests.

Provides fixtures for:
- Temporary directories and database setup/teardown
- Manager instances bound to a test session
- Entry factories and the three-entry sample archive
- Site renderer and configuration
"""
import pytest
from datetime import datetime, timezone
from pathlib import Path
from tempfile import TemporaryDirectory

from blog.core.config import SiteConfig
from blog.database.manager import BlogDB
from blog.database.managers import EntryManager, TagManager
from blog.database.models import TagKind
from blog.site.renderer import SiteRenderer


def utc(year, month, day, hour=12, minute=0):
    """Aware UTC datetime shorthand."""
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Sample Markdown Content Fixtures -----

@pytest.fixture
def minimal_entry_content():
    """Minimal entry: a title and a body."""
    return """---
title: Hello World
---

The first entry.
"""


@pytest.fixture
def complex_entry_content():
    """Entry with every frontmatter field populated."""
    return """---
title: Introducing the Hamiltonian
slug: introducing-the-hamiltonian
date: 2014-06-08 12:00:00
categories: Physics
series: Hamiltonian Dynamics
tags:
  - haskell
  - physics
  - haskell
lede: Hamiltonian mechanics, in Haskell.
---

Hamiltonian mechanics is a reformulation of classical mechanics.

## Phase space

More text here.
"""


# ----- Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_dir):
    """Temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Database is torn down after the test.
    """
    db = BlogDB(db_path=test_db_path)
    yield db
    db.dispose()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Provides a session with automatic rollback after test.
    """
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def entry_manager(db_session):
    """Create EntryManager instance for testing."""
    return EntryManager(db_session)


@pytest.fixture
def tag_manager(db_session):
    """Create TagManager instance for testing."""
    return TagManager(db_session)


@pytest.fixture
def make_entry(entry_manager):
    """
    Factory creating entries through the EntryManager.

    Usage:
        entry = make_entry("Title", utc(2020, 1, 5), tags={TagKind.TAG: ["a"]})
    """
    def _make(title, posted_at=None, slug=None, tags=None, content="Body text.\n", **fields):
        metadata = {"title": title, "posted_at": posted_at, "content": content, **fields}
        metadata["slug"] = slug
        if tags is not None:
            metadata["tags"] = tags
        return entry_manager.create(metadata)
    return _make


@pytest.fixture
def three_entries(make_entry):
    """
    Entries posted 2020-01-05, 2020-02-10 and 2019-12-25.

    Returns:
        Tuple (e1, e2, e3) in that posting-date order
    """
    e1 = make_entry(
        "January Entry", utc(2020, 1, 5), slug="january-entry",
        tags={TagKind.TAG: ["haskell", "physics"], TagKind.CATEGORY: ["Programming"]},
    )
    e2 = make_entry(
        "February Entry", utc(2020, 2, 10), slug="february-entry",
        tags={TagKind.TAG: ["haskell"], TagKind.SERIES: ["Hamiltonian Dynamics"]},
    )
    e3 = make_entry(
        "December Entry", utc(2019, 12, 25), slug="december-entry",
        tags={TagKind.CATEGORY: ["Programming"]},
    )
    return e1, e2, e3


# ----- Site Fixtures -----

@pytest.fixture
def renderer():
    """Renderer using the package templates."""
    return SiteRenderer()


@pytest.fixture
def site_config(tmp_dir, test_db_path):
    """Site configuration pointing at the temporary database and logs."""
    return SiteConfig(
        title="Test Blog",
        author="Tester",
        entries_per_page=2,
        db_path=test_db_path,
        log_dir=tmp_dir / "logs",
    )
