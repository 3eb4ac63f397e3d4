#!/usr/bin/env python3
"""
test_manager.py
---------------
Tests for BlogDB: engine setup, session scopes and manager binding.
"""
import pytest
from sqlalchemy import inspect

from blog.core.exceptions import DatabaseError
from blog.database.manager import BlogDB
from blog.database.models import Entry


class TestBlogDBSetup:
    """Engine and schema."""

    def test_creates_file_and_tables(self, tmp_dir):
        """A file database is created with every table."""
        db_path = tmp_dir / "nested" / "blog.db"
        db = BlogDB(db_path=db_path)

        assert db_path.exists()
        assert {"entries", "tags", "entry_tags"} <= set(inspect(db.engine).get_table_names())
        db.dispose()

    def test_in_memory_default(self):
        """Without a path or URL the database lives in memory."""
        db = BlogDB()
        assert db.db_url == "sqlite://"
        with db.session_scope():
            db.entries.create({"title": "Memory"})
        with db.session_scope():
            assert len(db.entries.drafts()) == 1

    def test_path_and_url_exclusive(self, tmp_dir):
        with pytest.raises(ValueError):
            BlogDB(db_path=tmp_dir / "a.db", db_url="sqlite://")


class TestSessionScope:
    """Transactional scopes and manager access."""

    def test_commits(self, test_db):
        with test_db.session_scope():
            test_db.entries.create({"title": "Kept", "slug": "kept"})

        with test_db.session_scope() as session:
            assert session.query(Entry).count() == 1

    def test_rolls_back_on_error(self, test_db):
        """Errors roll the whole scope back and propagate."""
        with pytest.raises(RuntimeError):
            with test_db.session_scope():
                test_db.entries.create({"title": "Lost"})
                raise RuntimeError("boom")

        with test_db.session_scope() as session:
            assert session.query(Entry).count() == 0

    def test_managers_require_scope(self, test_db):
        """Managers are only reachable inside session_scope."""
        with pytest.raises(DatabaseError):
            test_db.entries
        with pytest.raises(DatabaseError):
            test_db.tags

        with test_db.session_scope():
            assert test_db.entries is not None

        with pytest.raises(DatabaseError):
            test_db.entries

    def test_read_session_binds_nothing(self, test_db):
        """Request sessions leave the BlogDB untouched."""
        with test_db.read_session() as session:
            assert session.query(Entry).count() == 0
            with pytest.raises(DatabaseError):
                test_db.entries
