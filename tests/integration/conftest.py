#!/usr/bin/env python3
"""
conftest.py
-----------
Shared fixtures for site integration tests.

Provides a committed database with posted entries, a draft, a scheduled
entry and tag descriptions, plus a Flask test client serving it.

Fixtures:
    populated_db: BlogDB with the sample archive committed
    app: Flask application over populated_db
    client: Flask test client
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timedelta, timezone

# --- Third-party imports ---
import pytest

# --- Local imports ---
from blog.database.models import TagKind, utcnow
from blog.site.app import create_app


def utc(year, month, day, hour=12):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def populated_db(test_db):
    """
    Database with a small committed archive.

    Posted (newest first):
        february-entry  2020-02-10  #haskell +Hamiltonian Dynamics
        january-entry   2020-01-05  #haskell #physics @Programming
        (no slug)       2019-12-25  @Programming
    Unposted:
        draft-entry     (no date)
        scheduled-entry (tomorrow)
    """
    with test_db.session_scope():
        entries = test_db.entries
        entries.create({
            "title": "January Entry",
            "slug": "january-entry",
            "posted_at": utc(2020, 1, 5),
            "content": "First paragraph of January.\n\nSecond paragraph.\n",
            "tags": {TagKind.TAG: ["haskell", "physics"], TagKind.CATEGORY: ["Programming"]},
        })
        entries.create({
            "title": "February Entry",
            "slug": "february-entry",
            "posted_at": utc(2020, 2, 10),
            "content": "# Heading\n\nFebruary *body*.\n",
            "tags": {TagKind.TAG: ["haskell"], TagKind.SERIES: ["Hamiltonian Dynamics"]},
        })
        entries.create({
            "title": "December Entry",
            "posted_at": utc(2019, 12, 25),
            "content": "Christmas.\n",
            "tags": {TagKind.CATEGORY: ["Programming"]},
        })
        entries.create({"title": "Draft Entry", "slug": "draft-entry", "content": "Secret.\n"})
        entries.create({
            "title": "Scheduled Entry",
            "slug": "scheduled-entry",
            "posted_at": utcnow() + timedelta(days=1),
            "content": "Not yet.\n",
            "tags": {TagKind.TAG: ["future"]},
        })
        test_db.tags.set_description(
            TagKind.SERIES, "Hamiltonian Dynamics", "Classical mechanics in Haskell"
        )
    return test_db


@pytest.fixture
def app(site_config, populated_db):
    """Flask application over the populated database."""
    application = create_app(site_config, db=populated_db)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
