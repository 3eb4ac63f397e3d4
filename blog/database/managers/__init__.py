"""
Entity Managers
---------------

Per-entity managers bound to a single SQLAlchemy session.

- EntryManager: posted-entry listings, lookups and writes
- TagManager: tag lookup, creation and entry-tag links

Usage:
    with db.session_scope() as session:
        recent = db.entries.recent(5)
        tag = db.tags.get(TagKind.TAG, "haskell")
"""
from .base_manager import BaseManager, HasId
from .entry_manager import EntryManager
from .tag_manager import TagManager, coerce_kind

__all__ = [
    "BaseManager",
    "HasId",
    "EntryManager",
    "TagManager",
    "coerce_kind",
]
