"""
Database Models Package
------------------------

SQLAlchemy ORM models for the blog database.

- base: Base class, UTC datetime type and timestamp mixin
- associations: Many-to-many relationship tables
- enums: Enumeration types
- core: Entry model
- entities: Tag model

Usage:
    from blog.database.models import Entry, Tag, TagKind
"""
# Base classes
from .base import Base, TimestampMixin, UTCDateTime, utcnow

# Enumerations
from .enums import TagKind

# Association tables
from .associations import entry_tags

# Entity models
from .entities import Tag

# Core models
from .core import Entry

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UTCDateTime",
    "utcnow",
    # Enums
    "TagKind",
    # Association tables
    "entry_tags",
    # Models
    "Entry",
    "Tag",
]
