#!/usr/bin/env python3
"""
Blog Database Package
---------------------

Entry store for the blog engine:
- BlogDB: engine, schema and session management
- managers: entry and tag queries
- models: Entry, Tag, TagKind
- decorators: db_operation, error translation and timing for manager methods
"""

from .manager import BlogDB
from blog.core.exceptions import DatabaseError, ValidationError
from .decorators import db_operation

__all__ = [
    "BlogDB",
    "DatabaseError",
    "ValidationError",
    "db_operation",
]
