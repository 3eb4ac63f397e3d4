#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Scriptorium blog engine.

Exception Hierarchy:
    Exception (built-in)
    └── BlogError - Base for all engine errors
        ├── DatabaseError - Database-related errors
        ├── ValidationError - Data validation failures
        ├── ConfigError - Invalid or unreadable site configuration
        ├── EntryImportError - Markdown to database import errors
        └── PreconditionError - Programming errors at a function boundary
            └── ArchiveGroupingError - Malformed input to the archive grouper

Not-found conditions are not exceptions: route handlers answer them with
a redirect to the not-found page.

Usage:
    from blog.core.exceptions import DatabaseError, ValidationError

    try:
        db.entries.create(metadata)
    except ValidationError as e:
        logger.log_warning(f"Invalid entry: {e}")
"""


class BlogError(Exception):
    """
    Base exception for the blog engine.

    Catch this to handle any error raised deliberately by engine code.
    """

    pass


class DatabaseError(BlogError):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to connection issues,
    query errors, integrity violations, or other database problems.

    Examples:
        >>> raise DatabaseError("Connection to database failed")
        >>> raise DatabaseError("Data integrity violation: duplicate slug")
    """

    pass


class ValidationError(BlogError):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Missing required fields (an entry without a title)
    - Invalid formats (unparseable posting dates)
    - Unknown tag kinds

    Examples:
        >>> raise ValidationError("Required field 'title' missing or empty")
        >>> raise ValidationError("Unknown tag kind: 'label'")
    """

    pass


class ConfigError(BlogError):
    """
    Exception for invalid site configuration.

    Examples:
        >>> raise ConfigError("Unknown configuration key: 'entries_per_pg'")
        >>> raise ConfigError("entries_per_page must be positive, got 0")
    """

    pass


class EntryImportError(BlogError):
    """
    Exception for Markdown to database import failures.

    Raised when an entry file cannot be parsed or written:
    - Malformed YAML frontmatter
    - Missing title and no heading to fall back on
    - Database write failures for a single entry

    Examples:
        >>> raise EntryImportError("Failed to parse posts/monads.md: bad YAML")
    """

    pass


class PreconditionError(BlogError):
    """
    Exception for violated function-boundary contracts.

    These signal programming errors (callers passing data a function
    documents it will not accept), never user-facing conditions. They
    are raised instead of producing silently incorrect output.
    """

    pass


class ArchiveGroupingError(PreconditionError):
    """
    Exception for malformed archive grouping input.

    Raised when the grouper receives an entry without a posting time
    or a sequence that is not ordered newest first.

    Examples:
        >>> raise ArchiveGroupingError("Entry 12 has no posted_at")
    """

    pass
