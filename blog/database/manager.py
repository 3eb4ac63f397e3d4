#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the blog engine.

Provides the BlogDB class for interacting with the entry database.
Handles:
    - Initialization of the database engine and sessionmaker
    - Schema creation
    - Transactional session scopes with logging
    - Per-session entity managers (entries, tags)

Usage:
    db = BlogDB(db_path="data/db/blog.db", log_dir="logs")
    with db.session_scope() as session:
        recent = db.entries.recent(5)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# --- Local imports ---
from blog.core.exceptions import DatabaseError
from blog.core.logging_manager import BlogLogger
from .models import Base
from .managers import EntryManager, TagManager

MEMORY_URL = "sqlite://"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class BlogDB:
    """
    Main database manager for the blog.

    Attributes:
        db_url: SQLAlchemy URL of the database
        engine: SQLAlchemy engine instance
        SessionLocal: SQLAlchemy session factory
        logger: Optional BlogLogger

    Usage:
        db = BlogDB(db_path="~/site/blog.db")
        with db.session_scope() as session:
            entry = db.entries.get_by_slug("hello-world")
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Optional[Union[str, Path]] = None,
        db_url: Optional[str] = None,
        log_dir: Optional[Union[str, Path]] = None,
        logger: Optional[BlogLogger] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path: Path to a SQLite file
            db_url: Full SQLAlchemy URL; overrides db_path. With neither,
                an in-memory SQLite database is used.
            log_dir: Directory for log files (optional)
            logger: Pre-built logger; takes precedence over log_dir

        Raises:
            ValueError: If both db_path and db_url are given
        """
        if db_path is not None and db_url is not None:
            raise ValueError("Provide either db_path or db_url, not both")

        if db_url is not None:
            self.db_path: Optional[Path] = None
            self.db_url = db_url
        elif db_path is not None:
            self.db_path = Path(db_path).expanduser().resolve()
            self.db_url = f"sqlite:///{self.db_path}"
        else:
            self.db_path = None
            self.db_url = MEMORY_URL

        if logger is not None:
            self.logger: Optional[BlogLogger] = logger
        elif log_dir:
            self.logger = BlogLogger(
                Path(log_dir).expanduser().resolve() / "system",
                component_name="database",
            )
        else:
            self.logger = None

        self._entry_manager: Optional[EntryManager] = None
        self._tag_manager: Optional[TagManager] = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine, session factory and schema."""
        try:
            if self.logger:
                self.logger.log_operation("database_init_start", {"db_url": self.db_url})

            if self.db_path is not None:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)

            engine_kwargs = {"echo": False, "future": True}
            if self.db_url == MEMORY_URL:
                # One shared connection so every session sees the same database
                engine_kwargs.update(
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
            else:
                engine_kwargs["pool_pre_ping"] = True

            self.engine: Engine = create_engine(self.db_url, **engine_kwargs)
            if self.engine.dialect.name == "sqlite":
                event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
                future=True,
            )

            self.initialize_schema()

            if self.logger:
                self.logger.log_operation("database_init_complete", {"success": True})

        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    def initialize_schema(self) -> None:
        """Create all tables that do not exist yet."""
        Base.metadata.create_all(self.engine)
        if self.logger:
            self.logger.log_operation(
                "schema_initialized", {"tables": sorted(Base.metadata.tables)}
            )

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        Also binds the entity managers (``db.entries``, ``db.tags``) to
        the session for the duration of the scope.

        Usage:
            with db.session_scope() as session:
                entries = db.entries.recent(5)
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        self._entry_manager = EntryManager(session, self.logger)
        self._tag_manager = TagManager(session, self.logger)

        if self.logger:
            self.logger.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            if self.logger:
                self.logger.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            if self.logger:
                self.logger.log_error(
                    e, {"operation": "session_rollback", "session_id": session_id}
                )
            raise
        finally:
            self._entry_manager = None
            self._tag_manager = None

            session.close()
            if self.logger:
                self.logger.log_debug("session_close", {"session_id": session_id})

    def get_session(self) -> Session:
        """Create and return a new SQLAlchemy session."""
        return self.SessionLocal()

    @contextmanager
    def read_session(self) -> Iterator[Session]:
        """
        Short-lived session for one read-only unit of work (a web request).

        Unlike session_scope, nothing is bound on this BlogDB, so
        concurrent requests never share managers.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    @property
    def entries(self) -> EntryManager:
        """
        Access EntryManager for entry queries and writes.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._entry_manager is None:
            raise DatabaseError(
                "EntryManager requires active session. "
                "Use within session_scope: "
                "with db.session_scope() as session: db.entries.recent()"
            )
        return self._entry_manager

    @property
    def tags(self) -> TagManager:
        """
        Access TagManager for tag operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._tag_manager is None:
            raise DatabaseError(
                "TagManager requires active session. "
                "Use within session_scope."
            )
        return self._tag_manager
