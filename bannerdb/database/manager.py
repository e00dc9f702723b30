#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the banner store.

Provides the BannerDB class, the single entry point of the access layer.
Handles:
    - Initialization of the engine, connection pool and sessionmaker
    - Transactional session scope with automatic rollback
    - Schema creation on a fresh database
    - The five banner operations, each in its own transaction

Core Operations:
    Read:
        - resolve_content: content for one (feature, tag) pair
        - resolve_banners: filtered, paginated banner listing
    Write:
        - create_banner: create or reuse a banner and link it
        - update_banner: overwrite a banner and its links
    Delete:
        - delete_banner: remove a banner and its links

Notes
==============
- Managers are built per call; BannerDB holds no per-request state
- Every operation accepts an optional RequestContext
- SQLite engines get foreign keys and working SAVEPOINTs;
  server databases get the configured pool bounds
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

# --- Third party ---
from sqlalchemy import create_engine, event, text, Engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from bannerdb.core.config import AppConfig, PoolSettings
from bannerdb.core.context import RequestContext
from bannerdb.core.exceptions import DatabaseError
from bannerdb.core.logging_manager import BannerLogger
from .decorators import handle_db_errors
from .managers import BannerManager, BannerResolver, CascadeDeleter
from .models import Banner, Base


# ----- Main Database Manager -----
class BannerDB:
    """
    Main database manager for the banner store.

    Attributes:
        - url (URL): Parsed SQLAlchemy URL
        - engine (Engine): SQLAlchemy engine instance
        - SessionLocal (sessionmaker): SQLAlchemy session factory
        - logger (BannerLogger | None): Operation logger

    Usage:
        db = BannerDB("sqlite:///data/banner.db", log_dir="logs")
        db.initialize_schema()
        banner_id = db.create_banner({"content": "..."}, feature_id=1, tag_ids=[10])
        content = db.resolve_content(1, 10)
    """

    # ---- Initialization ----
    def __init__(
        self,
        database_url: Union[str, URL],
        log_dir: Optional[Union[str, Path]] = None,
        pool: Optional[PoolSettings] = None,
        env: str = "local",
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            database_url (str | URL): SQLAlchemy connection URL
            log_dir (str | Path): Directory for log files (optional)
            pool (PoolSettings): Pool bounds for server databases
            env (str): Deployment environment; selects console log level
        """
        self.url: URL = make_url(database_url)
        self.pool = pool or PoolSettings()
        self.env = env

        # --- Logging ---
        if log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve()
            self.logger: Optional[BannerLogger] = BannerLogger(
                self.log_dir, component_name="database", env=env
            )
        else:
            self.logger = None

        self._setup_engine()

    @classmethod
    def from_config(cls, config: AppConfig) -> "BannerDB":
        """Build a BannerDB from a loaded AppConfig."""
        return cls(
            config.database.url(),
            log_dir=config.log_dir,
            pool=config.database.pool,
            env=config.env,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.url.get_backend_name() == "sqlite"

    @property
    def is_postgresql(self) -> bool:
        return self.url.get_backend_name() == "postgresql"

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        try:
            if self.logger:
                self.logger.log_operation(
                    "database_init_start",
                    {"url": self.url.render_as_string(hide_password=True)},
                )

            engine_options: Dict[str, Any] = {"echo": False}
            if self.is_sqlite:
                database = self.url.database
                if database and database != ":memory:":
                    Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)
            else:
                engine_options.update(
                    pool_size=self.pool.pool_size,
                    max_overflow=self.pool.max_overflow,
                    pool_recycle=int(self.pool.max_lifetime),
                    pool_pre_ping=True,
                )

            self.engine: Engine = create_engine(self.url, **engine_options)

            if self.is_sqlite:
                self._configure_sqlite(self.engine)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            if self.logger:
                self.logger.log_operation("database_init_complete", {"success": True})

        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    @staticmethod
    def _configure_sqlite(engine: Engine) -> None:
        """
        Enable foreign keys and SAVEPOINT support on SQLite connections.

        pysqlite opens transactions lazily and would otherwise let a
        RELEASE SAVEPOINT commit the enclosing work.
        """

        @event.listens_for(engine, "connect")
        def _on_connect(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _on_begin(conn):
            conn.exec_driver_sql("BEGIN")

    # ---- Session Management ----
    @contextmanager
    def session_scope(self, ctx: Optional[RequestContext] = None) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        Commits on success, rolls back on any exception, always closes.
        With a deadline on PostgreSQL the remaining time is applied as the
        transaction's statement_timeout.

        Usage:
            with db.session_scope() as session:
                BannerManager(session, db.logger).create(...)
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        if self.logger:
            self.logger.log_debug("session_start", {"session_id": session_id})

        try:
            if ctx is not None:
                ctx.check("begin")
                self._apply_deadline(session, ctx)
            yield session
            session.commit()
            if self.logger:
                self.logger.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            if self.logger:
                self.logger.log_debug(
                    "session_rollback",
                    {"session_id": session_id, "error": type(e).__name__},
                )
            raise
        finally:
            session.close()
            if self.logger:
                self.logger.log_debug("session_close", {"session_id": session_id})

    def _apply_deadline(self, session: Session, ctx: RequestContext) -> None:
        remaining = ctx.remaining()
        if remaining is None or not self.is_postgresql:
            return
        timeout_ms = max(1, int(remaining * 1000))
        session.execute(text(f"SET LOCAL statement_timeout = {timeout_ms}"))

    # ---- Schema ----
    @handle_db_errors
    def initialize_schema(self) -> None:
        """Create all tables that do not exist yet."""
        Base.metadata.create_all(bind=self.engine)
        if self.logger:
            self.logger.log_operation(
                "schema_initialized", {"tables": sorted(Base.metadata.tables)}
            )

    def dispose(self) -> None:
        """Close pooled connections and log handlers."""
        self.engine.dispose()
        if self.logger:
            self.logger.close()

    def __enter__(self) -> "BannerDB":
        """Support for context manager usage."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Cleanup on context manager exit."""
        del exc_type, exc_val, exc_tb
        self.dispose()

    # ---- Read ----
    @handle_db_errors
    def resolve_content(
        self, feature_id: int, tag_id: int, ctx: Optional[RequestContext] = None
    ) -> str:
        """
        Content of the banner linked to both ids (lowest id on ties).

        Raises:
            BannerNotFoundError: If no banner matches
        """
        with self.session_scope(ctx) as session:
            return BannerResolver(session, self.logger, ctx).resolve_content(
                feature_id, tag_id
            )

    @handle_db_errors
    def resolve_banners(
        self,
        feature_id: int = 0,
        tag_id: int = 0,
        limit: int = 0,
        offset: int = 0,
        ctx: Optional[RequestContext] = None,
    ) -> Tuple[List[Banner], List[List[int]]]:
        """
        Banners under optional filters, with each banner's full tag-id list.

        Zero disables a filter; ``limit=0`` disables pagination.

        Raises:
            BannerNotFoundError: If nothing matches
        """
        with self.session_scope(ctx) as session:
            return BannerResolver(session, self.logger, ctx).resolve_banners(
                feature_id, tag_id, limit, offset
            )

    # ---- Write ----
    @handle_db_errors
    def create_banner(
        self,
        banner: Dict[str, Any],
        feature_id: int,
        tag_ids: Sequence[int],
        ctx: Optional[RequestContext] = None,
    ) -> int:
        """Create (or reuse by content) a banner and link it. Returns its id."""
        with self.session_scope(ctx) as session:
            return BannerManager(session, self.logger, ctx).create(
                banner, feature_id, tag_ids
            )

    @handle_db_errors
    def update_banner(
        self,
        banner: Dict[str, Any],
        feature_id: int,
        tag_ids: Sequence[int],
        ctx: Optional[RequestContext] = None,
    ) -> None:
        """Overwrite a banner, its feature link and its tag set."""
        with self.session_scope(ctx) as session:
            BannerManager(session, self.logger, ctx).update(banner, feature_id, tag_ids)

    # ---- Delete ----
    @handle_db_errors
    def delete_banner(
        self, banner_id: int, ctx: Optional[RequestContext] = None
    ) -> None:
        """Remove a banner and its links; features and tags stay."""
        with self.session_scope(ctx) as session:
            CascadeDeleter(session, self.logger, ctx).delete(banner_id)
