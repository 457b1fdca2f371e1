"""
db/connection.py
----------------
Manages the database connection pool.
Uses a SQLAlchemy engine with a bounded QueuePool for connection reuse.

The pool is owned by a `Database` object that is created at startup and
handed to repositories explicitly; there is no module-level connection state.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool, StaticPool

from config import DATABASE_URL, DB_POOL_SIZE, DB_POOL_TIMEOUT_SECONDS
from db.init_db import create_tables
from utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseConnectionError(ConnectionError):
    """The store is unreachable or the schema could not be provisioned."""


def _enable_sqlite_foreign_keys(dbapi_conn, _record) -> None:
    # SQLite ships with FK enforcement off; ON DELETE CASCADE depends on it.
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON")
    finally:
        cur.close()


class Database:
    """
    Owner of the connection pool for one store.

    Args:
        url: SQLAlchemy database URL.
        pool_size: Maximum number of concurrent connections.
        pool_timeout: Seconds to wait for a free connection before failing.
    """

    def __init__(
        self,
        url: str = DATABASE_URL,
        pool_size: int = DB_POOL_SIZE,
        pool_timeout: float = DB_POOL_TIMEOUT_SECONDS,
    ) -> None:
        self.url = url
        self.pool_size = pool_size
        self.pool_timeout = pool_timeout
        self._engine: Optional[Engine] = None

    # ── LIFECYCLE ─────────────────────────────────────────

    def init_pool(self) -> None:
        """
        Create the connection pool and provision the schema.
        Safe to call more than once.

        Raises:
            DatabaseConnectionError: If the store is unreachable or the
                schema script fails.
        """
        if self._engine is not None:
            return
        try:
            self._engine = self._build_engine()
            create_tables(self._engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize database at {self._safe_url()}: {e}")
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
            raise DatabaseConnectionError(f"Database unavailable: {self._safe_url()}") from e
        logger.info(
            f"Database connection pool initialized successfully "
            f"({self._safe_url()}, max {self.pool_size} connections)."
        )

    def close_pool(self) -> None:
        """Close all connections in the pool."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Database connection pool closed.")

    # ── ACCESS ────────────────────────────────────────────

    @property
    def engine(self) -> Engine:
        """
        The pooled engine.

        Raises:
            RuntimeError: If the pool has not been initialized.
        """
        if self._engine is None:
            raise RuntimeError("Database pool not initialized. Call init_pool() first.")
        return self._engine

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Borrow a connection for reads; it goes back to the pool on exit."""
        with self.engine.connect() as conn:
            yield conn

    @contextmanager
    def begin(self) -> Iterator[Connection]:
        """Borrow a connection inside a transaction committed on success."""
        with self.engine.begin() as conn:
            yield conn

    # ── HELPERS ───────────────────────────────────────────

    def _build_engine(self) -> Engine:
        url = make_url(self.url)
        kwargs: dict = {}

        if url.get_backend_name() == "sqlite":
            kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # every pooled connection would otherwise get its own empty database
                kwargs["poolclass"] = StaticPool
        if "poolclass" not in kwargs:
            kwargs.update(
                poolclass=QueuePool,
                pool_size=self.pool_size,
                max_overflow=0,
                pool_timeout=self.pool_timeout,
                pool_pre_ping=True,
            )

        engine = create_engine(url, **kwargs)
        if url.get_backend_name() == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    def _safe_url(self) -> str:
        return make_url(self.url).render_as_string(hide_password=True)
