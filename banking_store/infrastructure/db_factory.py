"""
Database connection factory utilities for the banking customer store.

Provides centralized management of the psycopg connection pool with proper
lifecycle management. The PoolManager singleton ensures the pool is closed on
application exit.

The single, non-pooled connection used for schema bootstrap retries transient
connection failures using tenacity. Pooled store operations never retry.
"""

from __future__ import annotations

import atexit
import threading
from pathlib import Path
from typing import Optional

import psycopg
from psycopg import Connection
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from banking_store.config import Settings, get_settings
from banking_store.utils.logging import get_logger

log = get_logger(__name__)

SCHEMA_PATH = Path(__file__).with_name("init.sql")


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def build_pool(conninfo: str, settings: Optional[Settings] = None) -> ConnectionPool:
    """
    Create a dedicated connection pool sized from settings.

    Connections are opened in autocommit mode with a dict row factory, so every
    statement commits on its own and rows are read by column name.

    Parameters
    ----------
    conninfo : str
        Connection string of the target database.
    settings : Settings | None
        Source of the pool knobs. Defaults to the cached settings.

    Returns
    -------
    ConnectionPool
        An opened pool owned by the caller.
    """
    settings = settings or get_settings()
    log.debug(
        "Opening connection pool",
        extra={
            "pool_min_size": settings.pool_min_size,
            "pool_max_size": settings.pool_max_size,
            "pool_timeout": settings.pool_timeout,
        },
    )
    return ConnectionPool(
        conninfo=conninfo,
        kwargs={"autocommit": True, "row_factory": dict_row},
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.pool_timeout,
        max_idle=settings.pool_max_idle,
        max_lifetime=settings.pool_max_lifetime,
        name="banking-store",
        open=True,
    )


class PoolManager:
    """
    Thread-safe singleton for managing the shared connection pool.

    Handles lifecycle management with automatic cleanup via atexit hook.
    """

    _instance: Optional["PoolManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "PoolManager":
        """Create or return the singleton instance."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._pool = None
                atexit.register(cls._instance.close_all)
            return cls._instance

    def get_pool(self) -> ConnectionPool:
        """
        Get or create the shared connection pool.

        Returns
        -------
        ConnectionPool
            The managed pool instance, configured from settings.
        """
        with self._lock:
            if self._pool is None:
                settings = get_settings()
                self._pool = build_pool(build_dsn(settings), settings)
            return self._pool

    def close_all(self) -> None:
        """
        Close the managed pool and release its connections.

        This is called automatically on exit via atexit hook.
        """
        with self._lock:
            if self._pool is not None:
                try:
                    self._pool.close()
                except Exception:  # noqa: BLE001 - best-effort cleanup at shutdown
                    log.warning("Failed to close connection pool", exc_info=True)
                finally:
                    self._pool = None


def get_pool() -> ConnectionPool:
    """Get or create the shared connection pool via PoolManager."""
    return PoolManager().get_pool()


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Open a dedicated autocommit connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.
    Meant for administrative one-off work such as schema bootstrap.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn or build_dsn(), autocommit=True)


def init_schema(conn: Connection, schema_path: Path | str = SCHEMA_PATH) -> None:
    """Execute the DDL script at `schema_path` (the packaged `init.sql` by default) on `conn`."""
    path = Path(schema_path)
    ddl = path.read_text(encoding="utf-8")
    with conn.cursor() as cur:
        cur.execute(ddl)
    log.info("Schema applied", extra={"schema": str(path)})


__all__ = [
    "PoolManager",
    "SCHEMA_PATH",
    "build_dsn",
    "build_pool",
    "get_pool",
    "get_sync_connection",
    "init_schema",
]
