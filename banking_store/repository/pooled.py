"""
Customer repository backed by a psycopg ConnectionPool.

Each operation borrows one pooled connection for its whole duration and the
pool's context manager hands it back on every exit path, including errors
raised mid-statement. Statements run in autocommit mode; nothing is retried.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import psycopg
from psycopg import Connection
from psycopg_pool import ConnectionPool, PoolClosed, PoolTimeout

from banking_store.config import Settings, get_settings
from banking_store.domain.models import Customer
from banking_store.errors import (
    AmbiguousResult,
    ConnectionUnavailable,
    ConstraintViolation,
    NotFound,
)
from banking_store.infrastructure.db_factory import build_pool, get_pool
from banking_store.infrastructure.statements import StatementTemplates, load_statements
from banking_store.repository.abstract import AbstractCustomerRepository
from banking_store.repository.row_codec import RowCodec
from banking_store.utils.logging import get_logger

log = get_logger(__name__)


class PooledCustomerRepository(AbstractCustomerRepository):
    """
    The five customer operations over pooled psycopg connections.

    Parameters
    ----------
    pool : ConnectionPool | None
        Pool to borrow from. Not closed by `close()`.
    statements : StatementTemplates | None
        Statement texts. Defaults to `settings.statements_file` or the built-ins.
    codec : RowCodec | None
        Row mapper.
    dsn_override : str | None
        Build and own a dedicated pool for this DSN instead of the shared one.
    settings : Settings | None
        Pool knobs and acquisition timeout. Defaults to the cached settings.
    """

    def __init__(
        self,
        pool: Optional[ConnectionPool] = None,
        statements: Optional[StatementTemplates] = None,
        codec: Optional[RowCodec] = None,
        dsn_override: Optional[str] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._statements = statements or load_statements(self._settings.statements_file)
        self._codec = codec or RowCodec()
        self._dsn_override = dsn_override
        self._pool_instance: Optional[ConnectionPool] = pool
        self._owns_pool = False
        self._lock = threading.Lock()

    @property
    def statements(self) -> StatementTemplates:
        return self._statements

    def _get_pool(self) -> ConnectionPool:
        with self._lock:
            if self._pool_instance is None:
                if self._dsn_override:
                    self._pool_instance = build_pool(self._dsn_override, self._settings)
                    self._owns_pool = True
                else:
                    self._pool_instance = get_pool()
            return self._pool_instance

    @contextmanager
    def _borrow(self) -> Iterator[Connection]:
        pool = self._get_pool()
        acquired = False
        try:
            with pool.connection(timeout=self._settings.pool_timeout) as conn:
                acquired = True
                yield conn
        except (PoolTimeout, PoolClosed, psycopg.OperationalError) as exc:
            if acquired:
                raise
            raise ConnectionUnavailable(f"Could not acquire a database connection: {exc}") from exc

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> Tuple[int, List[Dict[str, Any]]]:
        """Run one statement; return (rowcount, fetched rows)."""
        with self._borrow() as conn:
            with conn.cursor() as cur:
                try:
                    cur.execute(sql, params)
                except psycopg.IntegrityError as exc:
                    raise ConstraintViolation(str(exc).strip()) from exc
                rows = cur.fetchall() if cur.description is not None else []
                return cur.rowcount, rows

    def create(self, customer: Customer) -> bool:
        params = self._codec.encode_for_insert(customer)
        rowcount, _ = self._execute(self._statements.insert, params)
        log.debug("Customer insert", extra={"account_no": customer.account_no, "rowcount": rowcount})
        return rowcount == 1

    def get_by_id(self, account_no: int) -> Customer:
        _, rows = self._execute(self._statements.select_by_id, self._codec.encode_key(account_no))
        if not rows:
            raise NotFound(account_no)
        if len(rows) > 1:
            log.error(
                "Primary key returned several rows",
                extra={"account_no": account_no, "rows": len(rows)},
            )
            raise AmbiguousResult(account_no, len(rows))
        return self._codec.decode(rows[0])

    def get_all(self) -> List[Customer]:
        _, rows = self._execute(self._statements.select_all)
        log.debug("Customers fetched", extra={"rows": len(rows)})
        return [self._codec.decode(row) for row in rows]

    def update(self, customer: Customer) -> bool:
        rowcount, _ = self._execute(
            self._statements.update_contact, self._codec.encode_for_update(customer)
        )
        log.debug("Customer contact update", extra={"account_no": customer.account_no, "rowcount": rowcount})
        return rowcount == 1

    def delete(self, account_no: int) -> bool:
        rowcount, _ = self._execute(self._statements.delete_by_id, self._codec.encode_key(account_no))
        log.debug("Customer delete", extra={"account_no": account_no, "rowcount": rowcount})
        return rowcount == 1

    def close(self) -> None:
        """Close the pool if this repository built it; drop the reference either way."""
        with self._lock:
            if self._pool_instance is not None and self._owns_pool:
                self._pool_instance.close()
            self._pool_instance = None
            self._owns_pool = False

    def __enter__(self) -> "PooledCustomerRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["PooledCustomerRepository"]
