"""
Infrastructure package for the banking customer store.

Centralizes database connectivity concerns (pooling, DSN building, schema
bootstrap) and the statement templates. Keep this layer focused on I/O and
resource management, decoupled from repository and service logic.
"""

from banking_store.infrastructure.db_factory import (
    PoolManager,
    build_dsn,
    build_pool,
    get_pool,
    get_sync_connection,
    init_schema,
)
from banking_store.infrastructure.statements import StatementTemplates, load_statements

__all__ = [
    "PoolManager",
    "StatementTemplates",
    "build_dsn",
    "build_pool",
    "get_pool",
    "get_sync_connection",
    "init_schema",
    "load_statements",
]
