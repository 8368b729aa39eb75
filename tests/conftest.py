"""
Pytest configuration for the banking customer store.

Provides fixtures for:
- Settings isolated from the developer's environment
- Sample customers and rows
- Database connection management and table cleanup for integration tests
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Any, Dict, Generator

import psycopg
import pytest

from banking_store.config import Settings
from banking_store.domain.factory import new_customer, new_full_name
from banking_store.domain.models import Customer
from banking_store.infrastructure.db_factory import SCHEMA_PATH


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        _env_file=None,
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "banking"),
        pool_max_size=4,
        pool_timeout=2.0,
        log_level="DEBUG",
        statements_file=None,
    )


@pytest.fixture
def john_doe() -> Customer:
    return new_customer(
        account_no=1234567890,
        full_name=new_full_name("John", "Doe", middle_name="Michael"),
        email="john.doe@email.com",
        password="Pass@123",
        contact_no=9876543210,
    )


@pytest.fixture
def john_doe_row() -> Dict[str, Any]:
    return {
        "account_no": 1234567890,
        "first_name": "John",
        "middle_name": "Michael",
        "last_name": "Doe",
        "email": "john.doe@email.com",
        "password": "Pass@123",
        "contact_no": 9876543210,
        "created_at": datetime(2024, 1, 1, 12, 0, 0),
        "updated_at": datetime(2024, 1, 1, 12, 0, 0),
    }


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped autocommit connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn, autocommit=True)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Ensure the customers table exists.
    """
    with db_connection.cursor() as cur:
        cur.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
    return True


@pytest.fixture(scope="function")
def clean_customers_table(db_connection: psycopg.Connection, db_schema_initialized: bool):
    """
    Empty the customers table before and after each test function.
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.customers;")
    yield
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.customers;")
