from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict

import psycopg
import pytest
from fakes import FakeConnection, FakePool

from banking_store.config import Settings
from banking_store.domain.models import Customer
from banking_store.errors import (
    AmbiguousResult,
    ConnectionUnavailable,
    ConstraintViolation,
    NotFound,
    ValidationError,
)
from banking_store.infrastructure.statements import StatementTemplates
from banking_store.repository import pooled as pooled_module
from banking_store.repository.abstract import CustomerRepository
from banking_store.repository.pooled import PooledCustomerRepository

NEW_CONTACT_NO = 1111111111
CONCURRENT_CALLS = 20
WORKERS = 4


def _repository(pool: FakePool, test_settings: Settings) -> PooledCustomerRepository:
    return PooledCustomerRepository(
        pool=pool,  # type: ignore[arg-type]
        statements=StatementTemplates(),
        settings=test_settings,
    )


def test_repository_satisfies_protocol(test_settings: Settings) -> None:
    assert isinstance(_repository(FakePool(), test_settings), CustomerRepository)


def test_create_binds_seven_parameters_in_column_order(
    john_doe: Customer, test_settings: Settings
) -> None:
    pool = FakePool(FakeConnection(rowcount=1))
    repo = _repository(pool, test_settings)

    assert repo.create(john_doe) is True

    sql, params = pool.conn.executed[0]
    assert sql == repo.statements.insert
    assert params == (
        1234567890,
        "John",
        "Michael",
        "Doe",
        "john.doe@email.com",
        "Pass@123",
        9876543210,
    )
    assert pool.acquired == pool.released == 1
    assert pool.timeouts == [test_settings.pool_timeout]


def test_create_reports_false_when_no_row_affected(
    john_doe: Customer, test_settings: Settings
) -> None:
    pool = FakePool(FakeConnection(rowcount=0))
    assert _repository(pool, test_settings).create(john_doe) is False
    assert pool.released == 1


def test_create_maps_integrity_error_and_releases_connection(
    john_doe: Customer, test_settings: Settings
) -> None:
    duplicate = psycopg.errors.UniqueViolation('duplicate key value violates unique constraint "customers_pkey"')
    pool = FakePool(FakeConnection(error=duplicate))

    with pytest.raises(ConstraintViolation, match="customers_pkey") as excinfo:
        _repository(pool, test_settings).create(john_doe)

    assert excinfo.value.__cause__ is duplicate
    assert pool.acquired == pool.released == 1
    assert pool.in_use == 0


def test_exhausted_pool_raises_connection_unavailable(
    john_doe: Customer, test_settings: Settings
) -> None:
    pool = FakePool(exhausted=True)
    repo = _repository(pool, test_settings)

    with pytest.raises(ConnectionUnavailable):
        repo.create(john_doe)
    with pytest.raises(ConnectionUnavailable):
        repo.get_all()
    assert pool.acquired == 0


def test_invalid_record_fails_before_acquiring(test_settings: Settings) -> None:
    pool = FakePool()
    broken = Customer.model_construct(account_no=1, email="a@b.c", contact_no=1)

    with pytest.raises(ValidationError):
        _repository(pool, test_settings).create(broken)
    assert pool.acquired == 0
    assert pool.conn.executed == []


def test_unexpected_statement_error_propagates_and_releases(test_settings: Settings) -> None:
    pool = FakePool(FakeConnection(error=RuntimeError("socket closed")))

    with pytest.raises(RuntimeError, match="socket closed"):
        _repository(pool, test_settings).delete(1)
    assert pool.acquired == pool.released == 1


def test_operational_error_after_acquire_is_not_relabelled(test_settings: Settings) -> None:
    pool = FakePool(FakeConnection(error=psycopg.OperationalError("server closed the connection")))

    with pytest.raises(psycopg.OperationalError):
        _repository(pool, test_settings).delete(1)
    assert pool.released == 1


def test_get_by_id_decodes_single_row(
    john_doe: Customer, john_doe_row: Dict[str, Any], test_settings: Settings
) -> None:
    pool = FakePool(FakeConnection(rows=[john_doe_row]))

    fetched = _repository(pool, test_settings).get_by_id(1234567890)

    assert fetched.persisted_fields() == john_doe.persisted_fields()
    assert fetched.created_at is not None
    assert pool.conn.executed[0][1] == (1234567890,)
    assert pool.released == 1


def test_get_by_id_without_rows_raises_not_found(test_settings: Settings) -> None:
    pool = FakePool(FakeConnection(rows=[]))

    with pytest.raises(NotFound) as excinfo:
        _repository(pool, test_settings).get_by_id(42)
    assert excinfo.value.key == 42
    assert pool.released == 1


def test_get_by_id_with_two_rows_raises_ambiguous_result(
    john_doe_row: Dict[str, Any], test_settings: Settings
) -> None:
    pool = FakePool(FakeConnection(rows=[john_doe_row, dict(john_doe_row)]))

    with pytest.raises(AmbiguousResult) as excinfo:
        _repository(pool, test_settings).get_by_id(1234567890)
    assert excinfo.value.count == 2
    assert pool.released == 1


def test_get_all_on_empty_table_returns_empty_list(test_settings: Settings) -> None:
    pool = FakePool(FakeConnection(rows=[]))
    assert _repository(pool, test_settings).get_all() == []


def test_get_all_keeps_storage_order(john_doe_row: Dict[str, Any], test_settings: Settings) -> None:
    second = dict(john_doe_row, account_no=2, email="jane@email.com", first_name="Jane", middle_name=None)
    pool = FakePool(FakeConnection(rows=[john_doe_row, second]))

    customers = _repository(pool, test_settings).get_all()

    assert [c.account_no for c in customers] == [1234567890, 2]
    assert customers[1].full_name.middle_name is None
    assert pool.conn.executed[0] == (StatementTemplates().select_all, ())


def test_update_binds_contact_then_account(john_doe: Customer, test_settings: Settings) -> None:
    pool = FakePool(FakeConnection(rowcount=1))
    changed = john_doe.model_copy(update={"contact_no": NEW_CONTACT_NO, "email": "ignored@email.com"})

    assert _repository(pool, test_settings).update(changed) is True
    sql, params = pool.conn.executed[0]
    assert sql == StatementTemplates().update_contact
    assert params == (NEW_CONTACT_NO, 1234567890)


def test_update_of_missing_account_returns_false(john_doe: Customer, test_settings: Settings) -> None:
    pool = FakePool(FakeConnection(rowcount=0))
    assert _repository(pool, test_settings).update(john_doe) is False
    assert pool.released == 1


@pytest.mark.parametrize("rowcount, expected", [(1, True), (0, False)])
def test_delete_reports_whether_a_row_was_removed(
    rowcount: int, expected: bool, test_settings: Settings
) -> None:
    pool = FakePool(FakeConnection(rowcount=rowcount))
    assert _repository(pool, test_settings).delete(1234567890) is expected
    assert pool.conn.executed[0][1] == (1234567890,)


def test_concurrent_calls_each_borrow_and_return_a_connection(test_settings: Settings) -> None:
    pool = FakePool(FakeConnection(rowcount=1))
    repo = _repository(pool, test_settings)

    with ThreadPoolExecutor(max_workers=WORKERS) as executor:
        results = list(executor.map(repo.delete, range(CONCURRENT_CALLS)))

    assert all(results)
    assert pool.acquired == pool.released == CONCURRENT_CALLS
    assert pool.in_use == 0


def test_dsn_override_builds_and_closes_owned_pool(monkeypatch, test_settings: Settings) -> None:
    built: list[FakePool] = []

    def fake_build_pool(conninfo: str, settings: Settings) -> FakePool:
        assert conninfo == "postgresql://test"
        assert settings is test_settings
        pool = FakePool(FakeConnection(rowcount=1))
        built.append(pool)
        return pool

    monkeypatch.setattr(pooled_module, "build_pool", fake_build_pool)

    with PooledCustomerRepository(dsn_override="postgresql://test", settings=test_settings) as repo:
        assert repo.delete(1) is True

    assert len(built) == 1
    assert built[0].closed is True
    assert repo._pool_instance is None


def test_close_leaves_borrowed_pool_open(test_settings: Settings) -> None:
    pool = FakePool()
    repo = _repository(pool, test_settings)
    repo.close()
    assert pool.closed is False


def test_shared_pool_is_used_without_override(monkeypatch, test_settings: Settings) -> None:
    shared = FakePool(FakeConnection(rowcount=1))
    monkeypatch.setattr(pooled_module, "get_pool", lambda: shared)

    repo = PooledCustomerRepository(settings=test_settings)
    assert repo.delete(5) is True
    repo.close()

    assert shared.acquired == 1
    assert shared.closed is False
