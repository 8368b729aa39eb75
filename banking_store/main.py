from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import psycopg
import typer
from faker import Faker

from banking_store.config import get_settings
from banking_store.domain.factory import fake_customer
from banking_store.errors import RecordStoreError
from banking_store.infrastructure.db_factory import SCHEMA_PATH, get_sync_connection, init_schema
from banking_store.reporter import print_customers
from banking_store.repository.pooled import PooledCustomerRepository
from banking_store.services.customer_service import CustomerService
from banking_store.utils.logging import configure_logging

app = typer.Typer(help="Banking customer store CLI.")

DsnOption = typer.Option(None, "--dsn", help="Connection string overriding the DB_* settings.")


@contextmanager
def _session(dsn: Optional[str]) -> Iterator[CustomerService]:
    """Yield a service over a fresh repository; store errors exit with status 1."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    repository = PooledCustomerRepository(dsn_override=dsn, settings=settings)
    try:
        yield CustomerService(repository)
    except RecordStoreError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        repository.close()


def _echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}:***@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"pool=({settings.pool_min_size},{settings.pool_max_size}) "
        f"timeout={settings.pool_timeout}s max_idle={settings.pool_max_idle}s "
        f"max_lifetime={settings.pool_max_lifetime}s"
    )


@app.command("init-db")
def init_db(
    schema: Path = typer.Option(SCHEMA_PATH, "--schema", help="DDL script to apply."),
    dsn: Optional[str] = DsnOption,
) -> None:
    """
    Create the customers table.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    try:
        with get_sync_connection(dsn) as conn:
            init_schema(conn, schema)
    except (psycopg.Error, OSError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Applied {schema}.")


@app.command()
def demo(
    seed: Optional[int] = typer.Option(None, "--seed", help="Faker seed for a reproducible customer."),
    dsn: Optional[str] = DsnOption,
) -> None:
    """
    Add a random customer, list everyone, then fetch one customer at random.
    """
    fake = Faker()
    if seed is not None:
        fake.seed_instance(seed)
    with _session(dsn) as service:
        typer.echo("Attempting to add customer...")
        if service.add_customer(fake_customer(fake)):
            typer.echo("Customer added successfully!")
        else:
            typer.echo("Failed to add customer.")

        fetched = service.pick_random_customer()
        if fetched is None:
            typer.echo("No customers found in database. Cannot perform random selection.")
            return
        typer.echo("Fetched random customer details:")
        _echo_json(fetched.public_dict())


@app.command("list")
def list_customers(
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    dsn: Optional[str] = DsnOption,
) -> None:
    """
    Print every customer.
    """
    with _session(dsn) as service:
        customers = service.list_customers()
    if as_json:
        _echo_json([customer.public_dict() for customer in customers])
    else:
        print_customers(customers)


@app.command()
def get(account_no: int, dsn: Optional[str] = DsnOption) -> None:
    """
    Print one customer as JSON.
    """
    with _session(dsn) as service:
        _echo_json(service.find_customer(account_no).public_dict())


@app.command("update-contact")
def update_contact(account_no: int, contact_no: int, dsn: Optional[str] = DsnOption) -> None:
    """
    Change a customer's contact number.
    """
    with _session(dsn) as service:
        updated = service.change_contact_no(account_no, contact_no)
    if not updated:
        typer.echo(f"Contact number of {account_no} was not changed.")
        raise typer.Exit(code=1)
    typer.echo(f"Updated contact number of {account_no}.")


@app.command()
def delete(account_no: int, dsn: Optional[str] = DsnOption) -> None:
    """
    Delete a customer.
    """
    with _session(dsn) as service:
        removed = service.remove_customer(account_no)
    if not removed:
        typer.echo(f"No customer with account_no={account_no}.")
        raise typer.Exit(code=1)
    typer.echo(f"Deleted {account_no}.")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
