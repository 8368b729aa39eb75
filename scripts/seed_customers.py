"""
Seeding script for the banking customer store.

Generates deterministic Faker customers and inserts them one by one through
the pooled repository. Customers whose account number or email already exist
are skipped and counted.
"""

from __future__ import annotations

import json
import sys
import time
from typing import List, Tuple

import typer
from faker import Faker

from banking_store.config import get_settings
from banking_store.domain.factory import fake_customer
from banking_store.domain.models import Customer
from banking_store.errors import ConstraintViolation
from banking_store.repository.abstract import CustomerRepository
from banking_store.repository.pooled import PooledCustomerRepository
from banking_store.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Generate synthetic customers and insert them into Postgres.")
log = get_logger(__name__)


def _generate_customers(count: int, seed: int, locale: str = "en_US") -> List[Customer]:
    fake = Faker(locale)
    fake.seed_instance(seed)
    customers: List[Customer] = []
    seen: set[int] = set()
    while len(customers) < count:
        customer = fake_customer(fake)
        if customer.account_no in seen:
            continue
        seen.add(customer.account_no)
        customers.append(customer)
    return customers


def _insert_customers(repository: CustomerRepository, customers: List[Customer]) -> Tuple[int, int]:
    """Insert each customer; return (inserted, skipped)."""
    inserted = skipped = 0
    for customer in customers:
        try:
            if repository.create(customer):
                inserted += 1
            else:
                skipped += 1
        except ConstraintViolation:
            log.warning("Customer already exists, skipping", extra={"account_no": customer.account_no})
            skipped += 1
    return inserted, skipped


@app.command()
def main(
    count: int = typer.Option(
        10,
        "--count",
        "-n",
        help="Number of customers to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic Faker seed.",
    ),
    dsn: str | None = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the generated customers as JSON; skip inserting.",
    ),
) -> None:
    """
    Generate synthetic customers and optionally insert them.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    start = time.perf_counter()
    customers = _generate_customers(count, seed)
    typer.echo(f"Generated {len(customers):,} customers (seed={seed}) in {time.perf_counter() - start:.2f}s")

    if dry_run:
        typer.echo(json.dumps([c.public_dict() for c in customers], indent=2))
        return

    with PooledCustomerRepository(dsn_override=dsn, settings=settings) as repository:
        inserted, skipped = _insert_customers(repository, customers)
    typer.echo(
        f"Inserted {inserted:,} customers, skipped {skipped:,} "
        f"in {time.perf_counter() - start:.2f}s total."
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
