"""
Factories for fresh Customer and FullName values.

`fake_customer` produces valid random customers for the demo command and the
seeding script.
"""
from __future__ import annotations

from typing import Optional

from faker import Faker

from banking_store.domain.models import Customer, FullName

ACCOUNT_NO_MIN = 1_000_000_000
ACCOUNT_NO_MAX = 9_999_999_999


def new_full_name(first_name: str, last_name: str, middle_name: Optional[str] = None) -> FullName:
    return FullName(first_name=first_name, middle_name=middle_name, last_name=last_name)


def new_customer(
    account_no: int,
    full_name: FullName,
    email: str,
    password: str,
    contact_no: int,
) -> Customer:
    return Customer(
        account_no=account_no,
        full_name=full_name,
        email=email,
        password=password,
        contact_no=contact_no,
    )


def fake_customer(fake: Faker) -> Customer:
    """
    Build a random customer.

    Parameters
    ----------
    fake : Faker
        Faker instance; seed it with `seed_instance` for reproducible output.
    """
    full_name = new_full_name(
        first_name=fake.first_name()[:50],
        middle_name=fake.first_name()[:50],
        last_name=fake.last_name()[:50],
    )
    # account_no in the local part keeps generated emails unique per account.
    account_no = fake.random_int(min=ACCOUNT_NO_MIN, max=ACCOUNT_NO_MAX)
    local, _, domain = fake.email().partition("@")
    return new_customer(
        account_no=account_no,
        full_name=full_name,
        email=f"{local}.{account_no}@{domain}",
        password=fake.password(length=fake.random_int(min=8, max=10), special_chars=True, digits=True, upper_case=True),
        contact_no=int(fake.numerify("#########")) + 1_000_000_000 * fake.random_int(min=1, max=9),
    )


__all__ = ["new_full_name", "new_customer", "fake_customer"]
