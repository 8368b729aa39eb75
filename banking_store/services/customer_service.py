"""
Customer service: the thin layer the CLI talks to.
"""

from __future__ import annotations

import random
from typing import List, Optional

from banking_store.domain.models import Customer
from banking_store.repository.abstract import CustomerRepository
from banking_store.utils.logging import get_logger

log = get_logger(__name__)


class CustomerService:
    def __init__(self, repository: CustomerRepository) -> None:
        self.repository = repository

    def add_customer(self, customer: Customer) -> bool:
        added = self.repository.create(customer)
        if added:
            log.info(f"Customer added: {customer.full_name}", extra={"account_no": customer.account_no})
        else:
            log.warning("Customer insert affected no rows", extra={"account_no": customer.account_no})
        return added

    def list_customers(self) -> List[Customer]:
        return self.repository.get_all()

    def find_customer(self, account_no: int) -> Customer:
        return self.repository.get_by_id(account_no)

    def change_contact_no(self, account_no: int, contact_no: int) -> bool:
        """
        Update a customer's contact number.

        Reads the current record and sends it back with the new number;
        `update` persists nothing but `contact_no`.
        """
        current = self.repository.get_by_id(account_no)
        updated = self.repository.update(current.model_copy(update={"contact_no": contact_no}))
        log.info(
            "Contact number changed" if updated else "Contact number unchanged",
            extra={"account_no": account_no},
        )
        return updated

    def remove_customer(self, account_no: int) -> bool:
        removed = self.repository.delete(account_no)
        log.info(
            "Customer removed" if removed else "No customer to remove",
            extra={"account_no": account_no},
        )
        return removed

    def pick_random_customer(self, rng: Optional[random.Random] = None) -> Optional[Customer]:
        """Return a random stored customer, or None when the store is empty."""
        customers = self.repository.get_all()
        if not customers:
            return None
        chosen = (rng or random).choice([c.account_no for c in customers])
        return self.repository.get_by_id(chosen)


__all__ = ["CustomerService"]
