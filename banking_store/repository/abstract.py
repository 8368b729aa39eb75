"""
Abstract repository interfaces for the customer record store.

Concrete stores implement the CustomerRepository protocol (or subclass the
AbstractCustomerRepository ABC) so services and the CLI depend only on the
five operations.
"""

from __future__ import annotations

import abc
from typing import List, Protocol, runtime_checkable

from banking_store.domain.models import Customer


@runtime_checkable
class CustomerRepository(Protocol):
    """
    Common interface of every customer store.
    """

    def create(self, customer: Customer) -> bool:
        """
        Insert a new customer.

        Returns
        -------
        bool
            True iff exactly one row was inserted.

        Raises
        ------
        ConstraintViolation
            If the account number or email already exists.
        ConnectionUnavailable
            If no connection could be acquired in time.
        """
        ...

    def get_by_id(self, account_no: int) -> Customer:
        """
        Fetch exactly one customer.

        Raises
        ------
        NotFound
            If no row matches.
        AmbiguousResult
            If more than one row matches.
        """
        ...

    def get_all(self) -> List[Customer]:
        """Fetch every customer in storage order; empty list when there are none."""
        ...

    def update(self, customer: Customer) -> bool:
        """
        Persist the customer's contact number only.

        Every other field of `customer` is ignored. Returns False when the
        account number does not exist.
        """
        ...

    def delete(self, account_no: int) -> bool:
        """Delete by account number; False when it does not exist."""
        ...


class AbstractCustomerRepository(abc.ABC):
    """
    Optional ABC helper for class-based implementations.
    """

    @abc.abstractmethod
    def create(self, customer: Customer) -> bool:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def get_by_id(self, account_no: int) -> Customer:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def get_all(self) -> List[Customer]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def update(self, customer: Customer) -> bool:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, account_no: int) -> bool:  # pragma: no cover - interface only
        raise NotImplementedError


__all__ = ["CustomerRepository", "AbstractCustomerRepository"]
