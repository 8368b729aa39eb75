"""
Repository package for the banking customer store.

Re-exports the repository interfaces, the row codec and the pooled
implementation so downstream code can import from `banking_store.repository`.
"""

from banking_store.repository.abstract import AbstractCustomerRepository, CustomerRepository
from banking_store.repository.pooled import PooledCustomerRepository
from banking_store.repository.row_codec import RowCodec

__all__ = [
    "AbstractCustomerRepository",
    "CustomerRepository",
    "PooledCustomerRepository",
    "RowCodec",
]
