"""
Banking customer store - typed CRUD access to a customers table over a
psycopg connection pool.

The package provides:

- Customer / FullName domain models and factories
- Validated, immutable SQL statement templates
- A row codec mapping rows to customers and customers to parameters
- A pooled repository exposing create, get-by-id, get-all, update-contact
  and delete
- A thin service layer and a typer CLI with a demo flow
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from banking_store.config import Settings, get_settings
from banking_store.domain import Customer, FullName, fake_customer, new_customer, new_full_name
from banking_store.errors import (
    AmbiguousResult,
    ConfigurationError,
    ConnectionUnavailable,
    ConstraintViolation,
    DecodeError,
    NotFound,
    RecordStoreError,
    ValidationError,
)
from banking_store.infrastructure import StatementTemplates, load_statements
from banking_store.repository import (
    AbstractCustomerRepository,
    CustomerRepository,
    PooledCustomerRepository,
    RowCodec,
)
from banking_store.services import CustomerService
from banking_store.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Customer",
    "FullName",
    "fake_customer",
    "new_customer",
    "new_full_name",
    # Errors
    "RecordStoreError",
    "ConfigurationError",
    "ConnectionUnavailable",
    "ConstraintViolation",
    "NotFound",
    "AmbiguousResult",
    "DecodeError",
    "ValidationError",
    # Statements
    "StatementTemplates",
    "load_statements",
    # Repository
    "CustomerRepository",
    "AbstractCustomerRepository",
    "PooledCustomerRepository",
    "RowCodec",
    # Services
    "CustomerService",
    # Logging
    "configure_logging",
    "get_logger",
]
