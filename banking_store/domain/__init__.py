"""
Domain package for the banking customer store.

Exports the customer models and the factories that build them. Keep this
package focused on data definitions and validation concerns.
"""

from banking_store.domain.factory import fake_customer, new_customer, new_full_name
from banking_store.domain.models import Customer, FullName

__all__ = [
    "Customer",
    "FullName",
    "fake_customer",
    "new_customer",
    "new_full_name",
]
