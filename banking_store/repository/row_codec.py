"""
Mapping between `customers` rows and Customer values.

Rows are read by column name, so column order in the select list does not
matter but renamed columns do. Insert parameters follow `INSERT_COLUMNS`, the
same tuple the default insert template is generated from.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Tuple

from pydantic import ValidationError as PydanticValidationError

from banking_store.domain.models import Customer, FullName
from banking_store.errors import DecodeError, ValidationError
from banking_store.infrastructure.statements import INSERT_COLUMNS

_REQUIRED_COLUMNS = ("account_no", "first_name", "last_name", "email", "password", "contact_no")
_NULLABLE_COLUMNS = ("middle_name",)
_OPTIONAL_COLUMNS = ("created_at", "updated_at")

_INSERT_GETTERS: Dict[str, Callable[[Customer], Any]] = {
    "account_no": lambda c: c.account_no,
    "first_name": lambda c: c.full_name.first_name,
    "middle_name": lambda c: c.full_name.middle_name,
    "last_name": lambda c: c.full_name.last_name,
    "email": lambda c: c.email,
    "password": lambda c: c.password.get_secret_value() if c.password is not None else None,
    "contact_no": lambda c: c.contact_no,
}


class RowCodec:
    """
    Stateless converter between one row mapping and one Customer.
    """

    def decode(self, row: Mapping[str, Any]) -> Customer:
        """
        Build a Customer from a row keyed by column name.

        Raises
        ------
        DecodeError
            If a required column is absent, holds NULL, or holds a value the
            model rejects.
        """
        missing = [col for col in _REQUIRED_COLUMNS + _NULLABLE_COLUMNS if col not in row]
        if missing:
            raise DecodeError(f"Row is missing column(s): {', '.join(missing)}")
        nulls = [col for col in _REQUIRED_COLUMNS if row[col] is None]
        if nulls:
            raise DecodeError(f"Row has NULL in non-nullable column(s): {', '.join(nulls)}")

        try:
            full_name = FullName(
                first_name=row["first_name"],
                middle_name=row["middle_name"],
                last_name=row["last_name"],
            )
            return Customer(
                account_no=row["account_no"],
                full_name=full_name,
                email=row["email"],
                password=row["password"],
                contact_no=row["contact_no"],
                **{col: row[col] for col in _OPTIONAL_COLUMNS if col in row},
            )
        except PydanticValidationError as exc:
            raise DecodeError(f"Row rejected by customer model: {exc}") from exc

    def encode_for_insert(self, customer: Customer) -> Tuple[Any, ...]:
        """
        Project the seven insert parameters in `INSERT_COLUMNS` order.

        Raises
        ------
        ValidationError
            If the name or any non-nullable field is missing.
        """
        if getattr(customer, "full_name", None) is None:
            raise ValidationError("Customer has no full_name")
        params: Dict[str, Any] = {}
        for column in INSERT_COLUMNS:
            try:
                params[column] = _INSERT_GETTERS[column](customer)
            except AttributeError as exc:
                raise ValidationError(f"Customer has no value for {column}") from exc
        missing = [col for col in INSERT_COLUMNS if params[col] is None and col not in _NULLABLE_COLUMNS]
        if missing:
            raise ValidationError(f"Customer is missing required field(s): {', '.join(missing)}")
        return tuple(params[col] for col in INSERT_COLUMNS)

    def encode_for_update(self, customer: Customer) -> Tuple[int, int]:
        """Parameters of the contact update: (contact_no, account_no)."""
        contact_no = getattr(customer, "contact_no", None)
        account_no = getattr(customer, "account_no", None)
        if contact_no is None or account_no is None:
            raise ValidationError("Contact update needs both contact_no and account_no")
        return contact_no, account_no

    def encode_key(self, account_no: int) -> Tuple[int]:
        if account_no is None:
            raise ValidationError("account_no is required")
        return (account_no,)


__all__ = ["RowCodec"]
