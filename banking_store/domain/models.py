"""
Domain models for the banking customer store.

Defines the customer schema aligned with `infrastructure/init.sql`. Values are immutable:
a changed customer is a new instance built with `model_copy(update=...)`.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, SecretStr


class FullName(BaseModel):
    """
    Name of a customer. Owned by its Customer and carries no identity of its own.
    """

    first_name: str = Field(..., max_length=50)
    middle_name: Optional[str] = Field(None, max_length=50)
    last_name: str = Field(..., max_length=50)

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return " ".join(part for part in (self.first_name, self.middle_name, self.last_name) if part)


class Customer(BaseModel):
    """
    Representation of a single row in the `customers` table.

    The password is kept as plain text in the backing store. `SecretStr` only
    keeps it out of reprs and logs; it is not hashing.
    """

    account_no: int = Field(..., description="Primary key, supplied by the caller.")
    full_name: FullName
    email: str = Field(..., max_length=100)
    password: SecretStr = Field(..., description="Stored as plain text in the database.")
    contact_no: int
    created_at: Optional[datetime] = Field(None, description="Assigned by the database on insert.")
    updated_at: Optional[datetime] = Field(None, description="Refreshed by the database on update.")

    model_config = {"frozen": True}

    def persisted_fields(self) -> Dict[str, Any]:
        """Fields written by an insert, with the password revealed."""
        data = self.model_dump(exclude={"created_at", "updated_at", "password"})
        data["password"] = self.password.get_secret_value()
        return data

    def public_dict(self) -> Dict[str, Any]:
        """JSON-friendly view without the password."""
        return self.model_dump(mode="json", exclude={"password"})


__all__ = ["Customer", "FullName"]
