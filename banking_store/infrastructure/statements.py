"""
Named SQL statement templates for the customers table.

The five templates are the whole wire contract of the store. They are loaded
once into an immutable `StatementTemplates` instance and their positional
placeholder counts are checked against the arity each operation binds, so a
template/binder mismatch fails at startup instead of corrupting rows.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError, model_validator

from banking_store.errors import ConfigurationError

TABLE_NAME = "customers"

# Single source of truth for insert binding order.
INSERT_COLUMNS = (
    "account_no",
    "first_name",
    "middle_name",
    "last_name",
    "email",
    "password",
    "contact_no",
)

SELECT_COLUMNS = INSERT_COLUMNS + ("created_at", "updated_at")

STATEMENT_ARITY: Dict[str, int] = {
    "insert": len(INSERT_COLUMNS),
    "select_all": 0,
    "select_by_id": 1,
    "update_contact": 2,
    "delete_by_id": 1,
}

_PLACEHOLDER = re.compile(r"%%|%s")


def count_placeholders(sql: str) -> int:
    """Count `%s` placeholders, skipping escaped `%%`."""
    return sum(1 for match in _PLACEHOLDER.finditer(sql) if match.group() == "%s")


def _default_insert() -> str:
    columns = ", ".join(INSERT_COLUMNS)
    placeholders = ", ".join(["%s"] * len(INSERT_COLUMNS))
    return f"INSERT INTO {TABLE_NAME} ({columns}) VALUES ({placeholders})"


_SELECT = f"SELECT {', '.join(SELECT_COLUMNS)} FROM {TABLE_NAME}"


class StatementTemplates(BaseModel):
    """
    Immutable set of the five statement templates.
    """

    insert: str = _default_insert()
    select_all: str = _SELECT
    select_by_id: str = f"{_SELECT} WHERE account_no = %s"
    update_contact: str = (
        f"UPDATE {TABLE_NAME} SET contact_no = %s, updated_at = CURRENT_TIMESTAMP "
        "WHERE account_no = %s"
    )
    delete_by_id: str = f"DELETE FROM {TABLE_NAME} WHERE account_no = %s"

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def _check_arity(self) -> "StatementTemplates":
        for name, expected in STATEMENT_ARITY.items():
            found = count_placeholders(getattr(self, name))
            if found != expected:
                raise ValueError(
                    f"statement '{name}' has {found} placeholder(s), expected {expected}"
                )
        return self


def load_statements(
    source: Optional[Union[Mapping[str, Any], str, Path]] = None,
) -> StatementTemplates:
    """
    Build validated statement templates.

    Parameters
    ----------
    source : mapping | str | Path | None
        Overrides keyed by template name, or a path to a JSON file holding
        such a mapping. Templates not named keep their defaults.

    Raises
    ------
    ConfigurationError
        If the file cannot be read, a key is unknown, or a placeholder count
        does not match the operation's arity.
    """
    if source is None:
        overrides: Mapping[str, Any] = {}
    elif isinstance(source, Mapping):
        overrides = source
    else:
        path = Path(source)
        try:
            overrides = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot load statements from {path}: {exc}") from exc
        if not isinstance(overrides, dict):
            raise ConfigurationError(f"Statements file {path} must hold a JSON object")

    try:
        return StatementTemplates(**overrides)
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Invalid statement templates: {exc}") from exc


__all__ = [
    "INSERT_COLUMNS",
    "SELECT_COLUMNS",
    "STATEMENT_ARITY",
    "TABLE_NAME",
    "StatementTemplates",
    "count_placeholders",
    "load_statements",
]
