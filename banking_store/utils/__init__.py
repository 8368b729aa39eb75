"""
Utilities package for the banking customer store.

Exports shared helpers for logging. Keep this package lightweight and free of
domain-specific logic.
"""

from banking_store.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "JsonFormatter",
]
