"""Errors raised by the table engine.

All of them derive from ``ValueError`` so views can keep the usual
``except ValueError as e: st.error(e)`` handling.
"""
from typing import Optional


class TableError(ValueError):
    """Base class for rejected table operations. State is never modified."""


class InvalidColumn(TableError):
    def __init__(self, key: str, reason: Optional[str] = None):
        self.key = key
        self.reason = reason or "unknown column"
        super().__init__(f"Invalid column '{key}': {self.reason}")


class InvalidArgument(TableError):
    pass


class OutOfRange(TableError):
    pass
