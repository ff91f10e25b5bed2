"""
Error types raised by the debt store.

Expected outcomes (bad input, unknown id) subclass DebtError, which
is a ValueError. Storage faults are a RuntimeError and are never
mixed up with validation.
"""


class DebtError(ValueError):
    """Base class for expected, per-request failures."""


class InvalidArgument(DebtError):
    """A malformed id, field or search query."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFound(DebtError):
    """A well-formed id that is not in the store."""

    def __init__(self, debt_id: str):
        super().__init__(f"Debt with id={debt_id} not found")
        self.debt_id = debt_id


class StorageError(RuntimeError):
    """The underlying database failed or the store is not open."""
