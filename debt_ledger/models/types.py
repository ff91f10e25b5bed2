"""
Custom column types.

SQLite has no decimal type, so a plain Numeric column passes
through a float and loses digits. Amounts are kept as their
exact decimal text instead.
"""

from decimal import Decimal

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


class DecimalString(TypeDecorator):
    """A Decimal stored as its str() and read back unchanged."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)
