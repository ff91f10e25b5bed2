"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from debt_ledger.models.base import Base
from debt_ledger.models.debt import Debt

__all__ = ["Base", "Debt"]
