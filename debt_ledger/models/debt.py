"""
Debt model.

One row per debt record. The primary key is the record id, a
canonical UUID string, so ordering by primary key gives the
deterministic key order the store lists records in.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from debt_ledger.models.base import Base
from debt_ledger.models.types import DecimalString


class Debt(Base):
    """
    A single debt owed by a named debtor.

    id and created_at are written once at creation. updated_at
    stays NULL until the first successful update.
    """

    __tablename__ = "debts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    debtor_name: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        DecimalString, nullable=False
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )

    def __repr__(self) -> str:
        return f"<Debt {self.id} {self.debtor_name} {self.amount}>"
