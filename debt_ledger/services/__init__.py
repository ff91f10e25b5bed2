"""Business logic services."""

from debt_ledger.services.debt_service import DebtService

__all__ = ["DebtService"]
