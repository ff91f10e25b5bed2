"""
Shared FastAPI dependencies.

The store lives on app.state for the lifetime of the process.
Tests override get_store to hand in their own store.
"""

from fastapi import Request

from debt_ledger.store import DebtStore


def get_store(request: Request) -> DebtStore:
    """Return the store opened by the application lifespan."""
    return request.app.state.store
