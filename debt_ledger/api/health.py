"""
Health check endpoint.

Used by load balancers, monitoring systems, and humans
to verify the application is running and responsive.
"""

from fastapi import APIRouter, Depends

from debt_ledger.api.deps import get_store
from debt_ledger.store import DebtStore

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(store: DebtStore = Depends(get_store)):
    """
    Return application health status including database connectivity.

    The database check runs a trivial query through the store.
    If it fails, the service reports itself as degraded.
    """
    db_status = "healthy" if store.ping() else "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "debt-ledger",
        "database": db_status,
    }
