"""
Debt API endpoints.

The API layer is thin. It handles HTTP concerns (status codes,
response formatting) and delegates all storage and validation to
the DebtStore. InvalidArgument becomes 400, NotFound becomes 404.
"""

from fastapi import APIRouter, Depends, HTTPException

from debt_ledger.api.deps import get_store
from debt_ledger.errors import InvalidArgument, NotFound
from debt_ledger.schemas.debt import DebtPayload, DebtRecord, DebtTotal
from debt_ledger.store import DebtStore

router = APIRouter(prefix="/debts", tags=["Debts"])


@router.get("", response_model=list[DebtRecord])
def list_debts(store: DebtStore = Depends(get_store)):
    """List every debt in id order."""
    return store.list_debts()


@router.get("/total", response_model=DebtTotal)
def get_total(store: DebtStore = Depends(get_store)):
    """Sum of all debt amounts."""
    return DebtTotal(total=store.total())


@router.get("/search", response_model=list[DebtRecord])
def search_debts(q: str = "", store: DebtStore = Depends(get_store)):
    """
    Find debts by debtor name or description.

    Matching is a case-insensitive substring match. An empty
    query is a client error, not a request for everything.
    """
    try:
        return store.search(q)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{debt_id}", response_model=DebtRecord)
def get_debt(debt_id: str, store: DebtStore = Depends(get_store)):
    """Get a single debt."""
    try:
        return store.get(debt_id)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=DebtRecord, status_code=201)
def create_debt(
    request: DebtPayload,
    store: DebtStore = Depends(get_store),
):
    """
    Record a new debt.

    The id and creation time are assigned by the store and
    returned in the response.
    """
    try:
        return store.create(request)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{debt_id}", response_model=DebtRecord)
def update_debt(
    debt_id: str,
    request: DebtPayload,
    store: DebtStore = Depends(get_store),
):
    """Replace the debtor name, amount and description of a debt."""
    try:
        return store.update(debt_id, request)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{debt_id}", response_model=DebtRecord)
def delete_debt(debt_id: str, store: DebtStore = Depends(get_store)):
    """Delete a debt and return it as it was before removal."""
    try:
        return store.delete(debt_id)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
