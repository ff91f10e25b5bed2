"""
Debt service: validation and queries over the debts table.

This service enforces the record rules:
1. Ids are canonical UUID strings, generated here, never reused
2. debtor_name and description are non-empty after trimming
3. amount is never negative
4. created_at is written once; updated_at only by update

Validation always happens before anything is written, so a
rejected call leaves the table untouched.
"""

import uuid
from collections.abc import Callable, Mapping
from datetime import datetime
from decimal import MAX_PREC, Decimal, localcontext
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from debt_ledger.errors import InvalidArgument, NotFound
from debt_ledger.models.base import utcnow
from debt_ledger.models.debt import Debt
from debt_ledger.schemas.debt import DebtPayload


def parse_debt_id(debt_id: Any) -> str:
    """
    Validate a debt id and return its canonical form.

    Any spelling uuid.UUID accepts is allowed; lookups always use
    the lowercase hyphenated form the ids are stored in.
    """
    if not isinstance(debt_id, str) or not debt_id.strip():
        raise InvalidArgument("Debt id must be a non-empty string", field="id")

    try:
        return str(uuid.UUID(debt_id.strip()))
    except ValueError:
        raise InvalidArgument(
            f"Debt id '{debt_id}' is not a valid UUID", field="id"
        ) from None


def validate_payload(payload: DebtPayload | Mapping[str, Any]) -> DebtPayload:
    """
    Run a payload through DebtPayload validation.

    Model instances are re-validated too: pydantic models are
    mutable, so a DebtPayload may have been changed after it was
    built. Errors name every offending field.
    """
    if isinstance(payload, DebtPayload):
        payload = payload.model_dump()

    try:
        return DebtPayload.model_validate(payload)
    except ValidationError as e:
        errors = e.errors()
        fields = [
            ".".join(str(part) for part in err["loc"]) or "payload"
            for err in errors
        ]
        raise InvalidArgument(
            f"Invalid {', '.join(fields)}: {errors[0]['msg']}",
            field=fields[0],
        ) from None


class DebtService:
    """
    All debt reads and writes pass through this service.

    The service takes a database session as a constructor
    argument. The caller controls the transaction boundary:
    methods flush, they never commit.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    def list_debts(self) -> list[Debt]:
        """Return every debt in id order."""
        debts = self.db.execute(
            select(Debt).order_by(Debt.id)
        ).scalars().all()
        return list(debts)

    def total(self) -> Decimal:
        """
        Sum of all amounts.

        Amounts are stored as decimal text, so the sum is done in
        Python as an exact Decimal.
        """
        amounts = self.db.execute(select(Debt.amount)).scalars()
        # Addition under MAX_PREC never rounds.
        with localcontext() as ctx:
            ctx.prec = MAX_PREC
            return sum(amounts, Decimal("0"))

    def search(self, query: str) -> list[Debt]:
        """
        Debts whose debtor_name or description contains the query,
        ignoring case.

        An empty or all-whitespace query is rejected rather than
        treated as "match everything". Matching is a linear scan with
        str.casefold(), since SQL lower() folds only ASCII on SQLite.
        """
        if not isinstance(query, str) or not query.strip():
            raise InvalidArgument(
                "Search query must be a non-empty string", field="query"
            )

        needle = query.strip().casefold()
        return [
            debt for debt in self.list_debts()
            if needle in debt.debtor_name.casefold()
            or needle in debt.description.casefold()
        ]

    def get_debt(self, debt_id: str) -> Debt:
        """Get a debt by id."""
        key = parse_debt_id(debt_id)
        debt = self.db.get(Debt, key)
        if debt is None:
            raise NotFound(key)
        return debt

    def create_debt(self, payload: DebtPayload | Mapping[str, Any]) -> Debt:
        """
        Create a new debt.

        The id and created_at are assigned here. updated_at stays
        empty until the first update.
        """
        data = validate_payload(payload)

        debt = Debt(
            id=str(uuid.uuid4()),
            debtor_name=data.debtor_name,
            amount=data.amount,
            description=data.description,
            created_at=self.clock(),
            updated_at=None,
        )
        self.db.add(debt)
        self.db.flush()
        return debt

    def update_debt(
        self, debt_id: str, payload: DebtPayload | Mapping[str, Any]
    ) -> Debt:
        """
        Replace the mutable fields of an existing debt.

        The id and payload are both validated before the lookup.
        id and created_at never change. updated_at is never earlier
        than created_at, even if the wall clock stepped back.
        """
        key = parse_debt_id(debt_id)
        data = validate_payload(payload)

        debt = self.db.get(Debt, key)
        if debt is None:
            raise NotFound(key)

        debt.debtor_name = data.debtor_name
        debt.amount = data.amount
        debt.description = data.description
        debt.updated_at = max(self.clock(), debt.created_at)

        self.db.flush()
        return debt

    def delete_debt(self, debt_id: str) -> Debt:
        """Remove a debt permanently and return it as it was."""
        debt = self.get_debt(debt_id)
        self.db.delete(debt)
        self.db.flush()
        return debt
