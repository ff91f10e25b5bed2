"""
Pydantic schemas for debt records.

These define the API contract. Field names are snake_case in
Python and camelCase on the wire; input accepts either.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# --- Request Schemas ---

class DebtPayload(BaseModel):
    """The caller-supplied part of a debt, used by create and update."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    debtor_name: str = Field(min_length=1)
    amount: Decimal = Field(ge=0, allow_inf_nan=False)
    description: str = Field(min_length=1)

    @field_validator("amount", mode="before")
    @classmethod
    def amount_must_be_a_number(cls, v):
        # Numeric strings are not coerced; bool is an int subclass.
        if isinstance(v, (str, bytes, bool)):
            raise ValueError("amount must be a number")
        return v


# --- Response Schemas ---

class DebtRecord(BaseModel):
    """A stored debt, detached from the database session."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    debtor_name: str
    amount: Decimal
    description: str
    created_at: datetime
    updated_at: datetime | None = None


class DebtTotal(BaseModel):
    """Sum of all debt amounts."""
    total: Decimal
