"""Pydantic schemas for line items."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class LineItemPayload(BaseModel):
    """Payload for creating or updating a line item.

    The period comes from the ``period`` query parameter on creation and
    cannot be changed afterwards.
    """

    member_id: int | None = Field(None, description="Owning member (optional)")
    category: str | None = None
    description: str | None = None
    payment_cycle: str | None = Field(None, description="cycle_1, cycle_2 or sporadic")
    item_type: str | None = Field(None, description="constant, variable or special")
    kind: str | None = Field(None, description="income or expense")
    amount: Decimal | None = Field(None, description="Strictly positive amount")
    currency: str | None = Field(None, description="Defaults to the household currency")
    notes: str | None = None


class LineItemResponse(BaseModel):
    """Response schema for a line item."""

    id: int
    household_id: int
    member_id: int | None
    category: str
    description: str
    payment_cycle: str
    payment_cycle_label: str | None
    item_type: str
    item_type_label: str | None
    kind: str
    amount: Decimal
    signed_amount: Decimal
    currency: str
    period_date: date
    notes: str | None

    model_config = ConfigDict(from_attributes=True)
