"""Pydantic schemas for shared expenses."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class SharedExpensePayload(BaseModel):
    """Payload for creating or updating a shared expense."""

    member_id: int | None = Field(None, description="Member who paid")
    description: str | None = None
    amount: Decimal | None = Field(None, description="Strictly positive amount")
    currency: str | None = Field(None, description="Defaults to the household currency")
    expense_date: date | None = Field(None, description="Date paid; also sets the period")
    shared: bool | None = Field(None, description="Split between members (default: true)")


class SharedExpenseResponse(BaseModel):
    """Response schema for a shared expense."""

    id: int
    household_id: int
    member_id: int
    member_name: str
    description: str
    amount: Decimal
    currency: str
    expense_date: date
    period_date: date
    shared: bool

    model_config = ConfigDict(from_attributes=True)
