"""Pydantic schemas for households."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HouseholdPayload(BaseModel):
    """Payload for POST /households."""

    name: str | None = Field(None, description="Household name")
    currency: str | None = Field(None, description="ISO 4217 currency (default from settings)")


class HouseholdResponse(BaseModel):
    """Response schema for a household."""

    id: int
    name: str
    currency: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
