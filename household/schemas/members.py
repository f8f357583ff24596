"""Pydantic schemas for household members."""

from pydantic import BaseModel, ConfigDict, Field


class MemberPayload(BaseModel):
    """Payload for creating or updating a member.

    Omitted fields keep their current value on update.
    """

    name: str | None = Field(None, description="Member name")
    code: str | None = Field(None, description="Short code, unique within the household")
    position: int | None = Field(None, description="Directory position (default: appended)")


class MemberResponse(BaseModel):
    """Response schema for a member."""

    id: int
    household_id: int
    name: str
    code: str
    position: int
    display_name: str

    model_config = ConfigDict(from_attributes=True)
