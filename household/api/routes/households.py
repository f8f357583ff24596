"""Household API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from household.schemas.households import HouseholdPayload, HouseholdResponse
from household.services import get_db
from household.services.household_service import HouseholdService

router = APIRouter(prefix="/households", tags=["households"])


@router.post("", response_model=HouseholdResponse, status_code=status.HTTP_201_CREATED)
async def create_household(
    payload: HouseholdPayload, db: Session = Depends(get_db)
) -> HouseholdResponse:
    """
    Create a household.

    Returns:
        201: Created household
        422: Missing name
    """
    household = HouseholdService(db).create_household(payload.name, payload.currency)
    return HouseholdResponse.model_validate(household)


@router.get("/{household_id}", response_model=HouseholdResponse)
async def get_household(household_id: int, db: Session = Depends(get_db)) -> HouseholdResponse:
    """Get a household by ID."""
    household = HouseholdService(db).get_household(household_id)
    return HouseholdResponse.model_validate(household)
