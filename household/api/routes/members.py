"""Member directory API routes."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from household.schemas.members import MemberPayload, MemberResponse
from household.services import get_db
from household.services.household_service import HouseholdService
from household.services.member_service import MemberService

router = APIRouter(prefix="/households/{household_id}/members", tags=["members"])


@router.get("", response_model=list[MemberResponse])
async def list_members(household_id: int, db: Session = Depends(get_db)) -> list[MemberResponse]:
    """List members ordered by position."""
    HouseholdService(db).get_household(household_id)
    members = MemberService(db).ordered_members(household_id)
    return [MemberResponse.model_validate(member) for member in members]


@router.post("", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def create_member(
    household_id: int, payload: MemberPayload, db: Session = Depends(get_db)
) -> MemberResponse:
    """
    Create a member.

    Returns:
        201: Created member
        404: Household not found
        422: Blank name/code, code too long or already taken
    """
    member = MemberService(db).create_member(
        household_id, name=payload.name, code=payload.code, position=payload.position
    )
    return MemberResponse.model_validate(member)


@router.patch("/{member_id}", response_model=MemberResponse)
async def update_member(
    household_id: int, member_id: int, payload: MemberPayload, db: Session = Depends(get_db)
) -> MemberResponse:
    """Update a member's name, code or position."""
    member = MemberService(db).update_member(
        household_id, member_id, **payload.model_dump(exclude_unset=True)
    )
    return MemberResponse.model_validate(member)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(
    household_id: int, member_id: int, db: Session = Depends(get_db)
) -> Response:
    """Delete a member."""
    MemberService(db).delete_member(household_id, member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
