"""Shared expense ledger API routes."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from household.schemas.shared_expenses import SharedExpensePayload, SharedExpenseResponse
from household.services import get_db
from household.services.household_service import HouseholdService
from household.services.period_service import parse_period
from household.services.shared_expense_service import SharedExpenseService

router = APIRouter(prefix="/households/{household_id}/shared-expenses", tags=["shared-expenses"])


@router.get("", response_model=list[SharedExpenseResponse])
async def list_shared_expenses(
    household_id: int,
    period: str | None = Query(None, description="Period as YYYY-MM (default: current month)"),
    db: Session = Depends(get_db),
) -> list[SharedExpenseResponse]:
    """List the period's expenses, most recent first."""
    HouseholdService(db).get_household(household_id)
    expenses = SharedExpenseService(db).shared_expenses_for_period(
        household_id, parse_period(period)
    )
    return [SharedExpenseResponse.model_validate(expense) for expense in expenses]


@router.post("", response_model=SharedExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_shared_expense(
    household_id: int, payload: SharedExpensePayload, db: Session = Depends(get_db)
) -> SharedExpenseResponse:
    """
    Record an expense paid by a member.

    Returns:
        201: Created expense
        404: Household not found
        422: Missing payer/fields or non-positive amount
    """
    expense = SharedExpenseService(db).create_shared_expense(
        household_id,
        member_id=payload.member_id,
        description=payload.description,
        amount=payload.amount,
        expense_date=payload.expense_date,
        shared=True if payload.shared is None else payload.shared,
        currency=payload.currency,
    )
    return SharedExpenseResponse.model_validate(expense)


@router.patch("/{expense_id}", response_model=SharedExpenseResponse)
async def update_shared_expense(
    household_id: int,
    expense_id: int,
    payload: SharedExpensePayload,
    db: Session = Depends(get_db),
) -> SharedExpenseResponse:
    """Update an expense; omitted fields are left unchanged."""
    expense = SharedExpenseService(db).update_shared_expense(
        household_id, expense_id, **payload.model_dump(exclude_unset=True)
    )
    return SharedExpenseResponse.model_validate(expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shared_expense(
    household_id: int, expense_id: int, db: Session = Depends(get_db)
) -> Response:
    """Delete an expense."""
    SharedExpenseService(db).delete_shared_expense(household_id, expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
