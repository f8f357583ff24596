"""Line item ledger API routes."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from household.schemas.line_items import LineItemPayload, LineItemResponse
from household.services import get_db
from household.services.household_service import HouseholdService
from household.services.line_item_service import LineItemService
from household.services.period_service import parse_period, previous_period

router = APIRouter(prefix="/households/{household_id}/line-items", tags=["line-items"])


@router.get("", response_model=list[LineItemResponse])
async def list_line_items(
    household_id: int,
    period: str | None = Query(None, description="Period as YYYY-MM (default: current month)"),
    db: Session = Depends(get_db),
) -> list[LineItemResponse]:
    """List the period's line items ordered by category."""
    HouseholdService(db).get_household(household_id)
    items = LineItemService(db).items_for_period(household_id, parse_period(period))
    return [LineItemResponse.model_validate(item) for item in items]


@router.post("", response_model=LineItemResponse, status_code=status.HTTP_201_CREATED)
async def create_line_item(
    household_id: int,
    payload: LineItemPayload,
    period: str | None = Query(None, description="Period as YYYY-MM (default: current month)"),
    db: Session = Depends(get_db),
) -> LineItemResponse:
    """
    Create a line item in the given period.

    Returns:
        201: Created line item
        404: Household not found
        422: Missing fields, invalid choice or non-positive amount
    """
    values = payload.model_dump(exclude_unset=True)
    item = LineItemService(db).create_line_item(
        household_id, period_date=parse_period(period), **values
    )
    return LineItemResponse.model_validate(item)


@router.post("/copy-from-previous", response_model=list[LineItemResponse])
async def copy_from_previous(
    household_id: int,
    period: str | None = Query(None, description="Target period as YYYY-MM"),
    db: Session = Depends(get_db),
) -> list[LineItemResponse]:
    """Copy every line item of the previous month into the given period."""
    HouseholdService(db).get_household(household_id)
    target = parse_period(period)
    copies = LineItemService(db).copy_period(
        household_id, from_period=previous_period(target), to_period=target
    )
    return [LineItemResponse.model_validate(item) for item in copies]


@router.patch("/{item_id}", response_model=LineItemResponse)
async def update_line_item(
    household_id: int, item_id: int, payload: LineItemPayload, db: Session = Depends(get_db)
) -> LineItemResponse:
    """Update a line item; omitted fields are left unchanged."""
    item = LineItemService(db).update_line_item(
        household_id, item_id, **payload.model_dump(exclude_unset=True)
    )
    return LineItemResponse.model_validate(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_line_item(
    household_id: int, item_id: int, db: Session = Depends(get_db)
) -> Response:
    """Delete a line item."""
    LineItemService(db).delete_line_item(household_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
