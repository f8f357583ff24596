"""Monthly dashboard API route: the settlement summary of one period."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from household.schemas.line_items import LineItemResponse
from household.schemas.shared_expenses import SharedExpenseResponse
from household.services import get_db
from household.services.household_service import HouseholdService
from household.services.locale_service import currency_symbol
from household.services.period_service import (
    next_period,
    parse_period,
    period_param,
    previous_period,
)
from household.services.settlement_service import MonthlySettlement

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/households/{household_id}/dashboard", tags=["dashboard"])


@router.get("")
async def show_dashboard(
    household_id: int,
    period: str | None = Query(None, description="Period as YYYY-MM (default: current month)"),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """
    Settlement summary of a household month with the records behind it.

    Returns:
        200: summary, navigation params, line items and shared expenses
        404: Household not found
    """
    household = HouseholdService(db).get_household(household_id)
    period_date = parse_period(period)
    settlement = MonthlySettlement.load(db, household_id, period_date)

    following = next_period(period_date)
    logger.info(
        "Dashboard for household %d period %s: net_transfer=%s",
        household_id,
        period_param(period_date),
        settlement.net_transfer,
    )
    return jsonable_encoder(
        {
            "household": {
                "id": household.id,
                "name": household.name,
                "currency": household.currency,
                "currency_symbol": currency_symbol(household.currency),
            },
            "period": period_param(period_date),
            "previous_period": period_param(previous_period(period_date)),
            "next_period": period_param(following) if following else None,
            "summary": settlement.summary.to_dict(),
            "line_items": [
                LineItemResponse.model_validate(item).model_dump()
                for item in settlement.line_items
            ],
            "shared_expenses": [
                SharedExpenseResponse.model_validate(expense).model_dump()
                for expense in settlement.shared_expenses
            ],
        }
    )
