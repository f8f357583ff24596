"""Shared expense ledger service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from household.models.household import Household
from household.models.member import Member
from household.models.shared_expense import SharedExpense
from household.services.errors import FieldErrors, RecordNotFoundError
from household.services.period_service import beginning_of_month

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("member_id", "description", "amount", "currency", "expense_date", "shared")


class SharedExpenseService:
    """Service for shared expense database operations.

    The period of an expense is always derived from its expense date.
    """

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def shared_expenses_for_period(
        self, household_id: int, period_date: date
    ) -> list[SharedExpense]:
        """Get every expense of the household in the month of ``period_date``.

        Both shared and private expenses are returned; callers filter on
        ``shared`` where it matters.

        Returns:
            Expenses ordered by expense date, most recent first
        """
        return (
            self.db.query(SharedExpense)
            .filter(
                SharedExpense.household_id == household_id,
                SharedExpense.period_date == beginning_of_month(period_date),
            )
            .order_by(SharedExpense.expense_date.desc(), SharedExpense.id.desc())
            .all()
        )

    def get_shared_expense(self, household_id: int, expense_id: int) -> SharedExpense:
        """Get an expense of the household.

        Raises:
            RecordNotFoundError: If the expense does not exist in this household
        """
        expense = (
            self.db.query(SharedExpense)
            .filter(SharedExpense.household_id == household_id, SharedExpense.id == expense_id)
            .first()
        )
        if not expense:
            raise RecordNotFoundError("SharedExpense", expense_id)
        return expense

    def create_shared_expense(
        self,
        household_id: int,
        member_id: int | None,
        description: str | None,
        amount: Decimal | int | str | None,
        expense_date: date | None,
        shared: bool = True,
        currency: str | None = None,
    ) -> SharedExpense:
        """Record an expense paid by ``member_id``.

        Raises:
            RecordNotFoundError: If the household does not exist
            RecordValidationError: On missing payer/fields or non-positive amount
        """
        household = self.db.get(Household, household_id)
        if not household:
            raise RecordNotFoundError("Household", household_id)

        values = self._validate(
            household_id,
            {
                "member_id": member_id,
                "description": description,
                "amount": amount,
                "currency": currency or household.currency,
                "expense_date": expense_date,
                "shared": shared,
            },
        )

        expense = SharedExpense(household_id=household_id, **values)
        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)

        logger.info(
            "Created shared expense: id=%d, household_id=%d, member_id=%d, amount=%s, "
            "period=%s, shared=%s",
            expense.id,
            household_id,
            expense.member_id,
            expense.amount,
            expense.period_date,
            expense.shared,
        )
        return expense

    def update_shared_expense(
        self, household_id: int, expense_id: int, **changes: Any
    ) -> SharedExpense:
        """Update editable fields of an expense; a new date moves it to that month."""
        expense = self.get_shared_expense(household_id, expense_id)

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields not editable: {', '.join(sorted(unknown))}")

        current = {field: getattr(expense, field) for field in EDITABLE_FIELDS}
        values = self._validate(household_id, {**current, **changes})

        for field, value in values.items():
            setattr(expense, field, value)

        self.db.commit()
        self.db.refresh(expense)
        logger.info("Updated shared expense %d in household %d", expense.id, household_id)
        return expense

    def delete_shared_expense(self, household_id: int, expense_id: int) -> None:
        """Delete an expense."""
        expense = self.get_shared_expense(household_id, expense_id)
        self.db.delete(expense)
        self.db.commit()
        logger.info("Deleted shared expense %d from household %d", expense_id, household_id)

    def _validate(self, household_id: int, values: dict[str, Any]) -> dict[str, Any]:
        errors = FieldErrors()

        if errors.require("member_id", values["member_id"]):
            member = self.db.get(Member, values["member_id"])
            if not member or member.household_id != household_id:
                errors.add("member_id", FieldErrors.MUST_EXIST)
        errors.require("description", values["description"])
        errors.require("currency", values["currency"])
        errors.require("expense_date", values["expense_date"])
        amount = errors.positive_amount("amount", values["amount"])
        shared = errors.boolean("shared", values["shared"])

        if errors.errors:
            logger.warning(
                "Shared expense validation failed for household %d: %s",
                household_id,
                errors.errors,
            )
        errors.raise_if_any()

        return {
            "member_id": values["member_id"],
            "description": values["description"].strip(),
            "amount": amount,
            "currency": values["currency"].strip().upper(),
            "expense_date": values["expense_date"],
            "shared": shared,
        }


__all__ = ["SharedExpenseService"]
