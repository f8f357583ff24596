"""Line item ledger service.

Provides methods for:
- Listing a household's line items for one period
- Creating, updating and deleting line items
- Copying every line item of one period into another
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from household.models.household import Household
from household.models.line_item import ItemType, LineItem, LineItemKind, PaymentCycle
from household.models.member import Member
from household.services.errors import FieldErrors, RecordNotFoundError
from household.services.period_service import beginning_of_month

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "member_id",
    "category",
    "description",
    "payment_cycle",
    "item_type",
    "kind",
    "amount",
    "currency",
    "notes",
)


class LineItemService:
    """Service for household line item database operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def items_for_period(self, household_id: int, period_date: date) -> list[LineItem]:
        """Get every line item of the household in the month of ``period_date``.

        Args:
            household_id: Household ID
            period_date: Any date within the target month

        Returns:
            Line items ordered by category, then description
        """
        return (
            self.db.query(LineItem)
            .filter(
                LineItem.household_id == household_id,
                LineItem.period_date == beginning_of_month(period_date),
            )
            .order_by(LineItem.category.asc(), LineItem.description.asc(), LineItem.id.asc())
            .all()
        )

    def get_line_item(self, household_id: int, item_id: int) -> LineItem:
        """Get a line item of the household.

        Raises:
            RecordNotFoundError: If the item does not exist in this household
        """
        item = (
            self.db.query(LineItem)
            .filter(LineItem.household_id == household_id, LineItem.id == item_id)
            .first()
        )
        if not item:
            raise RecordNotFoundError("LineItem", item_id)
        return item

    def create_line_item(
        self,
        household_id: int,
        period_date: date | None,
        category: str | None = None,
        description: str | None = None,
        kind: LineItemKind | str | None = None,
        amount: Decimal | int | str | None = None,
        payment_cycle: PaymentCycle | str | None = PaymentCycle.CYCLE_1,
        item_type: ItemType | str | None = ItemType.CONSTANT,
        currency: str | None = None,
        member_id: int | None = None,
        notes: str | None = None,
    ) -> LineItem:
        """Create a line item in the month of ``period_date``.

        ``currency`` defaults to the household currency.

        Raises:
            RecordNotFoundError: If the household does not exist
            RecordValidationError: On missing fields, invalid choices or non-positive amount
        """
        household = self.db.get(Household, household_id)
        if not household:
            raise RecordNotFoundError("Household", household_id)

        values = self._validate(
            household_id,
            {
                "period_date": period_date,
                "category": category,
                "description": description,
                "kind": kind,
                "amount": amount,
                "payment_cycle": payment_cycle,
                "item_type": item_type,
                "currency": currency or household.currency,
                "member_id": member_id,
                "notes": notes,
            },
        )

        item = LineItem(household_id=household_id, **values)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)

        logger.info(
            "Created line item: id=%d, household_id=%d, kind=%s, cycle=%s, amount=%s, period=%s",
            item.id,
            household_id,
            item.kind,
            item.payment_cycle,
            item.amount,
            item.period_date,
        )
        return item

    def update_line_item(self, household_id: int, item_id: int, **changes: Any) -> LineItem:
        """Update editable fields of a line item.

        The period of an existing item is not editable; use ``copy_period``
        to carry items into another month.

        Raises:
            RecordNotFoundError: If the item does not exist in this household
            RecordValidationError: If the resulting item is invalid
        """
        item = self.get_line_item(household_id, item_id)

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields not editable: {', '.join(sorted(unknown))}")

        current = {field: getattr(item, field) for field in EDITABLE_FIELDS}
        current["period_date"] = item.period_date
        values = self._validate(household_id, {**current, **changes})

        for field, value in values.items():
            setattr(item, field, value)

        self.db.commit()
        self.db.refresh(item)
        logger.info("Updated line item %d in household %d", item.id, household_id)
        return item

    def delete_line_item(self, household_id: int, item_id: int) -> None:
        """Delete a line item."""
        item = self.get_line_item(household_id, item_id)
        self.db.delete(item)
        self.db.commit()
        logger.info("Deleted line item %d from household %d", item_id, household_id)

    def copy_period(self, household_id: int, from_period: date, to_period: date) -> list[LineItem]:
        """Duplicate every line item of ``from_period`` into ``to_period``.

        Copies keep all attributes except the period. Items already present
        in the target period are left alone, so running the copy twice
        duplicates the source items twice.

        Args:
            household_id: Household ID
            from_period: Any date within the source month
            to_period: Any date within the target month

        Returns:
            The newly created line items
        """
        target = beginning_of_month(to_period)
        source_items = self.items_for_period(household_id, from_period)

        copies = [
            LineItem(
                household_id=household_id,
                member_id=item.member_id,
                category=item.category,
                description=item.description,
                payment_cycle=item.payment_cycle,
                item_type=item.item_type,
                kind=item.kind,
                amount=item.amount,
                currency=item.currency,
                period_date=target,
                notes=item.notes,
            )
            for item in source_items
        ]
        self.db.add_all(copies)
        self.db.commit()

        logger.info(
            "Copied %d line items in household %d from %s to %s",
            len(copies),
            household_id,
            beginning_of_month(from_period),
            target,
        )
        return copies

    def _validate(self, household_id: int, values: dict[str, Any]) -> dict[str, Any]:
        errors = FieldErrors()

        errors.require("category", values["category"])
        errors.require("description", values["description"])
        errors.require("currency", values["currency"])
        has_period = errors.require("period_date", values["period_date"])
        kind = errors.choice("kind", values["kind"], LineItemKind)
        payment_cycle = errors.choice("payment_cycle", values["payment_cycle"], PaymentCycle)
        item_type = errors.choice("item_type", values["item_type"], ItemType)
        amount = errors.positive_amount("amount", values["amount"])

        member_id = values["member_id"]
        if member_id is not None:
            member = self.db.get(Member, member_id)
            if not member or member.household_id != household_id:
                errors.add("member_id", FieldErrors.MUST_EXIST)

        if errors.errors:
            logger.warning(
                "Line item validation failed for household %d: %s", household_id, errors.errors
            )
        errors.raise_if_any()

        return {
            "member_id": member_id,
            "category": values["category"].strip(),
            "description": values["description"].strip(),
            "payment_cycle": payment_cycle.value,
            "item_type": item_type.value,
            "kind": kind.value,
            "amount": amount,
            "currency": values["currency"].strip().upper(),
            "period_date": beginning_of_month(values["period_date"]) if has_period else None,
            "notes": values["notes"],
        }


__all__ = ["LineItemService"]
