"""Line item ORM model for recurring monthly incomes and expenses."""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household.models import Base, BaseModel
from household.models.money import Money


class PaymentCycle(str, Enum):
    """Pay cycle a line item is settled in."""

    CYCLE_1 = "cycle_1"
    """First member's cycle (e.g., salary on day 25 of previous month)."""

    CYCLE_2 = "cycle_2"
    """Second member's cycle (e.g., salary on day 5 of current month)."""

    SPORADIC = "sporadic"
    """No fixed date; aggregated but never assigned to a member."""


class ItemType(str, Enum):
    """Variability of a line item (display only)."""

    CONSTANT = "constant"
    VARIABLE = "variable"
    SPECIAL = "special"


class LineItemKind(str, Enum):
    """Whether a line item is money in or money out."""

    INCOME = "income"
    EXPENSE = "expense"


PAYMENT_CYCLE_LABELS = {
    PaymentCycle.CYCLE_1: "N°1",
    PaymentCycle.CYCLE_2: "N°2",
    PaymentCycle.SPORADIC: "N°3",
}

ITEM_TYPE_LABELS = {
    ItemType.CONSTANT: "CTE",
    ItemType.VARIABLE: "VAR",
    ItemType.SPECIAL: "ESP",
}


class LineItem(Base, BaseModel):
    """Model representing one income or expense of a household month.

    ``period_date`` is always the first day of the month the item belongs to.
    Items are typically carried from month to month with the line item
    ledger's period copy.
    """

    __tablename__ = "household_line_items"

    household_id: Mapped[int] = mapped_column(
        ForeignKey("households.id"),
        nullable=False,
        index=True,
    )
    member_id: Mapped[int | None] = mapped_column(
        ForeignKey("household_members.id"),
        nullable=True,
        index=True,
        comment="Optional owning member",
    )

    category: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    payment_cycle: Mapped[PaymentCycle] = mapped_column(
        String(20),
        nullable=False,
        default=PaymentCycle.CYCLE_1,
    )
    item_type: Mapped[ItemType] = mapped_column(
        String(20),
        nullable=False,
        default=ItemType.CONSTANT,
    )
    kind: Mapped[LineItemKind] = mapped_column(String(20), nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Money(),
        nullable=False,
        comment="Amount in currency units, 4 decimal places",
    )
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="CLP")
    period_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="First day of the month (e.g., 2025-03-01)",
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    household: Mapped["Household"] = relationship(  # noqa: F821
        "Household",
        back_populates="line_items",
        foreign_keys=[household_id],
    )
    member: Mapped["Member | None"] = relationship(  # noqa: F821
        "Member",
        back_populates="line_items",
        foreign_keys=[member_id],
    )

    __table_args__ = (
        Index("idx_line_item_household_period", "household_id", "period_date"),
        Index("idx_line_item_household_kind", "household_id", "kind"),
        Index("idx_line_item_household_cycle", "household_id", "payment_cycle"),
        Index("idx_line_item_household_category", "household_id", "category"),
    )

    @property
    def is_income(self) -> bool:
        return self.kind == LineItemKind.INCOME

    @property
    def signed_amount(self) -> Decimal:
        """Amount with sign: positive for income, negative for expense."""
        return self.amount if self.is_income else -self.amount

    @property
    def payment_cycle_label(self) -> str | None:
        return PAYMENT_CYCLE_LABELS.get(PaymentCycle(self.payment_cycle))

    @property
    def item_type_label(self) -> str | None:
        return ITEM_TYPE_LABELS.get(ItemType(self.item_type))

    def __repr__(self) -> str:
        return (
            f"<LineItem(id={self.id}, household_id={self.household_id}, "
            f"kind={self.kind}, cycle={self.payment_cycle}, category={self.category!r}, "
            f"amount={self.amount}, period={self.period_date})>"
        )


__all__ = [
    "LineItem",
    "LineItemKind",
    "PaymentCycle",
    "ItemType",
    "PAYMENT_CYCLE_LABELS",
    "ITEM_TYPE_LABELS",
]
