"""Shared expense ORM model for ad-hoc spending fronted by one member."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from household.models import Base, BaseModel
from household.models.money import Money


class SharedExpense(Base, BaseModel):
    """Model representing an expense paid by one member.

    Only expenses with ``shared=True`` are split between members during
    settlement; the rest are kept for visibility only.

    ``period_date`` follows ``expense_date`` (truncated to the first day of
    its month) and is never assigned on its own.
    """

    __tablename__ = "household_shared_expenses"

    household_id: Mapped[int] = mapped_column(
        ForeignKey("households.id"),
        nullable=False,
        index=True,
    )
    member_id: Mapped[int] = mapped_column(
        ForeignKey("household_members.id"),
        nullable=False,
        index=True,
        comment="Member who paid",
    )

    description: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Money(),
        nullable=False,
        comment="Amount in currency units, 4 decimal places",
    )
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="CLP")
    expense_date: Mapped[date] = mapped_column(Date, nullable=False)
    period_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="First day of the expense month, derived from expense_date",
    )
    shared: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    household: Mapped["Household"] = relationship(  # noqa: F821
        "Household",
        back_populates="shared_expenses",
        foreign_keys=[household_id],
    )
    member: Mapped["Member"] = relationship(  # noqa: F821
        "Member",
        back_populates="shared_expenses",
        foreign_keys=[member_id],
    )

    __table_args__ = (
        Index("idx_shared_expense_household_period", "household_id", "period_date"),
        Index(
            "idx_shared_expense_member_period",
            "household_id",
            "member_id",
            "period_date",
        ),
    )

    @validates("expense_date")
    def _sync_period_date(self, key: str, value: date | None) -> date | None:
        self.period_date = value.replace(day=1) if value else None
        return value

    @property
    def member_name(self) -> str:
        return self.member.name if self.member else "Unassigned"

    def __repr__(self) -> str:
        return (
            f"<SharedExpense(id={self.id}, household_id={self.household_id}, "
            f"member_id={self.member_id}, amount={self.amount}, "
            f"expense_date={self.expense_date}, shared={self.shared})>"
        )


__all__ = ["SharedExpense"]
