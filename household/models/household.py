"""Household ORM model grouping members and their monthly ledgers."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household.models import Base, BaseModel


class Household(Base, BaseModel):
    """A household whose members share monthly income and expenses.

    Every ledger record belongs to exactly one household; deleting the
    household removes its members, line items and shared expenses.
    """

    __tablename__ = "households"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Household display name",
    )
    currency: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        default="CLP",
        comment="Default ISO 4217 currency for new records",
    )

    # Relationships
    members: Mapped[list["Member"]] = relationship(  # noqa: F821
        "Member",
        back_populates="household",
        cascade="all, delete-orphan",
        order_by="Member.position",
    )
    line_items: Mapped[list["LineItem"]] = relationship(  # noqa: F821
        "LineItem",
        back_populates="household",
        cascade="all, delete-orphan",
    )
    shared_expenses: Mapped[list["SharedExpense"]] = relationship(  # noqa: F821
        "SharedExpense",
        back_populates="household",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Household(id={self.id}, name={self.name!r}, currency={self.currency})>"


__all__ = ["Household"]
