"""Member ORM model for the people sharing a household."""

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household.models import Base, BaseModel

CODE_MAX_LENGTH = 10


class Member(Base, BaseModel):
    """A household member.

    ``position`` orders the member directory. The settlement engine assigns
    payment cycles by this order unless told otherwise: the first member
    settles ``cycle_1`` and the second ``cycle_2``.
    """

    __tablename__ = "household_members"

    household_id: Mapped[int] = mapped_column(
        ForeignKey("households.id"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    code: Mapped[str] = mapped_column(
        String(CODE_MAX_LENGTH),
        nullable=False,
        comment="Short code, unique within the household (e.g., 'FL')",
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Directory order; first member is 1",
    )

    # Relationships
    household: Mapped["Household"] = relationship(  # noqa: F821
        "Household",
        back_populates="members",
        foreign_keys=[household_id],
    )
    line_items: Mapped[list["LineItem"]] = relationship(  # noqa: F821
        "LineItem",
        back_populates="member",
        foreign_keys="LineItem.member_id",
    )
    shared_expenses: Mapped[list["SharedExpense"]] = relationship(  # noqa: F821
        "SharedExpense",
        back_populates="member",
        foreign_keys="SharedExpense.member_id",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("household_id", "code", name="uq_household_member_code"),
        Index("idx_household_member_position", "household_id", "position"),
    )

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.code})"

    def __repr__(self) -> str:
        return (
            f"<Member(id={self.id}, household_id={self.household_id}, "
            f"name={self.name!r}, code={self.code!r}, position={self.position})>"
        )


__all__ = ["Member", "CODE_MAX_LENGTH"]
