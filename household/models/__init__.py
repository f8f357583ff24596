"""SQLAlchemy base model with common fields and model exports."""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# Base class for all models
Base = declarative_base()


class BaseModel:
    """Base model with common timestamp fields."""

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


# Import models to register them with Base (after Base is defined)
# This must be after Base declaration to avoid circular imports
from household.models.household import Household  # noqa: E402
from household.models.line_item import ItemType, LineItem, LineItemKind, PaymentCycle  # noqa: E402
from household.models.member import Member  # noqa: E402
from household.models.shared_expense import SharedExpense  # noqa: E402

__all__ = [
    "Base",
    "BaseModel",
    "Household",
    "Member",
    "LineItem",
    "LineItemKind",
    "PaymentCycle",
    "ItemType",
    "SharedExpense",
]
