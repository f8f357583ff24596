"""Household service for creating and looking up households."""

import logging

from sqlalchemy.orm import Session

from household.models.household import Household
from household.services.config import settings
from household.services.errors import FieldErrors, RecordNotFoundError

logger = logging.getLogger(__name__)


class HouseholdService:
    """Service for household database operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def get_household(self, household_id: int) -> Household:
        """Get household by ID.

        Raises:
            RecordNotFoundError: If the household does not exist
        """
        household = self.db.get(Household, household_id)
        if not household:
            raise RecordNotFoundError("Household", household_id)
        return household

    def create_household(self, name: str | None, currency: str | None = None) -> Household:
        """Create a household; currency defaults to the configured default currency."""
        errors = FieldErrors()
        errors.require("name", name)
        errors.raise_if_any()

        household = Household(
            name=name.strip(),
            currency=(currency or settings.default_currency).upper(),
        )
        self.db.add(household)
        self.db.commit()
        self.db.refresh(household)

        logger.info("Created household: id=%d, name=%s", household.id, household.name)
        return household


__all__ = ["HouseholdService"]
