"""Member directory service.

Encapsulates Member CRUD and the ordered directory the settlement engine
reads from.
"""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from household.models.household import Household
from household.models.member import CODE_MAX_LENGTH, Member
from household.services.errors import FieldErrors, RecordNotFoundError

logger = logging.getLogger(__name__)


class MemberService:
    """Service for household member database operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def ordered_members(self, household_id: int) -> list[Member]:
        """List the household's members ascending by position.

        Args:
            household_id: Household ID

        Returns:
            Members ordered by position (ties broken by id)
        """
        return (
            self.db.query(Member)
            .filter(Member.household_id == household_id)
            .order_by(Member.position.asc(), Member.id.asc())
            .all()
        )

    def get_member(self, household_id: int, member_id: int) -> Member:
        """Get a member of the household.

        Raises:
            RecordNotFoundError: If the member does not exist in this household
        """
        member = (
            self.db.query(Member)
            .filter(Member.household_id == household_id, Member.id == member_id)
            .first()
        )
        if not member:
            raise RecordNotFoundError("Member", member_id)
        return member

    def create_member(
        self,
        household_id: int,
        name: str | None,
        code: str | None,
        position: int | None = None,
    ) -> Member:
        """Create a member.

        When ``position`` is not given the member is appended after the
        current last position (first member gets 1).

        Raises:
            RecordNotFoundError: If the household does not exist
            RecordValidationError: On blank name/code, long code or duplicate code
        """
        if not self.db.get(Household, household_id):
            raise RecordNotFoundError("Household", household_id)

        self._validate(household_id, name, code)

        if position is None:
            position = self._next_position(household_id)

        member = Member(
            household_id=household_id,
            name=name.strip(),
            code=code.strip(),
            position=position,
        )
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)

        logger.info(
            "Created member: id=%d, household_id=%d, code=%s, position=%d",
            member.id,
            household_id,
            member.code,
            member.position,
        )
        return member

    def update_member(
        self,
        household_id: int,
        member_id: int,
        name: str | None = None,
        code: str | None = None,
        position: int | None = None,
    ) -> Member:
        """Update the given fields of a member; None leaves a field unchanged."""
        member = self.get_member(household_id, member_id)

        new_name = member.name if name is None else name
        new_code = member.code if code is None else code
        self._validate(household_id, new_name, new_code, exclude_id=member.id)

        member.name = new_name.strip()
        member.code = new_code.strip()
        if position is not None:
            member.position = position

        self.db.commit()
        self.db.refresh(member)
        logger.info("Updated member %d in household %d", member.id, household_id)
        return member

    def delete_member(self, household_id: int, member_id: int) -> None:
        """Delete a member.

        The member's line items stay in the ledger without an owner; the
        shared expenses the member paid are deleted with it.
        """
        member = self.get_member(household_id, member_id)
        self.db.delete(member)
        self.db.commit()
        logger.info("Deleted member %d from household %d", member_id, household_id)

    def _next_position(self, household_id: int) -> int:
        current_max = (
            self.db.query(func.max(Member.position))
            .filter(Member.household_id == household_id)
            .scalar()
        )
        return (current_max or 0) + 1

    def _validate(
        self,
        household_id: int,
        name: str | None,
        code: str | None,
        exclude_id: int | None = None,
    ) -> None:
        errors = FieldErrors()
        errors.require("name", name)

        if errors.require("code", code):
            code = code.strip()
            if len(code) > CODE_MAX_LENGTH:
                errors.add("code", f"is too long (maximum is {CODE_MAX_LENGTH} characters)")

            duplicate = self.db.query(Member).filter(
                Member.household_id == household_id, Member.code == code
            )
            if exclude_id is not None:
                duplicate = duplicate.filter(Member.id != exclude_id)
            if duplicate.first():
                errors.add("code", FieldErrors.TAKEN)

        if errors.errors:
            logger.warning(
                "Member validation failed for household %d: %s", household_id, errors.errors
            )
        errors.raise_if_any()


__all__ = ["MemberService"]
