"""Domain exceptions raised by the household ledgers."""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Type, TypeVar

from household.models.money import MONEY_PRECISION, MONEY_SCALE

E = TypeVar("E", bound=Enum)


class HouseholdError(Exception):
    """Base household application error."""

    def __init__(self, message: str, code: str, http_status: int = 400):
        """Initialize error."""
        self.message = message
        self.code = code
        self.http_status = http_status
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class RecordNotFoundError(HouseholdError):
    """Requested record does not exist in the household."""

    def __init__(self, entity: str, record_id: int):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found", "not_found", 404)


class RecordValidationError(HouseholdError):
    """One or more fields failed validation.

    ``errors`` maps each offending field to its messages, e.g.
    ``{"code": ["has already been taken"]}``.
    """

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Validation failed: {fields}", "validation_failed", 422)

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "fields": self.errors}


class FieldErrors:
    """Collects per-field messages while a record is validated."""

    BLANK = "can't be blank"
    NOT_POSITIVE = "must be greater than 0"
    TAKEN = "has already been taken"
    MUST_EXIST = "must exist"
    NOT_INCLUDED = "is not included in the list"

    AMOUNT_SCALE = MONEY_SCALE
    AMOUNT_LIMIT = Decimal(10) ** (MONEY_PRECISION - MONEY_SCALE)

    def __init__(self) -> None:
        self.errors: Dict[str, List[str]] = {}

    def add(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def require(self, field: str, value: Any) -> bool:
        """Record a blank error when ``value`` is missing; returns True when present."""
        if value is None or (isinstance(value, str) and not value.strip()):
            self.add(field, self.BLANK)
            return False
        return True

    def positive_amount(self, field: str, value: Any) -> Decimal | None:
        """Coerce ``value`` to Decimal and check it fits a positive NUMERIC(19, 4).

        Amounts with more than four decimal places are rejected rather than
        rounded, so nothing rounds to zero on save.
        """
        if not self.require(field, value):
            return None
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            self.add(field, "is not a number")
            return None
        if not amount.is_finite():
            self.add(field, "is not a number")
            return None
        if amount <= 0:
            self.add(field, self.NOT_POSITIVE)
            return None
        if amount >= self.AMOUNT_LIMIT:
            self.add(field, f"must be less than {self.AMOUNT_LIMIT:f}")
            return None
        if amount != amount.quantize(Decimal(1).scaleb(-self.AMOUNT_SCALE)):
            self.add(field, f"must have at most {self.AMOUNT_SCALE} decimal places")
            return None
        return amount

    def boolean(self, field: str, value: Any) -> bool | None:
        """Accept only an actual True/False; None is not treated as False."""
        if not isinstance(value, bool):
            self.add(field, self.NOT_INCLUDED)
            return None
        return value

    def choice(self, field: str, value: Any, enum_cls: Type[E]) -> E | None:
        """Coerce ``value`` to a member of ``enum_cls``."""
        if not self.require(field, value):
            return None
        try:
            return enum_cls(value)
        except ValueError:
            self.add(field, self.NOT_INCLUDED)
            return None

    def raise_if_any(self) -> None:
        if self.errors:
            raise RecordValidationError(self.errors)


__all__ = [
    "HouseholdError",
    "RecordNotFoundError",
    "RecordValidationError",
    "FieldErrors",
]
