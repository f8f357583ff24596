"""Tests for the shared expense ledger service."""

from datetime import date
from decimal import Decimal

import pytest

from household.services.errors import RecordNotFoundError, RecordValidationError
from household.services.shared_expense_service import SharedExpenseService


PERIOD = date(2025, 3, 1)


class TestCreateSharedExpense:
    def test_period_derived_from_expense_date(self, ledger, felipe):
        expense = ledger.shared(felipe, 12_000, expense_date=date(2025, 3, 15))

        assert expense.period_date == date(2025, 3, 1)
        assert expense.shared is True
        assert expense.currency == "CLP"

    def test_member_name(self, ledger, felipe):
        expense = ledger.shared(felipe, 12_000)

        assert expense.member_name == "Felipe"

    def test_required_fields(self, db_session, household):
        with pytest.raises(RecordValidationError) as exc_info:
            SharedExpenseService(db_session).create_shared_expense(
                household.id, member_id=None, description=" ", amount=None, expense_date=None
            )

        assert exc_info.value.errors == {
            "member_id": ["can't be blank"],
            "description": ["can't be blank"],
            "expense_date": ["can't be blank"],
            "amount": ["can't be blank"],
        }

    def test_payer_must_belong_to_household(self, db_session, other_household, felipe):
        with pytest.raises(RecordValidationError) as exc_info:
            SharedExpenseService(db_session).create_shared_expense(
                other_household.id,
                member_id=felipe.id,
                description="Groceries",
                amount=Decimal("100"),
                expense_date=date(2025, 3, 2),
            )

        assert exc_info.value.errors == {"member_id": ["must exist"]}

    def test_non_positive_amount_rejected(self, db_session, household, felipe):
        with pytest.raises(RecordValidationError) as exc_info:
            SharedExpenseService(db_session).create_shared_expense(
                household.id,
                member_id=felipe.id,
                description="Groceries",
                amount=Decimal("-5"),
                expense_date=date(2025, 3, 2),
            )

        assert exc_info.value.errors == {"amount": ["must be greater than 0"]}


class TestSharedExpensesForPeriod:
    def test_most_recent_first_including_private(self, db_session, household, felipe, ledger):
        early = ledger.shared(felipe, 100, expense_date=date(2025, 3, 2))
        late = ledger.shared(felipe, 200, expense_date=date(2025, 3, 28), shared=False)
        ledger.shared(felipe, 300, expense_date=date(2025, 4, 1))

        expenses = SharedExpenseService(db_session).shared_expenses_for_period(
            household.id, PERIOD
        )

        assert [e.id for e in expenses] == [late.id, early.id]


class TestUpdateSharedExpense:
    def test_new_date_moves_period(self, db_session, household, felipe, ledger):
        expense = ledger.shared(felipe, 100, expense_date=date(2025, 3, 2))

        updated = SharedExpenseService(db_session).update_shared_expense(
            household.id, expense.id, expense_date=date(2025, 4, 9)
        )

        assert updated.period_date == date(2025, 4, 1)

    def test_toggle_shared(self, db_session, household, felipe, ledger):
        expense = ledger.shared(felipe, 100)

        updated = SharedExpenseService(db_session).update_shared_expense(
            household.id, expense.id, shared=False
        )

        assert updated.shared is False

    def test_null_shared_flag_rejected(self, db_session, household, felipe, ledger):
        expense = ledger.shared(felipe, 100)
        service = SharedExpenseService(db_session)

        with pytest.raises(RecordValidationError) as exc_info:
            service.update_shared_expense(household.id, expense.id, shared=None)

        assert exc_info.value.errors == {"shared": ["is not included in the list"]}
        db_session.expire_all()
        assert service.get_shared_expense(household.id, expense.id).shared is True

    def test_period_not_editable(self, db_session, household, felipe, ledger):
        expense = ledger.shared(felipe, 100)

        with pytest.raises(ValueError, match="period_date"):
            SharedExpenseService(db_session).update_shared_expense(
                household.id, expense.id, period_date=date(2025, 1, 1)
            )

    def test_delete(self, db_session, household, felipe, ledger):
        expense = ledger.shared(felipe, 100)
        service = SharedExpenseService(db_session)

        service.delete_shared_expense(household.id, expense.id)

        with pytest.raises(RecordNotFoundError):
            service.get_shared_expense(household.id, expense.id)
