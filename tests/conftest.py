"""Pytest configuration and shared fixtures."""

import os

# Set test settings BEFORE any imports from household
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("LOCALE", "en_US")

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from household.main import app  # noqa: E402
from household.models import Base  # noqa: E402
from household.services import create_db_engine, get_db  # noqa: E402
from household.services.household_service import HouseholdService  # noqa: E402
from household.services.line_item_service import LineItemService  # noqa: E402
from household.services.member_service import MemberService  # noqa: E402
from household.services.shared_expense_service import SharedExpenseService  # noqa: E402

test_engine = create_db_engine("sqlite:///:memory:")

PERIOD = date(2025, 3, 1)


@pytest.fixture
def db_session():
    """Provide a test database session with all tables created."""
    Base.metadata.create_all(bind=test_engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session):
    """Provide a FastAPI test client bound to the test session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def household(db_session):
    return HouseholdService(db_session).create_household("Dylan family", "CLP")


@pytest.fixture
def other_household(db_session):
    return HouseholdService(db_session).create_household("Neighbours", "CLP")


@pytest.fixture
def felipe(db_session, household):
    return MemberService(db_session).create_member(household.id, name="Felipe", code="FL")


@pytest.fixture
def romina(db_session, household, felipe):
    return MemberService(db_session).create_member(household.id, name="Romina", code="RP")


@pytest.fixture
def ledger(db_session, household):
    """Shortcuts for recording test data in the household ledgers."""
    return LedgerHelper(db_session, household.id)


class LedgerHelper:
    def __init__(self, db, household_id):
        self.household_id = household_id
        self.line_items = LineItemService(db)
        self.shared_expenses = SharedExpenseService(db)

    def income(self, member, cycle, amount, category="Income", period=PERIOD):
        return self.line_items.create_line_item(
            self.household_id,
            period_date=period,
            member_id=member.id if member else None,
            category=category,
            description="Test Income",
            payment_cycle=cycle,
            kind="income",
            amount=Decimal(amount),
        )

    def expense(self, member, cycle, amount, category="Expense", period=PERIOD):
        return self.line_items.create_line_item(
            self.household_id,
            period_date=period,
            member_id=member.id if member else None,
            category=category,
            description="Test Expense",
            payment_cycle=cycle,
            kind="expense",
            amount=Decimal(amount),
        )

    def shared(self, member, amount, expense_date=date(2025, 3, 15), shared=True):
        return self.shared_expenses.create_shared_expense(
            self.household_id,
            member_id=member.id,
            description="Test Shared Expense",
            amount=Decimal(amount),
            expense_date=expense_date,
            shared=shared,
        )
