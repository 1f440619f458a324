# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import os
import uuid
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["DEFAULT_CURRENCY"] = "TWD"

from tripledger.api.deps import get_db
from tripledger.main import app
from tripledger.models import Base
from tripledger.models.enums import BudgetCategoryType, CurrencyType
from tripledger.schemas.budget import BudgetCreate, BudgetRecord, CategoryInput
from tripledger.services import budget_service
from tripledger.services.ledger_service import BudgetLedger

# Test database setup
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def ledger(db_session) -> BudgetLedger:
    """Ledger bound to the test session."""
    return BudgetLedger(db_session)


@pytest.fixture
def make_budget(db_session):
    """Factory creating a budget; categories given as (type, amount) pairs."""

    def _make_budget(
        categories: list[tuple[BudgetCategoryType, str]] | None = None,
        total_amount: str = "50000",
        extra_budget: str = "0",
        currency: CurrencyType = CurrencyType.TWD,
        trip_id: uuid.UUID | None = None,
        title: str = "Tokyo five days",
    ) -> BudgetRecord:
        if categories is None:
            categories = [
                (BudgetCategoryType.FOOD, "10000"),
                (BudgetCategoryType.TRANSPORTATION, "8000"),
            ]
        data = BudgetCreate(
            trip_id=trip_id or uuid.uuid4(),
            title=title,
            total_amount=Decimal(total_amount),
            extra_budget=Decimal(extra_budget),
            currency=currency,
            categories=[
                CategoryInput(type=category_type, amount=Decimal(amount))
                for category_type, amount in categories
            ],
        )
        return budget_service.create_budget(db_session, data)

    return _make_budget
