# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for budget_service."""

import uuid
from datetime import date
from decimal import Decimal

import pytest

from tripledger.models.enums import BudgetCategoryType, CurrencyType
from tripledger.schemas.budget import BudgetCreate, BudgetUpdate, CategoryInput
from tripledger.services import budget_service
from tripledger.services.errors import (
    InvalidAmountError,
    InvalidInputError,
    NotFoundError,
)


def test_create_budget_defaults(db_session):
    data = BudgetCreate(
        trip_id=uuid.uuid4(),
        title="Bangkok",
        total_amount=Decimal("30000"),
        categories=[
            CategoryInput(type=BudgetCategoryType.FOOD, amount=Decimal("8000")),
            CategoryInput(type=BudgetCategoryType.ATTRACTIONS, amount=Decimal("4000")),
        ],
    )

    budget = budget_service.create_budget(db_session, data)

    assert budget.currency == CurrencyType.TWD
    assert budget.extra_budget == Decimal("0")
    assert [c.type for c in budget.categories] == [
        BudgetCategoryType.FOOD,
        BudgetCategoryType.ATTRACTIONS,
    ]
    assert all(c.spent_amount == Decimal("0") for c in budget.categories)
    assert budget_service.get_budget(db_session, budget.id) == budget


def test_get_budget_missing(db_session):
    assert budget_service.get_budget(db_session, uuid.uuid4()) is None


def test_get_budgets_filters_by_trip(db_session, make_budget):
    trip_id = uuid.uuid4()
    first = make_budget(trip_id=trip_id, title="first")
    make_budget(title="other trip")
    second = make_budget(trip_id=trip_id, title="second")

    budgets = budget_service.get_budgets(db_session, trip_id)

    assert [b.id for b in budgets] == [first.id, second.id]
    assert len(budget_service.get_budgets(db_session)) == 3


def test_update_budget_header(db_session, make_budget):
    budget = make_budget()

    updated = budget_service.update_budget(
        db_session,
        budget.id,
        BudgetUpdate(title="Tokyo week", extra_budget=Decimal("2500")),
    )

    assert updated.title == "Tokyo week"
    assert updated.extra_budget == Decimal("2500")
    assert updated.total_amount == budget.total_amount
    assert [c.id for c in updated.categories] == [c.id for c in budget.categories]


def test_update_budget_currency_without_expenses(db_session, make_budget):
    budget = make_budget()

    updated = budget_service.update_budget(
        db_session, budget.id, BudgetUpdate(currency=CurrencyType.JPY)
    )

    assert updated.currency == CurrencyType.JPY


def test_update_budget_currency_with_expenses_rejected(
    db_session, ledger, make_budget
):
    budget = make_budget()
    ledger.record_expense(
        {
            "budget_id": budget.id,
            "category_id": budget.categories[0].id,
            "title": "Sushi",
            "amount": "1200",
            "expense_date": date(2025, 4, 2),
        }
    )

    with pytest.raises(InvalidInputError):
        budget_service.update_budget(
            db_session, budget.id, BudgetUpdate(currency=CurrencyType.USD)
        )

    assert budget_service.get_budget(db_session, budget.id).currency == CurrencyType.TWD


def test_update_missing_budget(db_session):
    with pytest.raises(NotFoundError):
        budget_service.update_budget(db_session, uuid.uuid4(), BudgetUpdate(title="x"))


def test_create_budget_rejects_negative_allocation(db_session):
    data = BudgetCreate(
        trip_id=uuid.uuid4(),
        title="Hanoi",
        total_amount=Decimal("20000"),
        categories=[
            CategoryInput(type=BudgetCategoryType.SHOPPING, amount=Decimal("3000")),
            CategoryInput(type=BudgetCategoryType.FOOD, amount=Decimal("-500")),
        ],
    )

    with pytest.raises(InvalidAmountError):
        budget_service.create_budget(db_session, data)

    assert budget_service.get_budgets(db_session) == []
