# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for the budget ledger."""

import uuid
from datetime import date
from decimal import Decimal

import pytest

from tripledger.models.enums import BudgetCategoryType, CurrencyType
from tripledger.services import analytics_service
from tripledger.services.errors import (
    InvalidAmountError,
    InvalidInputError,
    NotFoundError,
)
from tripledger.services.stores import BudgetStore, ExpenseStore


def expense_data(budget, category, amount="3000", **overrides) -> dict:
    data = {
        "budget_id": budget.id,
        "category_id": category.id,
        "title": "Ramen dinner",
        "amount": amount,
        "expense_date": date(2025, 4, 1),
        "type": "ACTUAL",
        "payment_method": "CASH",
    }
    data.update(overrides)
    return data


def snapshot(db_session) -> tuple[list[dict], list[dict]]:
    return (
        [b.model_dump() for b in BudgetStore(db_session).load_all()],
        [e.model_dump() for e in ExpenseStore(db_session).load_all()],
    )


def spent(db_session, budget_id, category_id) -> Decimal:
    for budget in BudgetStore(db_session).load_all():
        if budget.id == budget_id:
            return budget.find_category(category_id).spent_amount
    raise AssertionError(f"budget {budget_id} missing")


def test_record_update_delete_round_trip(db_session, ledger, make_budget):
    budget = make_budget()
    food = budget.categories[0]

    expense = ledger.record_expense(expense_data(budget, food, "3000"))
    assert spent(db_session, budget.id, food.id) == Decimal("3000")
    assert expense.currency == CurrencyType.TWD

    ledger.update_expense(expense.id, expense_data(budget, food, "5000"))
    assert spent(db_session, budget.id, food.id) == Decimal("5000")

    ledger.delete_expense(expense.id)
    assert spent(db_session, budget.id, food.id) == Decimal("0")
    assert ExpenseStore(db_session).load_all() == []


def test_planned_expense_does_not_touch_spent(db_session, ledger, make_budget):
    budget = make_budget()
    food = budget.categories[0]

    ledger.record_expense(expense_data(budget, food, "1200", type="PLANNED"))

    assert spent(db_session, budget.id, food.id) == Decimal("0")
    expenses = ExpenseStore(db_session).load_all()
    assert analytics_service.planned_total(expenses) == Decimal("1200")


def test_spent_amounts_stay_consistent(db_session, ledger, make_budget):
    budget = make_budget()
    food, transport = budget.categories

    first = ledger.record_expense(expense_data(budget, food, "800"))
    second = ledger.record_expense(expense_data(budget, transport, "450.50"))
    ledger.record_expense(expense_data(budget, food, "300", type="PLANNED"))
    ledger.update_expense(first.id, expense_data(budget, transport, "900"))
    ledger.update_expense(second.id, expense_data(budget, food, "120.25"))
    ledger.delete_expense(first.id)

    assert analytics_service.run_audit(db_session) == []
    assert spent(db_session, budget.id, food.id) == Decimal("120.25")
    assert spent(db_session, budget.id, transport.id) == Decimal("0")


def test_unchanged_update_is_idempotent(db_session, ledger, make_budget):
    budget = make_budget()
    food = budget.categories[0]
    expense = ledger.record_expense(expense_data(budget, food, "640"))

    ledger.update_expense(expense.id, expense_data(budget, food, "640"))
    ledger.update_expense(expense.id, expense_data(budget, food, "640"))

    assert spent(db_session, budget.id, food.id) == Decimal("640")


def test_move_between_categories_preserves_total(db_session, ledger, make_budget):
    budget = make_budget()
    food, transport = budget.categories
    expense = ledger.record_expense(expense_data(budget, food, "1500"))

    moved = ledger.update_expense(expense.id, expense_data(budget, transport, "1500"))

    assert moved.category_id == transport.id
    assert spent(db_session, budget.id, food.id) == Decimal("0")
    assert spent(db_session, budget.id, transport.id) == Decimal("1500")


def test_move_between_budgets(db_session, ledger, make_budget):
    tokyo = make_budget(title="Tokyo")
    osaka = make_budget(title="Osaka")
    expense = ledger.record_expense(
        expense_data(tokyo, tokyo.categories[0], "2000")
    )

    ledger.update_expense(
        expense.id, expense_data(osaka, osaka.categories[1], "2000")
    )

    assert spent(db_session, tokyo.id, tokyo.categories[0].id) == Decimal("0")
    assert spent(db_session, osaka.id, osaka.categories[1].id) == Decimal("2000")
    assert analytics_service.run_audit(db_session) == []


def test_type_flip_moves_amount_out_of_spent(db_session, ledger, make_budget):
    budget = make_budget()
    food = budget.categories[0]
    expense = ledger.record_expense(expense_data(budget, food, "700"))

    ledger.update_expense(expense.id, expense_data(budget, food, "700", type="PLANNED"))
    assert spent(db_session, budget.id, food.id) == Decimal("0")
    expenses = ExpenseStore(db_session).load_all()
    assert analytics_service.planned_total(expenses) == Decimal("700")

    ledger.update_expense(expense.id, expense_data(budget, food, "900"))
    assert spent(db_session, budget.id, food.id) == Decimal("900")


def test_planned_to_planned_edit_leaves_spent(db_session, ledger, make_budget):
    budget = make_budget()
    food, transport = budget.categories
    ledger.record_expense(expense_data(budget, food, "100"))
    expense = ledger.record_expense(expense_data(budget, food, "500", type="PLANNED"))

    ledger.update_expense(
        expense.id, expense_data(budget, transport, "800", type="PLANNED")
    )

    assert spent(db_session, budget.id, food.id) == Decimal("100")
    assert spent(db_session, budget.id, transport.id) == Decimal("0")


@pytest.mark.parametrize(
    ("overrides", "error"),
    [
        ({"amount": "0"}, InvalidAmountError),
        ({"amount": "-50"}, InvalidAmountError),
        ({"category_id": uuid.uuid4()}, NotFoundError),
        ({"budget_id": uuid.uuid4()}, NotFoundError),
        ({"type": "MAYBE"}, InvalidInputError),
        ({"payment_method": "BARTER"}, InvalidInputError),
        ({"currency": "USD"}, InvalidInputError),
        ({"title": ""}, InvalidInputError),
    ],
)
def test_rejected_record_changes_nothing(
    db_session, ledger, make_budget, overrides, error
):
    budget = make_budget()
    food = budget.categories[0]
    ledger.record_expense(expense_data(budget, food, "400"))
    before = snapshot(db_session)

    with pytest.raises(error):
        ledger.record_expense(expense_data(budget, food, **overrides))

    assert snapshot(db_session) == before


def test_rejected_update_changes_nothing(db_session, ledger, make_budget):
    budget = make_budget()
    food, transport = budget.categories
    expense = ledger.record_expense(expense_data(budget, food, "400"))
    before = snapshot(db_session)

    with pytest.raises(NotFoundError):
        ledger.update_expense(
            expense.id, expense_data(budget, transport, category_id=uuid.uuid4())
        )
    with pytest.raises(InvalidAmountError):
        ledger.update_expense(expense.id, expense_data(budget, transport, "0"))
    with pytest.raises(NotFoundError):
        ledger.update_expense(uuid.uuid4(), expense_data(budget, transport))

    assert snapshot(db_session) == before


def test_delete_missing_expense(db_session, ledger):
    with pytest.raises(NotFoundError):
        ledger.delete_expense(uuid.uuid4())


def test_expense_currency_defaults_to_budget(ledger, make_budget):
    budget = make_budget(currency=CurrencyType.JPY)
    food = budget.categories[0]

    expense = ledger.record_expense(expense_data(budget, food, "1800"))
    explicit = ledger.record_expense(
        expense_data(budget, food, "1800", currency="JPY")
    )

    assert expense.currency == CurrencyType.JPY
    assert explicit.currency == CurrencyType.JPY


def test_amount_rounded_to_cents(db_session, ledger, make_budget):
    budget = make_budget()
    food = budget.categories[0]

    expense = ledger.record_expense(expense_data(budget, food, "12.344"))

    assert expense.amount == Decimal("12.34")
    assert spent(db_session, budget.id, food.id) == expense.amount


class TestCategories:
    """Category allocation changes."""

    def test_reallocate_keeps_spent(self, db_session, ledger, make_budget):
        """Lowering an allocation below spent is allowed and keeps spent."""
        budget = make_budget()
        food = budget.categories[0]
        ledger.record_expense(expense_data(budget, food, "3000"))

        updated = ledger.reallocate_category(budget.id, food.id, Decimal("2000"))

        category = updated.find_category(food.id)
        assert category.amount == Decimal("2000")
        assert category.spent_amount == Decimal("3000")
        assert spent(db_session, budget.id, food.id) == Decimal("3000")

    def test_reallocate_negative_rejected(self, db_session, ledger, make_budget):
        """Negative allocations are refused."""
        budget = make_budget()
        food = budget.categories[0]
        before = snapshot(db_session)

        with pytest.raises(InvalidAmountError):
            ledger.reallocate_category(budget.id, food.id, Decimal("-1"))
        with pytest.raises(InvalidInputError):
            ledger.reallocate_category(budget.id, food.id, "lots")
        with pytest.raises(NotFoundError):
            ledger.reallocate_category(budget.id, uuid.uuid4(), Decimal("10"))

        assert snapshot(db_session) == before

    def test_add_category(self, db_session, ledger, make_budget):
        """New categories are appended unspent."""
        budget = make_budget()

        updated = ledger.add_category(
            budget.id, {"type": "SHOPPING", "amount": "5000", "note": "souvenirs"}
        )

        assert len(updated.categories) == 3
        added = updated.categories[-1]
        assert added.type == BudgetCategoryType.SHOPPING
        assert added.spent_amount == Decimal("0")
        stored = BudgetStore(db_session).load_all()[0]
        assert [c.id for c in stored.categories] == [c.id for c in updated.categories]

    def test_add_category_rejections(self, db_session, ledger, make_budget):
        """Bad category input changes nothing."""
        budget = make_budget()
        before = snapshot(db_session)

        with pytest.raises(InvalidInputError):
            ledger.add_category(budget.id, {"type": "SPA", "amount": "10"})
        with pytest.raises(InvalidAmountError):
            ledger.add_category(budget.id, {"type": "SHOPPING", "amount": "-10"})
        with pytest.raises(NotFoundError):
            ledger.add_category(uuid.uuid4(), {"type": "SHOPPING", "amount": "10"})

        assert snapshot(db_session) == before

    def test_delete_category_orphans_expenses(self, db_session, ledger, make_budget):
        """Expenses survive their category's deletion."""
        budget = make_budget()
        food, transport = budget.categories
        expense = ledger.record_expense(expense_data(budget, food, "600"))

        updated = ledger.delete_category(budget.id, food.id)

        assert [c.id for c in updated.categories] == [transport.id]
        expenses = ExpenseStore(db_session).load_all()
        assert [e.id for e in expenses] == [expense.id]
        orphans = analytics_service.orphaned_expenses(updated, expenses)
        assert [e.id for e in orphans] == [expense.id]
        assert analytics_service.run_audit(db_session) == []

    def test_update_orphan_posts_to_new_category(self, db_session, ledger, make_budget):
        """Reassigning an orphan adds to the target only."""
        budget = make_budget()
        food, transport = budget.categories
        expense = ledger.record_expense(expense_data(budget, food, "600"))
        ledger.delete_category(budget.id, food.id)

        ledger.update_expense(expense.id, expense_data(budget, transport, "600"))

        assert spent(db_session, budget.id, transport.id) == Decimal("600")
        assert analytics_service.run_audit(db_session) == []

    def test_delete_orphan(self, db_session, ledger, make_budget):
        """Deleting an orphan touches no category."""
        budget = make_budget()
        food, transport = budget.categories
        ledger.record_expense(expense_data(budget, transport, "50"))
        expense = ledger.record_expense(expense_data(budget, food, "600"))
        ledger.delete_category(budget.id, food.id)

        ledger.delete_expense(expense.id)

        assert spent(db_session, budget.id, transport.id) == Decimal("50")
        assert len(ExpenseStore(db_session).load_all()) == 1

    def test_delete_missing_category(self, ledger, make_budget):
        """Unknown category ids are reported."""
        budget = make_budget()
        with pytest.raises(NotFoundError):
            ledger.delete_category(budget.id, uuid.uuid4())
