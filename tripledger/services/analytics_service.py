# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Budget analytics: read-only projections over budgets and expenses.

Nothing here writes, and nothing here recomputes a category's stored
spent_amount. Empty input gives 0 or an empty list, never an error.
Percentages and averages are rounded half up to whole numbers.
"""

import logging
import uuid
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

from tripledger.models.enums import ExpenseType
from tripledger.schemas.analytics import (
    BudgetSummary,
    CategoryBreakdownItem,
    DailyExpense,
    SpentAmountDiscrepancy,
)
from tripledger.schemas.budget import BudgetRecord, CategoryRecord
from tripledger.schemas.expense import ExpenseRecord
from tripledger.services.errors import NotFoundError
from tripledger.services.stores import BudgetStore, ExpenseStore

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _round(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def _percentage(part: Decimal, whole: Decimal) -> int:
    """Whole-number percentage clamped to [0, 100]; 0 when whole is 0."""
    if whole <= 0:
        return 0
    value = int(_round(Decimal(part) * 100 / Decimal(whole)))
    return min(max(value, 0), 100)


def _actual(expenses: Iterable[ExpenseRecord]) -> list[ExpenseRecord]:
    return [e for e in expenses if e.type == ExpenseType.ACTUAL]


def _for_budget(
    budget: BudgetRecord, expenses: Iterable[ExpenseRecord]
) -> list[ExpenseRecord]:
    return [e for e in expenses if e.budget_id == budget.id]


def _span_days(dates: list[date]) -> int:
    return max(1, (max(dates) - min(dates)).days + 1)


def total_budget(budget: BudgetRecord) -> Decimal:
    """Usable ceiling of a budget: total amount plus extra budget."""
    return budget.total_amount + budget.extra_budget


def used_budget(expenses: Iterable[ExpenseRecord]) -> Decimal:
    """Sum of ACTUAL expense amounts."""
    return sum((e.amount for e in _actual(expenses)), ZERO)


def planned_total(expenses: Iterable[ExpenseRecord]) -> Decimal:
    """Sum of PLANNED expense amounts."""
    return sum(
        (e.amount for e in expenses if e.type == ExpenseType.PLANNED),
        ZERO,
    )


def total_usage_percentage(
    budget: BudgetRecord, expenses: Iterable[ExpenseRecord]
) -> int:
    """Share of the usable ceiling already spent, 0-100."""
    return _percentage(used_budget(_for_budget(budget, expenses)), total_budget(budget))


def category_usage_percentage(category: CategoryRecord) -> int:
    """Share of a category's allocation already spent, 0-100."""
    return _percentage(category.spent_amount, category.amount)


def category_remaining(category: CategoryRecord) -> Decimal:
    """Unspent part of a category's allocation, never negative."""
    return max(ZERO, category.amount - category.spent_amount)


def remaining_budget(budget: BudgetRecord, expenses: Iterable[ExpenseRecord]) -> Decimal:
    """Unspent part of the usable ceiling, never negative."""
    return max(ZERO, total_budget(budget) - used_budget(_for_budget(budget, expenses)))


def daily_expense_trend(expenses: Iterable[ExpenseRecord]) -> list[DailyExpense]:
    """ACTUAL spending per day from the first to the last expense date.

    Days without expenses are included with amount 0 and count 0.
    """
    actual = _actual(expenses)
    if not actual:
        return []

    amounts: dict[date, Decimal] = defaultdict(lambda: ZERO)
    counts: dict[date, int] = defaultdict(int)
    for expense in actual:
        amounts[expense.expense_date] += expense.amount
        counts[expense.expense_date] += 1

    start = min(amounts)
    return [
        DailyExpense(
            date=day,
            amount=amounts.get(day, ZERO),
            count=counts.get(day, 0),
        )
        for day in (start + timedelta(days=i) for i in range(_span_days(list(amounts))))
    ]


def daily_average(expenses: Iterable[ExpenseRecord]) -> Decimal:
    """ACTUAL spending divided by the number of days it spans."""
    actual = _actual(expenses)
    if not actual:
        return ZERO
    days = _span_days([e.expense_date for e in actual])
    return _round(used_budget(actual) / days)


def category_breakdown(budget: BudgetRecord) -> list[CategoryBreakdownItem]:
    """Per-category spending, largest spent amount first."""
    items = [
        CategoryBreakdownItem(
            category_id=category.id,
            category_type=category.type,
            category_label=category.label,
            spent_amount=category.spent_amount,
            allocated_amount=category.amount,
            usage_percentage=category_usage_percentage(category),
        )
        for category in budget.categories
    ]
    return sorted(items, key=lambda item: item.spent_amount, reverse=True)


def orphaned_expenses(
    budget: BudgetRecord, expenses: Iterable[ExpenseRecord]
) -> list[ExpenseRecord]:
    """Expenses of the budget whose category no longer exists."""
    category_ids = {c.id for c in budget.categories}
    return [
        e for e in _for_budget(budget, expenses) if e.category_id not in category_ids
    ]


def audit_spent_amounts(
    budgets: Iterable[BudgetRecord],
    expenses: Iterable[ExpenseRecord],
) -> list[SpentAmountDiscrepancy]:
    """Compare every stored spent amount with the sum of its ACTUAL expenses.

    Reports mismatches only; nothing is corrected.
    """
    derived: dict[tuple[uuid.UUID, uuid.UUID], Decimal] = defaultdict(lambda: ZERO)
    for expense in _actual(expenses):
        derived[(expense.budget_id, expense.category_id)] += expense.amount

    discrepancies = []
    for budget in budgets:
        for category in budget.categories:
            expected = derived.get((budget.id, category.id), ZERO)
            if category.spent_amount != expected:
                logger.warning(
                    f"Category {category.id} of budget {budget.id} stores "
                    f"spent {category.spent_amount}, expenses sum to {expected}"
                )
                discrepancies.append(
                    SpentAmountDiscrepancy(
                        budget_id=budget.id,
                        category_id=category.id,
                        stored_spent_amount=category.spent_amount,
                        derived_spent_amount=expected,
                    )
                )
    return discrepancies


def run_audit(db: Session) -> list[SpentAmountDiscrepancy]:
    """Audit every budget currently in the store."""
    return audit_spent_amounts(
        BudgetStore(db).load_all(),
        ExpenseStore(db).load_all(),
    )


def summarize_budget(
    budget: BudgetRecord, expenses: Iterable[ExpenseRecord]
) -> BudgetSummary:
    """Assemble every projection for one budget."""
    own = _for_budget(budget, expenses)
    return BudgetSummary(
        budget_id=budget.id,
        title=budget.title,
        currency=budget.currency,
        total_budget=total_budget(budget),
        used_budget=used_budget(own),
        remaining_budget=remaining_budget(budget, own),
        planned_total=planned_total(own),
        total_usage_percentage=total_usage_percentage(budget, own),
        daily_average=daily_average(own),
        daily_trend=daily_expense_trend(own),
        categories=category_breakdown(budget),
        expense_count=len(own),
        orphaned_expense_count=len(orphaned_expenses(budget, own)),
    )


def build_budget_summary(db: Session, budget_id: uuid.UUID) -> BudgetSummary:
    """Load a budget with its expenses and summarize it.

    Raises:
        NotFoundError: Budget does not exist.
    """
    budget = next(
        (b for b in BudgetStore(db).load_all() if b.id == budget_id),
        None,
    )
    if budget is None:
        raise NotFoundError(f"Budget {budget_id} not found")
    return summarize_budget(budget, ExpenseStore(db).load_all())
