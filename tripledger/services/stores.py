# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Load-all / save-all access to the budget and expense collections.

The stores never commit. Callers own the transaction, so that a ledger
operation can write both collections and commit them together.
"""

import logging

from sqlalchemy.orm import Session, selectinload

from tripledger.models import Budget, BudgetCategory, Expense
from tripledger.schemas.budget import BudgetRecord
from tripledger.schemas.expense import ExpenseRecord

logger = logging.getLogger(__name__)

_EXPENSE_FIELDS = (
    "budget_id",
    "category_id",
    "title",
    "amount",
    "currency",
    "expense_date",
    "type",
    "payment_method",
    "location",
    "notes",
    "created_at",
    "updated_at",
)


class BudgetStore:
    """Durable collection of budgets with their embedded categories."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _query(self):
        return self.db.query(Budget).options(selectinload(Budget.categories))

    def load_all(self) -> list[BudgetRecord]:
        """Load every budget as a detached record."""
        budgets = self._query().order_by(Budget.created_at, Budget.id).all()
        logger.debug(f"Loaded {len(budgets)} budgets")
        return [BudgetRecord.model_validate(b) for b in budgets]

    def save_all(self, budgets: list[BudgetRecord]) -> None:
        """Make the stored budgets match the given list.

        Rows missing from the list are deleted together with their categories.
        Changes are flushed, not committed.
        """
        existing = {b.id: b for b in self._query().all()}
        seen = set()

        for record in budgets:
            row = existing.get(record.id)
            if row is None:
                row = Budget(id=record.id)
                self.db.add(row)
            self._apply(row, record)
            seen.add(record.id)

        for budget_id, row in existing.items():
            if budget_id not in seen:
                self.db.delete(row)

        self.db.flush()
        logger.debug(f"Saved {len(budgets)} budgets")

    @staticmethod
    def _apply(row: Budget, record: BudgetRecord) -> None:
        row.trip_id = record.trip_id
        row.title = record.title
        row.total_amount = record.total_amount
        row.extra_budget = record.extra_budget
        row.currency = record.currency
        row.created_at = record.created_at
        row.updated_at = record.updated_at

        current = {c.id: c for c in row.categories}
        categories = []
        for position, category_record in enumerate(record.categories):
            category = current.get(category_record.id)
            if category is None:
                category = BudgetCategory(id=category_record.id)
            category.position = position
            category.type = category_record.type
            category.amount = category_record.amount
            category.spent_amount = category_record.spent_amount
            category.note = category_record.note
            categories.append(category)
        # delete-orphan cascade removes categories dropped from the list
        row.categories = categories


class ExpenseStore:
    """Durable collection of expense records."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def load_all(self) -> list[ExpenseRecord]:
        """Load every expense as a detached record."""
        expenses = (
            self.db.query(Expense)
            .order_by(Expense.expense_date, Expense.created_at, Expense.id)
            .all()
        )
        logger.debug(f"Loaded {len(expenses)} expenses")
        return [ExpenseRecord.model_validate(e) for e in expenses]

    def save_all(self, expenses: list[ExpenseRecord]) -> None:
        """Make the stored expenses match the given list. Flushes, never commits."""
        existing = {e.id: e for e in self.db.query(Expense).all()}
        seen = set()

        for record in expenses:
            row = existing.get(record.id)
            if row is None:
                row = Expense(id=record.id)
                self.db.add(row)
            for field in _EXPENSE_FIELDS:
                setattr(row, field, getattr(record, field))
            row.receipt = list(record.receipt)
            seen.add(record.id)

        for expense_id, row in existing.items():
            if expense_id not in seen:
                self.db.delete(row)

        self.db.flush()
        logger.debug(f"Saved {len(expenses)} expenses")
