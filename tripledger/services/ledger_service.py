# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Budget ledger: the only writer of expenses and category spent amounts.

Every operation loads both collections, works on in-memory records, checks all
preconditions, and only then saves both collections and commits once. A failed
operation rolls back and leaves both stores as they were.

Invariant kept after every successful operation: for each category of each
budget, spent_amount equals the sum of the ACTUAL expenses posted to it.
"""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from tripledger.models.base import utcnow
from tripledger.models.enums import CurrencyType
from tripledger.schemas.budget import (
    BudgetRecord,
    CategoryInput,
    CategoryReallocate,
    CategoryRecord,
)
from tripledger.schemas.expense import ExpenseInput, ExpenseRecord
from tripledger.services.errors import (
    InvalidAmountError,
    InvalidInputError,
    LedgerError,
    NotFoundError,
)
from tripledger.services.stores import BudgetStore, ExpenseStore

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_input(schema: type[SchemaT], data: SchemaT | dict[str, Any]) -> SchemaT:
    """Validate raw input against a schema, raising InvalidInputError on failure."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) for err in e.errors()
        )
        raise InvalidInputError(f"Invalid {schema.__name__}: {fields}") from e


@dataclass
class LedgerState:
    """In-memory copies of both collections for one operation."""

    budgets: list[BudgetRecord]
    expenses: list[ExpenseRecord]

    def find_budget(self, budget_id: uuid.UUID) -> BudgetRecord | None:
        for budget in self.budgets:
            if budget.id == budget_id:
                return budget
        return None

    def budget(self, budget_id: uuid.UUID) -> BudgetRecord:
        budget = self.find_budget(budget_id)
        if budget is None:
            raise NotFoundError(f"Budget {budget_id} not found")
        return budget

    def category(self, budget: BudgetRecord, category_id: uuid.UUID) -> CategoryRecord:
        category = budget.find_category(category_id)
        if category is None:
            raise NotFoundError(
                f"Category {category_id} not found in budget {budget.id}"
            )
        return category

    def expense(self, expense_id: uuid.UUID) -> ExpenseRecord:
        for expense in self.expenses:
            if expense.id == expense_id:
                return expense
        raise NotFoundError(f"Expense {expense_id} not found")

    def posted_category(
        self, expense: ExpenseRecord
    ) -> tuple[BudgetRecord, CategoryRecord] | tuple[None, None]:
        """Resolve where an existing expense is posted; (None, None) for orphans."""
        budget = self.find_budget(expense.budget_id)
        if budget is None:
            return None, None
        category = budget.find_category(expense.category_id)
        if category is None:
            return None, None
        return budget, category


def _require_positive(amount: Decimal) -> None:
    if amount <= 0:
        raise InvalidAmountError(f"Expense amount must be positive, got {amount}")


def _require_non_negative(amount: Decimal) -> None:
    if amount < 0:
        raise InvalidAmountError(
            f"Category allocation cannot be negative, got {amount}"
        )


def _resolve_currency(
    budget: BudgetRecord, currency: CurrencyType | None
) -> CurrencyType:
    """Default to the budget currency; amounts in other currencies are refused."""
    if currency is None:
        return budget.currency
    if currency != budget.currency:
        raise InvalidInputError(
            f"Expense currency {currency.value} does not match "
            f"budget currency {budget.currency.value}"
        )
    return currency


class BudgetLedger:
    """Reconciliation engine over the budget and expense stores."""

    def __init__(self, db: Session) -> None:
        """Initialize the ledger.

        Args:
            db: Database session shared by both stores.
        """
        self.db = db
        self.budget_store = BudgetStore(db)
        self.expense_store = ExpenseStore(db)

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[LedgerState]:
        """Load both collections, then save and commit both if the body succeeds."""
        state = LedgerState(
            budgets=self.budget_store.load_all(),
            expenses=self.expense_store.load_all(),
        )
        try:
            yield state
            self.budget_store.save_all(state.budgets)
            self.expense_store.save_all(state.expenses)
            self.db.commit()
        except LedgerError as e:
            self.db.rollback()
            logger.warning(f"{operation} rejected: {e}")
            raise
        except Exception:
            self.db.rollback()
            logger.exception(f"{operation} failed, changes rolled back")
            raise

    def record_expense(self, data: ExpenseInput | dict[str, Any]) -> ExpenseRecord:
        """Record a new expense.

        ACTUAL expenses add their amount to the target category's spent amount.

        Raises:
            NotFoundError: Budget or category does not exist.
            InvalidAmountError: Amount is zero or negative.
            InvalidInputError: Input is malformed or in a foreign currency.
        """
        with self._transaction("record_expense") as state:
            data = parse_input(ExpenseInput, data)
            _require_positive(data.amount)
            budget = state.budget(data.budget_id)
            category = state.category(budget, data.category_id)
            currency = _resolve_currency(budget, data.currency)

            now = utcnow()
            expense = ExpenseRecord(
                id=uuid.uuid4(),
                **data.model_dump(exclude={"currency"}),
                currency=currency,
                created_at=now,
                updated_at=now,
            )
            if expense.is_actual:
                category.spent_amount += expense.amount
                budget.updated_at = now
            state.expenses.append(expense)

        logger.info(
            f"Recorded {expense.type.value} expense {expense.id} "
            f"({expense.amount} {expense.currency.value}) on category {category.id}"
        )
        return expense

    def update_expense(
        self,
        expense_id: uuid.UUID,
        data: ExpenseInput | dict[str, Any],
    ) -> ExpenseRecord:
        """Replace an expense's fields, moving its amount between categories.

        The old ACTUAL amount is taken off the category it was posted to, the
        fields are replaced, and the new ACTUAL amount is added to the category
        it is now posted to. Editing within one category goes through the same
        steps.

        Raises:
            NotFoundError: Expense, target budget or target category missing.
            InvalidAmountError: New amount is zero or negative.
            InvalidInputError: Input is malformed or in a foreign currency.
        """
        with self._transaction("update_expense") as state:
            data = parse_input(ExpenseInput, data)
            _require_positive(data.amount)
            current = state.expense(expense_id)
            budget = state.budget(data.budget_id)
            category = state.category(budget, data.category_id)
            currency = _resolve_currency(budget, data.currency)

            now = utcnow()

            # Take the old amount off; orphaned expenses have nothing to undo
            if current.is_actual:
                old_budget, old_category = state.posted_category(current)
                if old_category is not None:
                    old_category.spent_amount -= current.amount
                    old_budget.updated_at = now

            updated = current.model_copy(
                update={
                    **data.model_dump(exclude={"currency"}),
                    "currency": currency,
                    "updated_at": now,
                }
            )
            state.expenses[state.expenses.index(current)] = updated

            if updated.is_actual:
                category.spent_amount += updated.amount
                budget.updated_at = now

        logger.info(f"Updated expense {updated.id}")
        return updated

    def delete_expense(self, expense_id: uuid.UUID) -> None:
        """Delete an expense, taking an ACTUAL amount off its category.

        Raises:
            NotFoundError: Expense does not exist.
        """
        with self._transaction("delete_expense") as state:
            expense = state.expense(expense_id)
            if expense.is_actual:
                budget, category = state.posted_category(expense)
                if category is not None:
                    category.spent_amount -= expense.amount
                    budget.updated_at = utcnow()
            state.expenses.remove(expense)

        logger.info(f"Deleted expense {expense_id}")

    def reallocate_category(
        self,
        budget_id: uuid.UUID,
        category_id: uuid.UUID,
        new_amount: Decimal | int | float | str,
    ) -> BudgetRecord:
        """Set a category's allocated amount. Spent amounts are left alone.

        Raises:
            NotFoundError: Budget or category does not exist.
            InvalidAmountError: New amount is negative.
        """
        with self._transaction("reallocate_category") as state:
            amount = parse_input(CategoryReallocate, {"amount": new_amount}).amount
            _require_non_negative(amount)
            budget = state.budget(budget_id)
            category = state.category(budget, category_id)
            category.amount = amount
            budget.updated_at = utcnow()

        logger.info(f"Reallocated category {category_id} to {amount}")
        return budget

    def add_category(
        self,
        budget_id: uuid.UUID,
        data: CategoryInput | dict[str, Any],
    ) -> BudgetRecord:
        """Append a new, unspent category to a budget.

        Raises:
            NotFoundError: Budget does not exist.
            InvalidAmountError: Allocation is negative.
            InvalidInputError: Input is malformed.
        """
        with self._transaction("add_category") as state:
            data = parse_input(CategoryInput, data)
            _require_non_negative(data.amount)
            budget = state.budget(budget_id)
            category = CategoryRecord(
                id=uuid.uuid4(),
                type=data.type,
                amount=data.amount,
                spent_amount=Decimal("0"),
                note=data.note,
            )
            budget.categories.append(category)
            budget.updated_at = utcnow()

        logger.info(f"Added {category.type.value} category {category.id}")
        return budget

    def delete_category(
        self,
        budget_id: uuid.UUID,
        category_id: uuid.UUID,
    ) -> BudgetRecord:
        """Remove a category from a budget.

        Expenses posted to it are kept and become orphaned references.

        Raises:
            NotFoundError: Budget or category does not exist.
        """
        with self._transaction("delete_category") as state:
            budget = state.budget(budget_id)
            category = state.category(budget, category_id)
            budget.categories.remove(category)
            budget.updated_at = utcnow()
            orphaned = sum(
                1
                for e in state.expenses
                if e.budget_id == budget_id and e.category_id == category_id
            )

        if orphaned:
            logger.warning(
                f"Deleted category {category_id}; {orphaned} expenses now orphaned"
            )
        else:
            logger.info(f"Deleted category {category_id}")
        return budget
