# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Budget service.

Creates and edits budget headers. Category allocations and spent amounts are
changed only through the ledger.
"""

import logging
import uuid
from decimal import Decimal

from sqlalchemy.orm import Session, selectinload

from tripledger.config import settings
from tripledger.models import Budget, BudgetCategory, Expense
from tripledger.models.enums import CurrencyType
from tripledger.schemas.budget import BudgetCreate, BudgetRecord, BudgetUpdate
from tripledger.services.errors import (
    InvalidAmountError,
    InvalidInputError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def _get_budget_row(db: Session, budget_id: uuid.UUID) -> Budget | None:
    return (
        db.query(Budget)
        .options(selectinload(Budget.categories))
        .filter(Budget.id == budget_id)
        .first()
    )


def get_budgets(db: Session, trip_id: uuid.UUID | None = None) -> list[BudgetRecord]:
    """Get budgets, optionally only those of one trip."""
    query = db.query(Budget).options(selectinload(Budget.categories))
    if trip_id:
        query = query.filter(Budget.trip_id == trip_id)
    budgets = query.order_by(Budget.created_at).all()
    return [BudgetRecord.model_validate(b) for b in budgets]


def get_budget(db: Session, budget_id: uuid.UUID) -> BudgetRecord | None:
    """Get a budget by ID."""
    budget = _get_budget_row(db, budget_id)
    return BudgetRecord.model_validate(budget) if budget else None


def create_budget(db: Session, data: BudgetCreate) -> BudgetRecord:
    """Create a budget with its initial categories, all unspent.

    Raises:
        InvalidAmountError: A category allocation is negative.
    """
    for category in data.categories:
        if category.amount < 0:
            raise InvalidAmountError(
                f"Category allocation cannot be negative, got {category.amount}"
            )

    budget = Budget(
        trip_id=data.trip_id,
        title=data.title,
        total_amount=data.total_amount,
        extra_budget=data.extra_budget,
        currency=data.currency or CurrencyType(settings.default_currency),
        categories=[
            BudgetCategory(
                position=position,
                type=category.type,
                amount=category.amount,
                spent_amount=Decimal("0"),
                note=category.note,
            )
            for position, category in enumerate(data.categories)
        ],
    )
    db.add(budget)
    db.commit()
    db.refresh(budget)

    logger.info(
        f"Created budget {budget.id} for trip {budget.trip_id} "
        f"with {len(budget.categories)} categories"
    )
    return BudgetRecord.model_validate(budget)


def update_budget(
    db: Session,
    budget_id: uuid.UUID,
    data: BudgetUpdate,
) -> BudgetRecord:
    """Update a budget's title, amounts or currency.

    Raises:
        NotFoundError: Budget does not exist.
        InvalidInputError: Currency change on a budget that already has expenses.
    """
    budget = _get_budget_row(db, budget_id)
    if not budget:
        raise NotFoundError(f"Budget {budget_id} not found")

    if data.currency is not None and data.currency != budget.currency:
        expense_count = (
            db.query(Expense).filter(Expense.budget_id == budget_id).count()
        )
        if expense_count:
            raise InvalidInputError(
                f"Cannot change currency of budget {budget_id}: "
                f"{expense_count} expenses are recorded in {budget.currency.value}"
            )
        budget.currency = data.currency

    if data.title is not None:
        budget.title = data.title
    if data.total_amount is not None:
        budget.total_amount = data.total_amount
    if data.extra_budget is not None:
        budget.extra_budget = data.extra_budget

    db.commit()
    db.refresh(budget)
    return BudgetRecord.model_validate(budget)
