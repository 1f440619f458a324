# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Read-only expense queries and CSV export. Mutations go through the ledger."""

import csv
import io
import logging
import uuid
from datetime import date, datetime
from typing import Any

from slugify import slugify
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from tripledger.models import Expense
from tripledger.models.enums import BudgetCategoryType, ExpenseType
from tripledger.schemas.budget import BudgetRecord
from tripledger.schemas.expense import ExpenseRecord
from tripledger.services import budget_service
from tripledger.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def get_expense(db: Session, expense_id: uuid.UUID) -> ExpenseRecord | None:
    """Get an expense by ID."""
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    return ExpenseRecord.model_validate(expense) if expense else None


def get_expenses(
    db: Session,
    budget_id: uuid.UUID,
    search: str | None = None,
    category_type: BudgetCategoryType | None = None,
    expense_type: ExpenseType | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[ExpenseRecord]:
    """Get a budget's expenses with optional filters.

    Args:
        db: Database session
        budget_id: Budget whose expenses are listed
        search: Case-insensitive text matched against title, location and notes
        category_type: Only expenses whose category has this type; expenses
            whose category was deleted count as MISCELLANEOUS
        expense_type: ACTUAL or PLANNED
        date_from: Earliest expense date, inclusive
        date_to: Latest expense date, inclusive

    Raises:
        NotFoundError: Budget does not exist.
    """
    budget = budget_service.get_budget(db, budget_id)
    if not budget:
        raise NotFoundError(f"Budget {budget_id} not found")

    query = db.query(Expense).filter(Expense.budget_id == budget_id)
    if search:
        pattern = f"%{search.lower()}%"
        query = query.filter(
            or_(
                func.lower(Expense.title).like(pattern),
                func.lower(Expense.location).like(pattern),
                func.lower(Expense.notes).like(pattern),
            )
        )
    if expense_type:
        query = query.filter(Expense.type == expense_type)
    if date_from:
        query = query.filter(Expense.expense_date >= date_from)
    if date_to:
        query = query.filter(Expense.expense_date <= date_to)

    expenses = [
        ExpenseRecord.model_validate(e)
        for e in query.order_by(Expense.expense_date, Expense.created_at).all()
    ]

    if category_type:
        types = {c.id: c.type for c in budget.categories}
        expenses = [
            e
            for e in expenses
            if types.get(e.category_id, BudgetCategoryType.MISCELLANEOUS)
            == category_type
        ]

    return expenses


EXPORT_COLUMNS = (
    "Date",
    "Title",
    "Category",
    "Amount",
    "Currency",
    "Type",
    "Payment Method",
    "Location",
    "Notes",
)


def _slugify_filename(name: str, max_length: int = 50) -> str:
    """Create a slug suitable for filenames."""
    slug = slugify(name, lowercase=True, separator="_")
    return slug[:max_length]


def export_filename(budget: BudgetRecord) -> str:
    """Get the download filename for a budget's expense export."""
    date_str = datetime.now().strftime("%Y%m%d")
    return f"expenses_{_slugify_filename(budget.title) or 'export'}_{date_str}.csv"


def export_expenses_csv(
    db: Session,
    budget_id: uuid.UUID,
    **filters: Any,
) -> str:
    """Render a budget's expenses as CSV.

    Accepts the same filters as get_expenses and keeps its ordering. Expenses
    whose category was deleted are labelled as miscellaneous.

    Raises:
        NotFoundError: Budget does not exist.
    """
    budget = budget_service.get_budget(db, budget_id)
    if not budget:
        raise NotFoundError(f"Budget {budget_id} not found")
    expenses = get_expenses(db, budget_id, **filters)

    labels = {c.id: c.label for c in budget.categories}
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_COLUMNS)
    for expense in expenses:
        writer.writerow(
            [
                expense.expense_date.isoformat(),
                expense.title,
                labels.get(
                    expense.category_id, BudgetCategoryType.MISCELLANEOUS.label
                ),
                f"{expense.amount:.2f}",
                expense.currency.value,
                expense.type.value,
                expense.payment_method.value,
                expense.location,
                expense.notes,
            ]
        )

    logger.info(f"Exported {len(expenses)} expenses of budget {budget_id}")
    return output.getvalue()
