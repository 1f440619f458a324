# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Expense API endpoints."""

import datetime
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from tripledger.api.deps import get_db, get_ledger
from tripledger.models.enums import BudgetCategoryType, ExpenseType
from tripledger.schemas.expense import ExpenseInput, ExpenseRecord
from tripledger.services import budget_service, expense_service
from tripledger.services.errors import InvalidInputError
from tripledger.services.ledger_service import BudgetLedger

router = APIRouter()


@router.get("/budgets/{budget_id}/expenses", response_model=list[ExpenseRecord])
def list_expenses(
    budget_id: uuid.UUID,
    search: str | None = None,
    category_type: BudgetCategoryType | None = None,
    expense_type: ExpenseType | None = None,
    date_from: datetime.date | None = None,
    date_to: datetime.date | None = None,
    db: Session = Depends(get_db),
) -> list[ExpenseRecord]:
    """List a budget's expenses with optional filters."""
    return expense_service.get_expenses(
        db,
        budget_id,
        search=search,
        category_type=category_type,
        expense_type=expense_type,
        date_from=date_from,
        date_to=date_to,
    )


@router.get("/budgets/{budget_id}/expenses/export")
def export_expenses(
    budget_id: uuid.UUID,
    search: str | None = None,
    category_type: BudgetCategoryType | None = None,
    expense_type: ExpenseType | None = None,
    date_from: datetime.date | None = None,
    date_to: datetime.date | None = None,
    db: Session = Depends(get_db),
) -> Response:
    """Download a budget's expenses as CSV, with the same filters as the list."""
    budget = budget_service.get_budget(db, budget_id)
    if not budget:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Budget not found",
        )
    content = expense_service.export_expenses_csv(
        db,
        budget_id,
        search=search,
        category_type=category_type,
        expense_type=expense_type,
        date_from=date_from,
        date_to=date_to,
    )
    filename = expense_service.export_filename(budget)

    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
    )


@router.post(
    "/budgets/{budget_id}/expenses",
    response_model=ExpenseRecord,
    status_code=status.HTTP_201_CREATED,
)
def record_expense(
    budget_id: uuid.UUID,
    data: ExpenseInput,
    ledger: BudgetLedger = Depends(get_ledger),
) -> ExpenseRecord:
    """Record an expense against a budget category.

    The body's budget_id must name the budget in the path.
    """
    if data.budget_id != budget_id:
        raise InvalidInputError(
            f"Body budget_id {data.budget_id} does not match path budget {budget_id}"
        )
    return ledger.record_expense(data)


@router.get("/expenses/{expense_id}", response_model=ExpenseRecord)
def get_expense(
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> ExpenseRecord:
    """Get a specific expense."""
    expense = expense_service.get_expense(db, expense_id)
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found",
        )
    return expense


@router.put("/expenses/{expense_id}", response_model=ExpenseRecord)
def update_expense(
    expense_id: uuid.UUID,
    data: ExpenseInput,
    ledger: BudgetLedger = Depends(get_ledger),
) -> ExpenseRecord:
    """Replace an expense, possibly moving it to another budget or category."""
    return ledger.update_expense(expense_id, data)


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: uuid.UUID,
    ledger: BudgetLedger = Depends(get_ledger),
) -> None:
    """Delete an expense."""
    ledger.delete_expense(expense_id)
