# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Budget API endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tripledger.api.deps import get_db, get_ledger
from tripledger.schemas.analytics import BudgetSummary, SpentAmountDiscrepancy
from tripledger.schemas.budget import (
    BudgetCreate,
    BudgetRecord,
    BudgetUpdate,
    CategoryInput,
    CategoryReallocate,
)
from tripledger.services import analytics_service, budget_service
from tripledger.services.ledger_service import BudgetLedger

router = APIRouter()


@router.get("", response_model=list[BudgetRecord])
def list_budgets(
    trip_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
) -> list[BudgetRecord]:
    """List budgets, optionally for a single trip."""
    return budget_service.get_budgets(db, trip_id)


@router.post("", response_model=BudgetRecord, status_code=status.HTTP_201_CREATED)
def create_budget(
    data: BudgetCreate,
    db: Session = Depends(get_db),
) -> BudgetRecord:
    """Create a budget with its initial categories."""
    return budget_service.create_budget(db, data)


@router.get("/audit", response_model=list[SpentAmountDiscrepancy])
def audit_budgets(db: Session = Depends(get_db)) -> list[SpentAmountDiscrepancy]:
    """List categories whose stored spent amount disagrees with their expenses.

    An empty list means every category is consistent.
    """
    return analytics_service.run_audit(db)


@router.get("/{budget_id}", response_model=BudgetRecord)
def get_budget(
    budget_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> BudgetRecord:
    """Get a specific budget."""
    budget = budget_service.get_budget(db, budget_id)
    if not budget:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Budget not found",
        )
    return budget


@router.patch("/{budget_id}", response_model=BudgetRecord)
def update_budget(
    budget_id: uuid.UUID,
    data: BudgetUpdate,
    db: Session = Depends(get_db),
) -> BudgetRecord:
    """Update a budget's title, amounts or currency."""
    return budget_service.update_budget(db, budget_id, data)


@router.get("/{budget_id}/summary", response_model=BudgetSummary)
def get_budget_summary(
    budget_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> BudgetSummary:
    """Get usage, trend and category breakdown for a budget."""
    return analytics_service.build_budget_summary(db, budget_id)


@router.post(
    "/{budget_id}/categories",
    response_model=BudgetRecord,
    status_code=status.HTTP_201_CREATED,
)
def add_category(
    budget_id: uuid.UUID,
    data: CategoryInput,
    ledger: BudgetLedger = Depends(get_ledger),
) -> BudgetRecord:
    """Add a category to a budget."""
    return ledger.add_category(budget_id, data)


@router.put("/{budget_id}/categories/{category_id}", response_model=BudgetRecord)
def reallocate_category(
    budget_id: uuid.UUID,
    category_id: uuid.UUID,
    data: CategoryReallocate,
    ledger: BudgetLedger = Depends(get_ledger),
) -> BudgetRecord:
    """Change a category's allocated amount."""
    return ledger.reallocate_category(budget_id, category_id, data.amount)


@router.delete("/{budget_id}/categories/{category_id}", response_model=BudgetRecord)
def delete_category(
    budget_id: uuid.UUID,
    category_id: uuid.UUID,
    ledger: BudgetLedger = Depends(get_ledger),
) -> BudgetRecord:
    """Remove a category. Its expenses are kept as orphans."""
    return ledger.delete_category(budget_id, category_id)
