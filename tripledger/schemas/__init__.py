# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Pydantic schemas package."""

from tripledger.schemas.analytics import (
    BudgetSummary,
    CategoryBreakdownItem,
    DailyExpense,
    SpentAmountDiscrepancy,
)
from tripledger.schemas.budget import (
    BudgetCreate,
    BudgetRecord,
    BudgetUpdate,
    CategoryInput,
    CategoryReallocate,
    CategoryRecord,
)
from tripledger.schemas.common import ErrorResponse, HealthResponse, Money
from tripledger.schemas.expense import ExpenseInput, ExpenseRecord

__all__ = [
    # Analytics
    "BudgetSummary",
    "CategoryBreakdownItem",
    "DailyExpense",
    "SpentAmountDiscrepancy",
    # Budget
    "BudgetCreate",
    "BudgetRecord",
    "BudgetUpdate",
    "CategoryInput",
    "CategoryReallocate",
    "CategoryRecord",
    # Common
    "ErrorResponse",
    "HealthResponse",
    "Money",
    # Expense
    "ExpenseInput",
    "ExpenseRecord",
]
