# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from tripledger.models.base import Base, TimestampMixin
from tripledger.models.budget import Budget, BudgetCategory
from tripledger.models.enums import (
    BudgetCategoryType,
    CurrencyType,
    ExpenseType,
    PaymentMethod,
)
from tripledger.models.expense import Expense

__all__ = [
    "Base",
    "Budget",
    "BudgetCategory",
    "BudgetCategoryType",
    "CurrencyType",
    "Expense",
    "ExpenseType",
    "PaymentMethod",
    "TimestampMixin",
]
