# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Analytics schemas for budget summaries."""

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel

from tripledger.models.enums import BudgetCategoryType, CurrencyType
from tripledger.schemas.common import Money


class DailyExpense(BaseModel):
    """ACTUAL spending on one calendar day."""

    date: datetime.date
    amount: Money
    count: int


class CategoryBreakdownItem(BaseModel):
    """Spending against one category's allocation."""

    category_id: uuid.UUID
    category_type: BudgetCategoryType
    category_label: str
    spent_amount: Money
    allocated_amount: Money
    usage_percentage: int


class SpentAmountDiscrepancy(BaseModel):
    """A category whose stored spent amount differs from its expenses."""

    budget_id: uuid.UUID
    category_id: uuid.UUID
    stored_spent_amount: Money
    derived_spent_amount: Money

    @property
    def difference(self) -> Decimal:
        return self.stored_spent_amount - self.derived_spent_amount


class BudgetSummary(BaseModel):
    """Complete analytics view of one budget."""

    budget_id: uuid.UUID
    title: str
    currency: CurrencyType
    total_budget: Money
    used_budget: Money
    remaining_budget: Money
    planned_total: Money
    total_usage_percentage: int
    daily_average: Money
    daily_trend: list[DailyExpense]
    categories: list[CategoryBreakdownItem]
    expense_count: int
    orphaned_expense_count: int
