# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Budget schemas."""

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from tripledger.models.enums import BudgetCategoryType, CurrencyType
from tripledger.schemas.common import Money


class CategoryRecord(BaseModel):
    """In-memory copy of a budget category."""

    id: uuid.UUID
    type: BudgetCategoryType
    amount: Money
    spent_amount: Money = Decimal("0")
    note: str = ""

    model_config = {"from_attributes": True}

    @property
    def label(self) -> str:
        return self.type.label


class BudgetRecord(BaseModel):
    """In-memory copy of a budget with its categories.

    Used both as the unit the stores load and save and as the API response.
    """

    id: uuid.UUID
    trip_id: uuid.UUID
    title: str
    total_amount: Money
    extra_budget: Money = Decimal("0")
    currency: CurrencyType
    categories: list[CategoryRecord] = []
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = {"from_attributes": True}

    def find_category(self, category_id: uuid.UUID) -> CategoryRecord | None:
        """Return the category with the given id, or None if it is gone."""
        for category in self.categories:
            if category.id == category_id:
                return category
        return None


class CategoryInput(BaseModel):
    """Schema for adding a category to a budget.

    Negative amounts are accepted here and rejected by the ledger.
    """

    type: BudgetCategoryType
    amount: Decimal = Decimal("0")
    note: str = ""

    @field_validator("amount")
    @classmethod
    def round_amount(cls, v: Decimal) -> Decimal:
        """Round to 2 decimal places."""
        return round(v, 2)


class CategoryReallocate(BaseModel):
    """Schema for changing a category's allocated amount."""

    amount: Decimal

    @field_validator("amount")
    @classmethod
    def round_amount(cls, v: Decimal) -> Decimal:
        """Round to 2 decimal places."""
        return round(v, 2)


class BudgetCreate(BaseModel):
    """Schema for creating a budget."""

    trip_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=200)
    total_amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    extra_budget: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    currency: CurrencyType | None = None
    categories: list[CategoryInput] = Field(..., min_length=1)


class BudgetUpdate(BaseModel):
    """Schema for updating a budget header.

    Categories are edited through the ledger, never here.
    """

    title: str | None = Field(None, min_length=1, max_length=200)
    total_amount: Decimal | None = Field(None, ge=0, decimal_places=2)
    extra_budget: Decimal | None = Field(None, ge=0, decimal_places=2)
    currency: CurrencyType | None = None
