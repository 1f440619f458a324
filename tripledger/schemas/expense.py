# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Expense schemas."""

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from tripledger.models.enums import CurrencyType, ExpenseType, PaymentMethod
from tripledger.schemas.common import Money


class ExpenseInput(BaseModel):
    """Schema for recording or updating an expense.

    Used for both create and update: an update replaces every field.
    Amount positivity is enforced by the ledger so that it can be reported
    separately from malformed input.
    """

    budget_id: uuid.UUID
    category_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=200)
    amount: Decimal
    # Defaults to the owning budget's currency
    currency: CurrencyType | None = None
    expense_date: datetime.date
    type: ExpenseType = ExpenseType.ACTUAL
    payment_method: PaymentMethod = PaymentMethod.CASH
    location: str = Field(default="", max_length=255)
    notes: str = ""
    receipt: list[str] = []

    @field_validator("amount")
    @classmethod
    def round_amount(cls, v: Decimal) -> Decimal:
        """Round to 2 decimal places."""
        return round(v, 2)


class ExpenseRecord(BaseModel):
    """In-memory copy of an expense; also the API response."""

    id: uuid.UUID
    budget_id: uuid.UUID
    category_id: uuid.UUID
    title: str
    amount: Money
    currency: CurrencyType
    expense_date: datetime.date
    type: ExpenseType
    payment_method: PaymentMethod
    location: str = ""
    notes: str = ""
    receipt: list[str] = []
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = {"from_attributes": True}

    @property
    def is_actual(self) -> bool:
        return self.type == ExpenseType.ACTUAL
