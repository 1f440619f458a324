# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Expense model."""

import uuid as uuid_lib
from datetime import date
from decimal import Decimal

from sqlalchemy import JSON, Date, Enum, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from tripledger.models.base import Base, TimestampMixin
from tripledger.models.enums import CurrencyType, ExpenseType, PaymentMethod


class Expense(Base, TimestampMixin):
    """Expense posted against one budget/category pair.

    budget_id and category_id are plain references without foreign keys:
    deleting a category leaves its expenses in place as orphans.
    """

    __tablename__ = "expenses"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    budget_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
    )
    category_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[CurrencyType] = mapped_column(
        Enum(CurrencyType),
        nullable=False,
    )
    expense_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    type: Mapped[ExpenseType] = mapped_column(
        Enum(ExpenseType),
        default=ExpenseType.ACTUAL,
        nullable=False,
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(PaymentMethod),
        default=PaymentMethod.CASH,
        nullable=False,
    )
    location: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)
    # Opaque attachment references, stored verbatim
    receipt: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
