# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Budget and budget category models."""

import uuid as uuid_lib
from decimal import Decimal

from sqlalchemy import Enum, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripledger.models.base import Base, TimestampMixin
from tripledger.models.enums import BudgetCategoryType, CurrencyType


class Budget(Base, TimestampMixin):
    """Per-trip budget: a total ceiling plus ordered category allocations."""

    __tablename__ = "budgets"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    # Opaque reference to a trip owned by the surrounding application
    trip_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    extra_budget: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    currency: Mapped[CurrencyType] = mapped_column(
        Enum(CurrencyType),
        nullable=False,
    )

    # Relationships
    categories: Mapped[list["BudgetCategory"]] = relationship(
        "BudgetCategory",
        back_populates="budget",
        cascade="all, delete-orphan",
        order_by="BudgetCategory.position",
    )


class BudgetCategory(Base):
    """Category allocation embedded in a budget.

    spent_amount is derived from ACTUAL expenses and only written by the ledger.
    """

    __tablename__ = "budget_categories"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    budget_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("budgets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    type: Mapped[BudgetCategoryType] = mapped_column(
        Enum(BudgetCategoryType),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    spent_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    note: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # Relationships
    budget: Mapped["Budget"] = relationship("Budget", back_populates="categories")
