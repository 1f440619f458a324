# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""create_budget_ledger_tables

Revision ID: 3f1c2a7b9d40
Revises:
Create Date: 2025-06-02 09:14:27.512034

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a7b9d40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

CURRENCIES = (
    "TWD", "USD", "JPY", "EUR", "GBP", "AUD", "CAD",
    "CNY", "HKD", "KRW", "SGD", "THB", "MYR", "VND",
)  # fmt: skip
CATEGORY_TYPES = (
    "TRANSPORTATION", "ACCOMMODATION", "FOOD", "ATTRACTIONS",
    "SHOPPING", "INSURANCE", "MISCELLANEOUS", "EXTRA",
)  # fmt: skip
PAYMENT_METHODS = (
    "CASH", "CREDIT_CARD", "DEBIT_CARD", "MOBILE_PAYMENT", "BANK_TRANSFER", "OTHER",
)  # fmt: skip

currency_enum = sa.Enum(*CURRENCIES, name="currencytype")


def upgrade() -> None:
    op.create_table(
        "budgets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("total_amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("extra_budget", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("currency", currency_enum, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_budgets_trip_id"), "budgets", ["trip_id"], unique=False)

    op.create_table(
        "budget_categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("budget_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column(
            "type",
            sa.Enum(*CATEGORY_TYPES, name="budgetcategorytype"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("spent_amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("note", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["budget_id"], ["budgets.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_budget_categories_budget_id"),
        "budget_categories",
        ["budget_id"],
        unique=False,
    )

    op.create_table(
        "expenses",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("budget_id", sa.Uuid(), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("currency", currency_enum, nullable=False),
        sa.Column("expense_date", sa.Date(), nullable=False),
        sa.Column(
            "type", sa.Enum("ACTUAL", "PLANNED", name="expensetype"), nullable=False
        ),
        sa.Column(
            "payment_method",
            sa.Enum(*PAYMENT_METHODS, name="paymentmethod"),
            nullable=False,
        ),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("receipt", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_expenses_budget_id"), "expenses", ["budget_id"], unique=False
    )
    op.create_index(
        op.f("ix_expenses_category_id"), "expenses", ["category_id"], unique=False
    )
    op.create_index(
        op.f("ix_expenses_expense_date"), "expenses", ["expense_date"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_expenses_expense_date"), table_name="expenses")
    op.drop_index(op.f("ix_expenses_category_id"), table_name="expenses")
    op.drop_index(op.f("ix_expenses_budget_id"), table_name="expenses")
    op.drop_table("expenses")
    op.drop_index(
        op.f("ix_budget_categories_budget_id"), table_name="budget_categories"
    )
    op.drop_table("budget_categories")
    op.drop_index(op.f("ix_budgets_trip_id"), table_name="budgets")
    op.drop_table("budgets")
    sa.Enum(name="paymentmethod").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="expensetype").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="budgetcategorytype").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="currencytype").drop(op.get_bind(), checkfirst=True)
