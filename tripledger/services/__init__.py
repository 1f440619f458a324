# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Services package."""

from tripledger.services import (
    analytics_service,
    budget_service,
    expense_service,
    ledger_service,
)
from tripledger.services.errors import (
    InvalidAmountError,
    InvalidInputError,
    LedgerError,
    NotFoundError,
)
from tripledger.services.ledger_service import BudgetLedger
from tripledger.services.stores import BudgetStore, ExpenseStore

__all__ = [
    "BudgetLedger",
    "BudgetStore",
    "ExpenseStore",
    "InvalidAmountError",
    "InvalidInputError",
    "LedgerError",
    "NotFoundError",
    "analytics_service",
    "budget_service",
    "expense_service",
    "ledger_service",
]
