# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Enumeration types for the budget ledger."""

from enum import Enum


class BudgetCategoryType(str, Enum):
    """Budget category type enumeration."""

    TRANSPORTATION = "TRANSPORTATION"
    ACCOMMODATION = "ACCOMMODATION"
    FOOD = "FOOD"
    ATTRACTIONS = "ATTRACTIONS"
    SHOPPING = "SHOPPING"
    INSURANCE = "INSURANCE"
    MISCELLANEOUS = "MISCELLANEOUS"
    EXTRA = "EXTRA"

    @property
    def label(self) -> str:
        """Human readable name of the category type."""
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: dict[BudgetCategoryType, str] = {
    BudgetCategoryType.TRANSPORTATION: "Transportation",
    BudgetCategoryType.ACCOMMODATION: "Accommodation",
    BudgetCategoryType.FOOD: "Food & Dining",
    BudgetCategoryType.ATTRACTIONS: "Attractions & Tickets",
    BudgetCategoryType.SHOPPING: "Shopping",
    BudgetCategoryType.INSURANCE: "Insurance",
    BudgetCategoryType.MISCELLANEOUS: "Miscellaneous",
    BudgetCategoryType.EXTRA: "Extra Budget",
}


class CurrencyType(str, Enum):
    """Currencies a budget or expense can be denominated in."""

    TWD = "TWD"
    USD = "USD"
    JPY = "JPY"
    EUR = "EUR"
    GBP = "GBP"
    AUD = "AUD"
    CAD = "CAD"
    CNY = "CNY"
    HKD = "HKD"
    KRW = "KRW"
    SGD = "SGD"
    THB = "THB"
    MYR = "MYR"
    VND = "VND"


class ExpenseType(str, Enum):
    """Expense type enumeration.

    Only ACTUAL expenses count towards a category's spent amount.
    """

    ACTUAL = "ACTUAL"  # Already incurred
    PLANNED = "PLANNED"  # Anticipated


class PaymentMethod(str, Enum):
    """Payment method enumeration."""

    CASH = "CASH"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    MOBILE_PAYMENT = "MOBILE_PAYMENT"
    BANK_TRANSFER = "BANK_TRANSFER"
    OTHER = "OTHER"
