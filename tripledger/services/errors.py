# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Ledger error types.

Every ledger operation that raises one of these has left both stores untouched.
"""


class LedgerError(Exception):
    """Base exception for budget ledger errors."""

    code = "ledger_error"


class NotFoundError(LedgerError):
    """Referenced budget, category or expense does not exist."""

    code = "not_found"


class InvalidAmountError(LedgerError):
    """Expense amount not positive, or category allocation negative."""

    code = "invalid_amount"


class InvalidInputError(LedgerError):
    """Unrecognised enumeration value or missing/malformed field."""

    code = "invalid_input"
