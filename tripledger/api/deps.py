# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""API dependencies for dependency injection."""

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from tripledger.database import SessionLocal
from tripledger.services.ledger_service import BudgetLedger


def get_db() -> Generator[Session, None, None]:
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_ledger(db: Session = Depends(get_db)) -> BudgetLedger:
    """Get a ledger bound to the request's session."""
    return BudgetLedger(db)
