# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Common schema types."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer

# Decimal in Python, float in JSON responses
Money = Annotated[
    Decimal,
    PlainSerializer(lambda x: float(x), return_type=float, when_used="json"),
]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


class ErrorResponse(BaseModel):
    """Body returned for ledger errors."""

    detail: str
    error: str
