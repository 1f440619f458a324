# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Main API router for v1 endpoints."""

from fastapi import APIRouter

from tripledger.api.v1 import budgets, expenses

api_router = APIRouter()

# Budget routes
api_router.include_router(budgets.router, prefix="/budgets", tags=["budgets"])

# Expense routes (listing and recording are nested under budgets)
api_router.include_router(expenses.router, tags=["expenses"])
