# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tripledger import __version__
from tripledger.config import settings
from tripledger.database import SessionLocal
from tripledger.schemas.common import HealthResponse
from tripledger.services import analytics_service
from tripledger.services.errors import (
    InvalidAmountError,
    InvalidInputError,
    LedgerError,
    NotFoundError,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Ledger error -> HTTP status; each kind stays distinguishable for the caller
ERROR_STATUS: dict[type[LedgerError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidAmountError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidInputError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report spent amounts that drifted from their expenses on startup."""
    db = SessionLocal()
    try:
        discrepancies = analytics_service.run_audit(db)
        if discrepancies:
            logger.warning(
                f"{len(discrepancies)} categories have inconsistent spent amounts"
            )
        else:
            logger.info("All category spent amounts are consistent")
    except SQLAlchemyError as e:
        logger.error(f"Error auditing spent amounts: {e}")
    finally:
        db.close()

    yield


app = FastAPI(
    title=settings.app_name,
    description="Per-trip budgets, expenses and spending analytics",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

# CORS middleware for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Report a rejected ledger operation; nothing was changed."""
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": exc.code},
    )


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


# Import and include API router after it's created
from tripledger.api.v1.router import api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")
