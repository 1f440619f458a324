# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application configuration loaded from environment variables."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Trip Budget Ledger"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./tripledger.db"
    db_echo: bool = False

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] | str = ["http://localhost:5173"]

    # Currency used when a budget is created without one
    default_currency: str = "TWD"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: list[str] | str) -> list[str]:
        """Parse CORS_ORIGINS from a comma-separated string or a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


settings = Settings()
