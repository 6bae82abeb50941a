"""Configuration module for the LeadInk application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from app.core.exceptions import ConfigurationError

load_dotenv()

PLACEHOLDER_JWT_SECRET = "change_me_jwt_secret"


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    JWT_SECRET: str
    JWT_ACCESS_TTL_MINUTES: int
    API_HOST: str
    API_PORT: int
    API_PREFIX: str
    LOG_LEVEL: str
    LOG_FILE: str
    LEADS_PAGE_SIZE: int
    CASH_FLOW_RATIO: float

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=False)

    try:
        config = Config(
            APP_NAME="LeadInk",
            APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
            ENV=resolved_env,
            DEBUG=debug if resolved_env != "production" else False,
            DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./leadink.db"),
            DB_CONNECTIVITY_REQUIRED=_as_bool(
                os.getenv("DB_CONNECTIVITY_REQUIRED"), default=(resolved_env == "production")
            ),
            JWT_SECRET=os.getenv("JWT_SECRET", PLACEHOLDER_JWT_SECRET),
            JWT_ACCESS_TTL_MINUTES=int(os.getenv("JWT_ACCESS_TTL_MINUTES", "60")),
            API_HOST=os.getenv("API_HOST", "0.0.0.0"),
            API_PORT=int(os.getenv("API_PORT", "8000")),
            API_PREFIX=os.getenv("API_PREFIX", "/api/v1"),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
            LOG_FILE=os.getenv("LOG_FILE", ""),
            LEADS_PAGE_SIZE=int(os.getenv("LEADS_PAGE_SIZE", "25")),
            CASH_FLOW_RATIO=float(os.getenv("CASH_FLOW_RATIO", "0.35")),
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if config.JWT_ACCESS_TTL_MINUTES < 1:
        raise ConfigurationError("JWT_ACCESS_TTL_MINUTES must be >= 1.")
    if config.LEADS_PAGE_SIZE < 1:
        raise ConfigurationError("LEADS_PAGE_SIZE must be >= 1.")
    if not 0 <= config.CASH_FLOW_RATIO <= 1:
        raise ConfigurationError("CASH_FLOW_RATIO must be between 0 and 1.")
    if not config.API_PREFIX.startswith("/"):
        raise ConfigurationError("API_PREFIX must start with '/'.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and config.JWT_SECRET == PLACEHOLDER_JWT_SECRET:
        raise ConfigurationError("Production JWT_SECRET uses the placeholder value.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
