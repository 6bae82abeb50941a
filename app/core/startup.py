"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from sqlalchemy import inspect

from app.core.config import PLACEHOLDER_JWT_SECRET, get_config
from app.core.logging_config import configure_logging
from app.database.db import get_active_database_url, get_engine, verify_database_connection
from app.models import Base

logger = logging.getLogger(__name__)


def missing_tables() -> list[str]:
    """Tables declared on the models but absent from the connected database."""
    existing = set(inspect(get_engine()).get_table_names())
    return sorted(name for name in Base.metadata.tables if name not in existing)


def validate_startup_config() -> None:
    """Fail-fast config and connectivity checks."""
    config = get_config()
    database_ok = verify_database_connection()
    active_database_url = get_active_database_url()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )
    else:
        absent = missing_tables()
        if absent:
            logger.warning(
                "startup.database.tables_missing",
                extra={"event": "startup.database.tables_missing", "tables": absent},
            )

    if config.is_production and active_database_url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )
    if config.JWT_SECRET == PLACEHOLDER_JWT_SECRET:
        logger.warning("startup.jwt.placeholder_secret", extra={"event": "startup.jwt.placeholder_secret"})

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": active_database_url.split("://", 1)[0],
            "db_connectivity_required": config.DB_CONNECTIVITY_REQUIRED,
            "leads_page_size": config.LEADS_PAGE_SIZE,
        },
    )


def bootstrap() -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging()
    validate_startup_config()
