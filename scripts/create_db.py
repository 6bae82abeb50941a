"""Create the LeadInk database (PostgreSQL only) and its tables."""

import logging
import sys
from pathlib import Path
from urllib.parse import urlparse

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config import get_config
from app.core.logging_config import configure_logging
from app.database.db import get_engine
from app.models import Base

logger = logging.getLogger("scripts.create_db")


def ensure_postgres_database(db_url: str) -> None:
    import psycopg2
    from psycopg2 import sql

    result = urlparse(db_url.replace("+psycopg2", ""))
    database = result.path[1:]

    # Connect to default 'postgres' database to create the new db
    conn = psycopg2.connect(
        database="postgres",
        user=result.username,
        password=result.password,
        host=result.hostname,
        port=result.port,
    )
    conn.autocommit = True
    try:
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1 FROM pg_catalog.pg_database WHERE datname = %s", (database,))
            if cursor.fetchone():
                logger.info("create_db.exists", extra={"event": "create_db.exists", "database": database})
                return
            cursor.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(database)))
            logger.info("create_db.created", extra={"event": "create_db.created", "database": database})
    finally:
        conn.close()


def create_database() -> None:
    configure_logging()
    db_url = get_config().DATABASE_URL
    if db_url.startswith("postgresql"):
        ensure_postgres_database(db_url)
    Base.metadata.create_all(bind=get_engine())
    logger.info(
        "create_db.schema_ready",
        extra={"event": "create_db.schema_ready", "tables": sorted(Base.metadata.tables)},
    )


if __name__ == "__main__":
    create_database()
