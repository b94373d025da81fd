"""
Database initialization script.

Usage:
    python -m tripmaster.db.init_db
"""
import logging

from tripmaster.core.config import settings
from tripmaster.core.logging_config import setup_logging
from tripmaster.db.session import Database

logger = logging.getLogger(__name__)


def init_db(database: Database = None) -> None:
    """Create all tables that do not exist yet."""
    database = database or Database.from_settings(settings)
    try:
        if not database.probe(settings.DB_CONNECT_ATTEMPTS, settings.DB_CONNECT_RETRY_DELAY):
            raise SystemExit("Database is not reachable")
        database.create_all()
        logger.info("Database initialized successfully")
    finally:
        database.dispose()


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    logger.info("Initializing database...")
    init_db()
