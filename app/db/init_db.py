"""
Database initialization.

Creates all tables for the configured database.  Production schemas are
managed with Alembic; this is for local development and demos.
"""

import logging

from sqlmodel import SQLModel

from app.db.session import engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all SQLModel tables that do not exist yet."""

    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created: %s", ", ".join(sorted(SQLModel.metadata.tables)))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
