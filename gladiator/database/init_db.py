"""
init_db.py

Initializes the database by creating all tables defined in the SQLAlchemy models.
Used for setting up the initial schema in the connected database.
"""

import asyncio
import logging

from gladiator.core.logging import init_logging
from gladiator.database.session import create_tables, engine

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """
    Creates all database tables based on SQLAlchemy models.
    """
    await create_tables(engine)
    await engine.dispose()
    logger.info("[DB] Schema created")


if __name__ == "__main__":
    init_logging()
    asyncio.run(init_db())
