"""
database/session.py

Initializes the SQLAlchemy asynchronous engine and session factory.
Provides the DataStore dependency used by every route.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from gladiator.core.config import settings
from gladiator.database.base import Base
from gladiator.database.memory import InMemoryStore
from gladiator.database.store import DataStore, SQLAlchemyStore

# -----------------------------------------------------
# SQLAlchemy Async Engine Initialization
# -----------------------------------------------------
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,  # Set to True for SQL debugging output
    pool_pre_ping=True,
)

# -----------------------------------------------------
# Session Factory for Async Database Access
# -----------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,  # Prevents auto-expiration of ORM objects after commit
)

_memory_store: InMemoryStore | None = None


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create every table known to the model registry."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def get_memory_store() -> InMemoryStore:
    """Process-wide in-memory store used when STORE_BACKEND=memory."""
    global _memory_store
    if _memory_store is None:
        _memory_store = InMemoryStore()
    return _memory_store


# -----------------------------------------------------
# Dependency: Get Data Store
# -----------------------------------------------------
async def get_store() -> AsyncGenerator[DataStore, None]:
    """
    Dependency providing a DataStore for one request.
    The SQL backend uses one session per request, rolled back on exceptions.
    """
    if settings.STORE_BACKEND == "memory":
        yield get_memory_store()
        return

    async with AsyncSessionLocal() as db:
        try:
            yield SQLAlchemyStore(db)
        except Exception:
            await db.rollback()
            raise
