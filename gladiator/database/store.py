"""
gladiator/database/store.py

Data Access Layer

Defines the DataStore interface every service depends on, plus the SQLAlchemy
implementation used in production.

Conventions shared by all implementations:
- A row is a plain dict copy; mutating it never changes stored state.
- `filters` maps column -> value. A list/tuple/set value means "column IN values",
  None means "column IS NULL".
- `order_by` is a column name (or several); a leading "-" sorts descending.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import ColumnElement, delete, func, inspect as sa_inspect, select
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from gladiator.core.exceptions import ConstraintViolation, TransportError, ValidationError
from gladiator.core.retry import retry_idempotent_read
from gladiator.database.base import Base
from gladiator.database.models import TABLE_MODELS

logger = logging.getLogger(__name__)

Row = dict[str, Any]
Filters = Mapping[str, Any]
OrderBy = str | Sequence[str] | None

MULTI_VALUE_TYPES = (list, tuple, set, frozenset)


def parse_order_by(order_by: OrderBy) -> list[tuple[str, bool]]:
    """Return [(column, descending), ...] for an order_by argument."""
    if not order_by:
        return []
    keys = [order_by] if isinstance(order_by, str) else list(order_by)
    return [(key[1:], True) if key.startswith("-") else (key, False) for key in keys]


# ---------------------------------------------------
# Data Store Interface
# ---------------------------------------------------
class DataStore(ABC):
    """Generic data-access capability over the marketplace tables."""

    @abstractmethod
    async def fetch_all(
        self, table: str, filters: Filters | None = None, order_by: OrderBy = None
    ) -> list[Row]: ...

    @abstractmethod
    async def fetch_one(self, table: str, filters: Filters) -> Row | None:
        """Return the first matching row, or None when nothing matches."""

    @abstractmethod
    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        """Insert a row. Raises ConstraintViolation on a key clash."""

    @abstractmethod
    async def update(self, table: str, filters: Filters, values: Mapping[str, Any]) -> Row | None:
        """Update matching rows and return the first one, or None when nothing matched."""

    @abstractmethod
    async def delete(self, table: str, filters: Filters) -> int:
        """Delete matching rows and return how many were removed."""

    @abstractmethod
    async def count(self, table: str, filters: Filters | None = None) -> int: ...


# ---------------------------------------------------
# SQLAlchemy Implementation
# ---------------------------------------------------
class SQLAlchemyStore(DataStore):
    """DataStore over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # --- Internal Helpers ---
    @staticmethod
    def _model(table: str) -> type[Base]:
        try:
            return TABLE_MODELS[table]
        except KeyError:
            raise ValueError(f"Unknown table '{table}'") from None

    @staticmethod
    def _column(model: type[Base], name: str) -> Any:
        if name not in model.__table__.columns:
            raise ValueError(f"Unknown column '{name}' on '{model.__tablename__}'")
        return getattr(model, name)

    def _where(self, model: type[Base], filters: Filters | None) -> list[ColumnElement[bool]]:
        conditions = []
        for name, value in (filters or {}).items():
            column = self._column(model, name)
            if isinstance(value, MULTI_VALUE_TYPES):
                conditions.append(column.in_(list(value)))
            elif value is None:
                conditions.append(column.is_(None))
            else:
                conditions.append(column == value)
        return conditions

    def _ordering(self, model: type[Base], order_by: OrderBy) -> list[Any]:
        clauses = []
        for name, descending in parse_order_by(order_by):
            column = self._column(model, name)
            clauses.append(column.desc() if descending else column.asc())
        return clauses

    @staticmethod
    def _to_row(obj: Base) -> Row:
        return {attr.key: getattr(obj, attr.key) for attr in sa_inspect(obj).mapper.column_attrs}

    @asynccontextmanager
    async def _guard(self, table: str) -> AsyncIterator[None]:
        """
        Translate driver errors into the domain taxonomy.

        Only connection-level failures become TransportError, the retryable
        kind. Other driver errors are rolled back and re-raised unchanged.
        """
        try:
            yield
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"[STORE] Constraint violation on '{table}': {e.orig}")
            raise ConstraintViolation(table) from e
        except DataError as e:
            await self.session.rollback()
            logger.warning(f"[STORE] Rejected value on '{table}': {e.orig}")
            raise ValidationError(f"A value is out of range for '{table}'") from e
        except (OperationalError, InterfaceError, OSError) as e:
            await self.session.rollback()
            logger.error(f"[STORE] Transport failure on '{table}': {e}")
            raise TransportError() from e
        except DBAPIError as e:
            await self.session.rollback()
            logger.error(f"[STORE] Driver error on '{table}': {e}")
            raise

    # --- Reads ---
    @retry_idempotent_read()
    async def fetch_all(
        self, table: str, filters: Filters | None = None, order_by: OrderBy = None
    ) -> list[Row]:
        model = self._model(table)
        stmt = select(model).where(*self._where(model, filters)).order_by(
            *self._ordering(model, order_by)
        )
        async with self._guard(table):
            result = await self.session.execute(stmt)
            return [self._to_row(obj) for obj in result.scalars().all()]

    @retry_idempotent_read()
    async def fetch_one(self, table: str, filters: Filters) -> Row | None:
        model = self._model(table)
        stmt = select(model).where(*self._where(model, filters)).limit(1)
        async with self._guard(table):
            result = await self.session.execute(stmt)
            obj = result.scalars().first()
        return self._to_row(obj) if obj is not None else None

    @retry_idempotent_read()
    async def count(self, table: str, filters: Filters | None = None) -> int:
        model = self._model(table)
        stmt = select(func.count()).select_from(model).where(*self._where(model, filters))
        async with self._guard(table):
            result = await self.session.execute(stmt)
            return int(result.scalar_one())

    # --- Writes (never retried) ---
    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        model = self._model(table)
        for name in record:
            self._column(model, name)
        obj = model(**record)
        async with self._guard(table):
            self.session.add(obj)
            await self.session.commit()
            await self.session.refresh(obj)
        logger.debug(f"[STORE] Inserted into '{table}'")
        return self._to_row(obj)

    async def update(self, table: str, filters: Filters, values: Mapping[str, Any]) -> Row | None:
        model = self._model(table)
        for name in values:
            self._column(model, name)
        stmt = select(model).where(*self._where(model, filters))
        async with self._guard(table):
            result = await self.session.execute(stmt)
            objs = list(result.scalars().all())
            if not objs:
                return None
            for obj in objs:
                for name, value in values.items():
                    setattr(obj, name, value)
            await self.session.commit()
            await self.session.refresh(objs[0])
        logger.debug(f"[STORE] Updated {len(objs)} row(s) in '{table}'")
        return self._to_row(objs[0])

    async def delete(self, table: str, filters: Filters) -> int:
        model = self._model(table)
        stmt = delete(model).where(*self._where(model, filters))
        async with self._guard(table):
            result = await self.session.execute(stmt)
            await self.session.commit()
        deleted = int(result.rowcount or 0)
        logger.debug(f"[STORE] Deleted {deleted} row(s) from '{table}'")
        return deleted
