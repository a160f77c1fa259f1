"""
gladiator/database/memory.py

In-memory DataStore.

Follows the SQLAlchemy metadata so behaviour matches the SQL store: unknown
columns are rejected, Python-side column defaults and onupdate hooks are
applied, and primary-key, unique and NOT NULL constraints are enforced.
Foreign keys and CHECK constraints are not enforced, so rows may reference
profiles that do not exist. Services that must not depend on that look the
parent row up themselves. Rows keep insertion order. Used by the test-suite
and by STORE_BACKEND=memory.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import Column, MetaData, PrimaryKeyConstraint, Table, UniqueConstraint

from gladiator.core.exceptions import ConstraintViolation
from gladiator.database.base import Base
from gladiator.database.models import TABLE_MODELS  # noqa: F401  (registers every table)
from gladiator.database.store import (
    MULTI_VALUE_TYPES,
    DataStore,
    Filters,
    OrderBy,
    Row,
    parse_order_by,
)

logger = logging.getLogger(__name__)


def _column_default(column: Column[Any]) -> Any:
    default = column.default
    if default is None:
        return None
    if default.is_callable:
        return default.arg(None)  # type: ignore[attr-defined]
    if default.is_scalar:
        return copy.copy(default.arg)  # type: ignore[attr-defined]
    return None


def _matches(row: Row, filters: Filters | None) -> bool:
    for name, value in (filters or {}).items():
        if isinstance(value, MULTI_VALUE_TYPES):
            if row[name] not in value:
                return False
        elif value is None:
            if row[name] is not None:
                return False
        elif row[name] != value:
            return False
    return True


class InMemoryStore(DataStore):
    """Dict-backed implementation of the DataStore interface."""

    def __init__(self, metadata: MetaData = Base.metadata) -> None:
        self.metadata = metadata
        self._rows: dict[str, list[Row]] = {name: [] for name in metadata.tables}

    # --- Internal Helpers ---
    def _table(self, name: str) -> Table:
        try:
            return self.metadata.tables[name]
        except KeyError:
            raise ValueError(f"Unknown table '{name}'") from None

    @staticmethod
    def _check_columns(table: Table, names: Any) -> None:
        unknown = set(names) - set(table.columns.keys())
        if unknown:
            raise ValueError(f"Unknown column(s) {sorted(unknown)} on '{table.name}'")

    def _check_constraints(self, table: Table, row: Row, exclude: Row | None = None) -> None:
        for column in table.columns:
            if not column.nullable and row[column.key] is None:
                raise ConstraintViolation(table.name)

        for constraint in table.constraints:
            if not isinstance(constraint, (PrimaryKeyConstraint, UniqueConstraint)):
                continue
            keys = tuple(column.key for column in constraint.columns)
            if any(row[key] is None for key in keys):
                continue
            for other in self._rows[table.name]:
                if other is exclude:
                    continue
                if all(other[key] == row[key] for key in keys):
                    raise ConstraintViolation(table.name, keys)

    # --- Reads ---
    async def fetch_all(
        self, table: str, filters: Filters | None = None, order_by: OrderBy = None
    ) -> list[Row]:
        sa_table = self._table(table)
        self._check_columns(sa_table, (filters or {}).keys())
        rows = [row for row in self._rows[table] if _matches(row, filters)]
        # Apply keys last-to-first so the first key has the highest precedence.
        # NULLs sort as the largest value, like PostgreSQL.
        for name, descending in reversed(parse_order_by(order_by)):
            self._check_columns(sa_table, [name])
            rows.sort(
                key=lambda r, n=name: (r[n] is None, r[n] if r[n] is not None else 0),
                reverse=descending,
            )
        return copy.deepcopy(rows)

    async def fetch_one(self, table: str, filters: Filters) -> Row | None:
        self._check_columns(self._table(table), filters.keys())
        for row in self._rows[table]:
            if _matches(row, filters):
                return copy.deepcopy(row)
        return None

    async def count(self, table: str, filters: Filters | None = None) -> int:
        self._check_columns(self._table(table), (filters or {}).keys())
        return sum(1 for row in self._rows[table] if _matches(row, filters))

    # --- Writes ---
    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        sa_table = self._table(table)
        self._check_columns(sa_table, record.keys())
        row = {
            column.key: copy.deepcopy(record[column.key])
            if column.key in record
            else _column_default(column)
            for column in sa_table.columns
        }
        self._check_constraints(sa_table, row)
        self._rows[table].append(row)
        logger.debug(f"[MEMORY STORE] Inserted into '{table}'")
        return copy.deepcopy(row)

    async def update(self, table: str, filters: Filters, values: Mapping[str, Any]) -> Row | None:
        sa_table = self._table(table)
        self._check_columns(sa_table, list(filters.keys()) + list(values.keys()))
        targets = [row for row in self._rows[table] if _matches(row, filters)]
        if not targets:
            return None

        for row in targets:
            candidate = {**row, **copy.deepcopy(dict(values))}
            for column in sa_table.columns:
                if column.onupdate is not None and column.key not in values:
                    candidate[column.key] = column.onupdate.arg(None)  # type: ignore[attr-defined]
            self._check_constraints(sa_table, candidate, exclude=row)
            row.update(candidate)
        return copy.deepcopy(targets[0])

    async def delete(self, table: str, filters: Filters) -> int:
        self._check_columns(self._table(table), filters.keys())
        before = len(self._rows[table])
        self._rows[table] = [row for row in self._rows[table] if not _matches(row, filters)]
        return before - len(self._rows[table])
