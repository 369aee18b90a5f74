"""
Typed repository over a single SQLite table.

A ``Repository`` wraps one ``sqlite3.Connection`` that may be shared
with other repositories and services.  Repositories never commit on
their own: the caller groups several writes into one unit of work and
calls ``save()`` (or rolls the connection back) when it is done.  This
lets a multi-step operation such as tearing down a project run inside a
single transaction.

Write methods report failures as ``False`` and log the database error
instead of raising, so a service can decide how a failed step affects
the rest of its operation.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Generic, List, Optional, Tuple, Type, TypeVar

from taskboard_api.app.models import Record

T = TypeVar("T", bound=Record)

logger = logging.getLogger(__name__)


class Repository(Generic[T]):
    """Storage for one record type.

    Subclasses set ``table``, ``model`` and ``columns`` (every stored
    column except ``id``).
    """

    table: str = ""
    model: Type[T]
    columns: Tuple[str, ...] = ()

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self._cache: Optional[List[T]] = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def _select(self) -> str:
        return f"SELECT id, {', '.join(self.columns)} FROM {self.table}"

    def _to_record(self, row: sqlite3.Row) -> T:
        return self.model(**dict(row))

    def get_all(self) -> List[T]:
        """Return every record of the table.

        The result is cached until the next write through this
        repository or an explicit ``refresh()``.
        """
        if self._cache is None:
            rows = self.conn.execute(f"{self._select()} ORDER BY id").fetchall()
            self._cache = [self._to_record(row) for row in rows]
        return list(self._cache)

    def filter(self, **criteria: Any) -> List[T]:
        """Return records whose columns equal the given values.

        ``None`` matches SQL ``NULL``.  Unknown column names raise
        ``ValueError``.
        """
        clauses: List[str] = []
        params: List[Any] = []
        for column, value in criteria.items():
            if column != "id" and column not in self.columns:
                raise ValueError(f"Unknown column {column!r} for table {self.table}")
            if value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column} = ?")
                params.append(value)
        query = self._select()
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        rows = self.conn.execute(query + " ORDER BY id", tuple(params)).fetchall()
        return [self._to_record(row) for row in rows]

    def first(self, **criteria: Any) -> Optional[T]:
        records = self.filter(**criteria)
        return records[0] if records else None

    def get(self, record_id: int) -> Optional[T]:
        return self.first(id=record_id)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def add(self, record: T) -> bool:
        """Insert ``record`` and assign its ``id``."""
        placeholders = ", ".join("?" for _ in self.columns)
        values = tuple(getattr(record, column) for column in self.columns)
        try:
            cursor = self.conn.execute(
                f"INSERT INTO {self.table} ({', '.join(self.columns)}) VALUES ({placeholders})",
                values,
            )
        except sqlite3.Error:
            logger.exception("Failed to insert into %s", self.table)
            return False
        finally:
            self._cache = None
        record.id = cursor.lastrowid
        return True

    def update(self, record: T) -> bool:
        """Persist the current field values of an already stored record."""
        if record.id is None:
            raise ValueError(f"Cannot update unsaved {self.model.__name__}")
        assignments = ", ".join(f"{column} = ?" for column in self.columns)
        values = tuple(getattr(record, column) for column in self.columns)
        try:
            cursor = self.conn.execute(
                f"UPDATE {self.table} SET {assignments} WHERE id = ?",
                values + (record.id,),
            )
        except sqlite3.Error:
            logger.exception("Failed to update %s %s", self.table, record.id)
            return False
        finally:
            self._cache = None
        return cursor.rowcount == 1

    def remove(self, record: T) -> bool:
        """Delete ``record``.  Returns ``False`` if nothing was deleted."""
        if record.id is None:
            return False
        try:
            cursor = self.conn.execute(
                f"DELETE FROM {self.table} WHERE id = ?",
                (record.id,),
            )
        except sqlite3.Error:
            logger.exception("Failed to delete %s %s", self.table, record.id)
            return False
        finally:
            self._cache = None
        return cursor.rowcount == 1

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------
    def save(self) -> None:
        """Commit pending writes on the shared connection."""
        self.conn.commit()

    def refresh(self) -> None:
        """Forget the cached snapshot so the next read hits the database."""
        self._cache = None

    def rollback(self) -> None:
        """Discard pending writes on the shared connection."""
        self.conn.rollback()
        self._cache = None
