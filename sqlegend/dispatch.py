"""
Single-statement execution against an open tenant database.

Invariants:
    - Exactly one statement is executed per call
    - Read/write classification comes from SQLite (result columns declared
      by the prepared statement), never from the SQL text
    - Engine diagnostics are raised as StatementError, message unchanged
"""

from __future__ import annotations

import logging
import math
import re
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Union

from .errors import StatementError

logger = logging.getLogger(__name__)

NO_STATEMENT_MESSAGE = "The supplied SQL string contains no statements"

# Line comments, block comments (unterminated runs to end of input), separators
_NON_STATEMENT = re.compile(r"--[^\n]*|/\*.*?(?:\*/|\Z)|[\s;]+", re.DOTALL)


@dataclass
class RowSet:
    """Rows produced by a read statement.

    Attributes:
        columns: Column names in result order
        rows: One mapping of column name to value per row
    """

    columns: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)

    def to_json(self) -> list[dict[str, Any]]:
        return self.rows


@dataclass(frozen=True)
class MutationSummary:
    """Effect of a write statement.

    Attributes:
        changes: Rows inserted, updated or deleted (0 for schema changes)
        last_insert_rowid: Rowid of the most recent insert on the connection
    """

    changes: int
    last_insert_rowid: int

    def to_json(self) -> dict[str, int]:
        return {"changes": self.changes, "lastInsertRowid": self.last_insert_rowid}


StatementOutcome = Union[RowSet, MutationSummary]


def _to_json_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    if isinstance(value, float) and (math.isinf(value) or math.isnan(value)):
        return None
    return value


def dispatch_statement(conn: sqlite3.Connection, sql: str) -> StatementOutcome:
    """Execute one SQL statement and shape its outcome.

    Args:
        conn: Open tenant connection from open_store
        sql: Statement text, passed to SQLite untouched

    Returns:
        RowSet if the statement declares result columns, else MutationSummary

    Raises:
        StatementError: If SQLite rejects or fails the statement, or sql
            holds only whitespace, comments and separators
    """
    if _NON_STATEMENT.sub("", sql) == "":
        raise StatementError(NO_STATEMENT_MESSAGE)

    changes_before = conn.total_changes

    try:
        cursor = conn.execute(sql)
        try:
            if cursor.description is not None:
                columns = [col[0] for col in cursor.description]
                rows = [
                    {name: _to_json_value(value) for name, value in zip(columns, row)}
                    for row in cursor.fetchall()
                ]
                return RowSet(columns=columns, rows=rows)

            # rowcount is stale after DDL; the total change counter is not
            if conn.total_changes == changes_before:
                changes = 0
            else:
                changes = max(cursor.rowcount, 0)
            return MutationSummary(
                changes=changes,
                last_insert_rowid=cursor.lastrowid or 0,
            )
        finally:
            cursor.close()
    except (sqlite3.Error, sqlite3.Warning) as e:
        # Multi-statement input lands here: the driver refuses it
        raise StatementError(str(e)) from e
