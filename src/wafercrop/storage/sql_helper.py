"""
Generic relational database access helper.

Wraps a DB-API 2.0 connection (sqlite3 by default) with three request/response
operations: query returning rows, mutating statement returning the affected
row count, and single scalar. Statements take named parameters
(":name" placeholders for sqlite3).

Usage:
    with SqlHelper("results.db") as db:
        rows = db.execute_query("SELECT * FROM crops WHERE id = :id", {"id": 1})
        count = db.execute_non_query(
            "UPDATE crops SET path = :path WHERE id = :id", {"path": "a.png", "id": 1}
        )
        total = db.execute_scalar("SELECT COUNT(*) FROM crops")
"""

import logging
import sqlite3
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional

from wafercrop.common.constants import StorageConstants
from wafercrop.core.exceptions import StorageException

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class SqlHelper:
    """
    Connection-owning helper for parameterized SQL.

    The connection target is resolved from, in order: the constructor
    argument, the class-level connection_string, then settings.
    A custom DB-API connect callable may be supplied for other drivers.
    """

    connection_string: ClassVar[str] = ""

    def __init__(
        self,
        connection_string: Optional[str] = None,
        connect: Callable[[str], Any] = sqlite3.connect,
    ):
        target = connection_string or self.connection_string or self._settings_target()
        if not target:
            raise StorageException(
                "connect", "Connection string is not set. Set it before using SqlHelper."
            )

        try:
            self._connection = connect(target)
        except Exception as e:
            raise StorageException("connect", str(e)) from e

        logger.debug(f"Opened database connection to {target}")

    @staticmethod
    def _settings_target() -> str:
        from wafercrop.config import get_settings

        return get_settings().storage.database

    def __enter__(self) -> "SqlHelper":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def execute_query(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Row]:
        """
        Run a SELECT-style statement.

        Args:
            sql: SQL text
            params: Named parameters (optional)

        Returns:
            One dict per row, keyed by column name
        """
        cursor = self._execute("query", sql, params)
        try:
            columns = [col[0] for col in cursor.description or []]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def execute_non_query(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """
        Run an INSERT/UPDATE/DELETE statement and commit it.

        Returns:
            Number of affected rows
        """
        cursor = self._execute("non_query", sql, params)
        try:
            self._connection.commit()
            return cursor.rowcount
        finally:
            cursor.close()

    def execute_scalar(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Run a statement and return the first column of the first row.

        Returns:
            The value, or None when the statement returns no rows
        """
        cursor = self._execute("scalar", sql, params)
        try:
            row = cursor.fetchone()
            return row[0] if row else None
        finally:
            cursor.close()

    def close(self) -> None:
        """Close the underlying connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.debug("Closed database connection")

    def _execute(self, operation: str, sql: str, params: Optional[Mapping[str, Any]]):
        if self._connection is None:
            raise StorageException(operation, "connection is closed")

        cursor = self._connection.cursor()
        try:
            cursor.execute(sql, dict(params or {}))
        except Exception as e:
            cursor.close()
            logger.error(f"SQL {operation} failed: {e}")
            raise StorageException(operation, str(e)) from e
        return cursor


def log_rows(rows: List[Row]) -> None:
    """Write column names and each row at debug level."""
    if not rows:
        logger.debug(StorageConstants.NO_RECORDS_MESSAGE)
        return

    logger.debug(", ".join(rows[0].keys()))
    for row in rows:
        logger.debug(", ".join("" if value is None else str(value) for value in row.values()))
