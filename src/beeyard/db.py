"""
Database handle and query utilities.

Provides a simple interface for executing queries with psycopg, returning
results as dictionaries or pandas DataFrames.

A Database is constructed explicitly and handed to the repositories that
use it; the caller owns its lifecycle:

    with Database(config.database_url) as database:
        ApiaryService(database).get_apiaries()

Statements run in autocommit mode unless they are issued inside
``transaction()``, in which case every statement on the handle joins the
same transaction until the block exits.
"""

import logging
from contextlib import contextmanager
from typing import Any, Optional

import psycopg
from psycopg.rows import dict_row

from beeyard.errors import StoreClosed

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: str):
        self.url = url
        self._conn: Optional[psycopg.Connection] = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open(self) -> "Database":
        """Connect to the database. Opening an open handle is a no-op."""
        if not self.is_open:
            self._conn = psycopg.connect(self.url, autocommit=True, row_factory=dict_row)
            logger.debug("Opened database connection")
        return self

    def close(self) -> None:
        """Close the connection. Closing a closed handle is a no-op."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed database connection")

    @property
    def is_open(self) -> bool:
        return self._conn is not None and not self._conn.closed

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def connection(self) -> psycopg.Connection:
        if not self.is_open:
            raise StoreClosed("database is not open")
        return self._conn

    # =========================================================================
    # Transactions
    # =========================================================================

    @contextmanager
    def transaction(self):
        """
        Run a block of statements atomically.

        Commits when the block exits normally, rolls back and re-raises on
        any exception. Nested blocks become savepoints.

        Usage:
            with database.transaction():
                database.execute("DELETE FROM records WHERE hive_id = %s", (1,))
                database.execute("DELETE FROM hives WHERE id = %s", (1,))
        """
        with self.connection.transaction():
            yield self

    @contextmanager
    def cursor(self):
        """Cursor with dict rows."""
        with self.connection.cursor() as cur:
            yield cur

    # =========================================================================
    # Query Helpers
    # =========================================================================

    def execute(self, query: str, params: tuple = None) -> int:
        """
        Execute a query without returning results.

        Returns:
            Number of rows affected
        """
        with self.cursor() as cur:
            cur.execute(query, params)
            return cur.rowcount

    def fetch_one(self, query: str, params: tuple = None) -> dict[str, Any] | None:
        """
        Execute a query and return a single row as dict.

        Returns:
            Dict of column names to values, or None if no row found
        """
        with self.cursor() as cur:
            cur.execute(query, params)
            return cur.fetchone()

    def fetch_all(self, query: str, params: tuple = None) -> list[dict[str, Any]]:
        """
        Execute a query and return all rows as list of dicts.

        Returns:
            List of dicts, empty list if no rows found
        """
        with self.cursor() as cur:
            cur.execute(query, params)
            return cur.fetchall()

    def fetch_value(self, query: str, params: tuple = None) -> Any:
        """Execute a query and return the first column of the first row."""
        row = self.fetch_one(query, params)
        if row is None:
            return None
        return next(iter(row.values()))

    def fetch_dataframe(self, query: str, params: tuple = None):
        """
        Execute a query and return results as pandas DataFrame.

        Useful for analysis and export where pandas operations are needed.
        """
        import pandas as pd

        with self.cursor() as cur:
            cur.execute(query, params)
            rows = cur.fetchall()
            columns = [desc.name for desc in cur.description] if cur.description else []
            return pd.DataFrame(rows, columns=columns)

    # =========================================================================
    # Batch Operations
    # =========================================================================

    def execute_many(self, query: str, params_list: list[tuple]) -> int:
        """
        Execute a query multiple times with different parameters.

        More efficient than calling execute() in a loop for bulk inserts.

        Returns:
            Number of parameter sets processed
        """
        if not params_list:
            return 0
        with self.cursor() as cur:
            cur.executemany(query, params_list)
            return len(params_list)
