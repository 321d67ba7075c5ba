"""Database connection service for FastAPI."""

import duckdb
from contextlib import contextmanager
from typing import Optional
from pathlib import Path

from api.config import get_settings
from config.logging_config import get_logger

logger = get_logger("api.database")


class StoreFailure(Exception):
    """The data store could not execute a query (connectivity or SQL error)."""


class DatabaseService:
    """Manages the DuckDB connection for FastAPI.

    Every DuckDB error raised while connecting or executing is re-raised as
    StoreFailure so callers deal with a single opaque failure signal.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """Initialize database service.

        Args:
            db_path: Path to database file.
        """
        settings = get_settings()
        self.db_path = db_path or settings.database_path
        self._connection: Optional[duckdb.DuckDBPyConnection] = None

    def connect(self) -> duckdb.DuckDBPyConnection:
        """Get or create database connection."""
        if self._connection is None:
            try:
                self._connection = duckdb.connect(str(self.db_path))
                self._configure()
            except duckdb.Error as e:
                self._connection = None
                logger.error(f"Failed to connect to database at {self.db_path}: {e}")
                raise StoreFailure("Database unavailable") from e
        return self._connection

    def _configure(self) -> None:
        """Configure connection limits."""
        if self._connection:
            settings = get_settings()
            self._connection.execute(f"SET memory_limit = '{settings.memory_limit}'")
            self._connection.execute(f"SET threads = {settings.threads}")

    def execute(self, query: str, params: Optional[list] = None):
        """Execute a query and return the result cursor."""
        conn = self.connect()
        try:
            if params:
                return conn.execute(query, params)
            return conn.execute(query)
        except duckdb.Error as e:
            logger.error(f"Query failed: {e}")
            raise StoreFailure("Database query failed") from e

    def fetch_one(self, query: str, params: Optional[list] = None):
        """Execute query and fetch one result."""
        return self.execute(query, params).fetchone()

    def fetch_all(self, query: str, params: Optional[list] = None):
        """Execute query and fetch all results."""
        return self.execute(query, params).fetchall()

    @contextmanager
    def transaction(self):
        """Run the enclosed statements in one transaction.

        Rolls back and re-raises on any error.
        """
        self.execute("BEGIN TRANSACTION")
        try:
            yield self
        except BaseException:
            self.execute("ROLLBACK")
            raise
        else:
            self.execute("COMMIT")

    def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None


# Global database instance
_db_service: Optional[DatabaseService] = None


def get_db() -> DatabaseService:
    """Get global database service instance."""
    global _db_service
    if _db_service is None:
        _db_service = DatabaseService()
    return _db_service


def close_db() -> None:
    """Close the global database connection."""
    global _db_service
    if _db_service is not None:
        _db_service.close()
