"""Database module for URL Shortener Service.

This module handles SQLite database operations and provides
dependency injection for FastAPI endpoints.
"""

import sqlite3
import logging
import threading
from datetime import datetime
from typing import Optional

from .config import settings
from .errors import DuplicateRecordError, StoreFailureError

logger = logging.getLogger(__name__)


def _to_db_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


class Database:
    """Database class for managing the SQLite connection and short link rows."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
        """
        if db_path:
            self.db_path = db_path
        else:
            self.db_path = settings.database_url
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        """Create or return the database connection.

        The connection is opened with check_same_thread=False so it can be used
        from any thread; the lock keeps each statement together with its
        commit or fetch.

        Returns:
            SQLite connection.
        """
        if self._connection is None:
            try:
                self._connection = sqlite3.connect(
                    self.db_path,
                    check_same_thread=False
                )
            except sqlite3.Error as e:
                logger.error(f"Could not open database {self.db_path}: {e}")
                raise StoreFailureError("Database unavailable") from e
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def init_db(self) -> None:
        """Create the urls table and its indexes if they are missing."""
        create_table_sql = """
        CREATE TABLE IF NOT EXISTS urls (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            short_code TEXT NOT NULL UNIQUE,
            original_url TEXT NOT NULL UNIQUE,
            created_at TEXT NOT NULL,
            expires_at TEXT,
            click_count INTEGER NOT NULL DEFAULT 0
        )
        """
        create_index_sql = """
        CREATE INDEX IF NOT EXISTS idx_created_at ON urls(created_at);
        """
        conn = self._get_connection()
        with self._lock:
            try:
                cursor = conn.cursor()
                cursor.execute(create_table_sql)
                cursor.executescript(create_index_sql)
                conn.commit()
                logger.info("Database initialized successfully")
            except sqlite3.Error as e:
                logger.error(f"Database initialization failed: {e}")
                raise StoreFailureError("Database initialization failed") from e

    def execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Optional[list[dict]]:
        """Execute a SQL query.

        Args:
            query: SQL query string.
            params: Query parameters.
            fetch: Whether to fetch results.

        Returns:
            Query results if fetch=True, None otherwise.

        Raises:
            DuplicateRecordError: A unique constraint was violated.
            StoreFailureError: Any other database error.
        """
        conn = self._get_connection()
        with self._lock:
            try:
                cursor = conn.cursor()
                cursor.execute(query, params)
                if fetch:
                    results = cursor.fetchall()
                    return [dict(row) for row in results]
                conn.commit()
                return None
            except sqlite3.IntegrityError as e:
                conn.rollback()
                message = str(e)
                if "urls.original_url" in message:
                    raise DuplicateRecordError("original_url") from e
                if "urls.short_code" in message:
                    raise DuplicateRecordError("short_code") from e
                logger.error(f"Integrity error: {e}")
                raise StoreFailureError("Query execution failed") from e
            except sqlite3.Error as e:
                logger.error(f"Query execution failed: {e}")
                raise StoreFailureError("Query execution failed") from e

    def get_url_by_code(self, short_code: str) -> Optional[dict]:
        """Get URL record by short code.

        Args:
            short_code: The short URL code.

        Returns:
            URL record or None if not found.
        """
        query = "SELECT * FROM urls WHERE short_code = ?"
        results = self.execute(query, (short_code,), fetch=True)
        return results[0] if results else None

    def get_url_by_original(self, original_url: str) -> Optional[dict]:
        """Get URL record by exact original URL."""
        query = "SELECT * FROM urls WHERE original_url = ?"
        results = self.execute(query, (original_url,), fetch=True)
        return results[0] if results else None

    def create_url(
        self,
        original_url: str,
        short_code: str,
        created_at: datetime,
        expires_at: Optional[datetime] = None,
    ) -> dict:
        """Create a new shortened URL.

        Args:
            original_url: The original long URL.
            short_code: The short URL code.
            created_at: Creation timestamp.
            expires_at: Optional expiration timestamp.

        Returns:
            Created URL record.
        """
        query = """
        INSERT INTO urls (original_url, short_code, created_at, expires_at, click_count)
        VALUES (?, ?, ?, ?, 0)
        """
        self.execute(
            query,
            (original_url, short_code, _to_db_timestamp(created_at), _to_db_timestamp(expires_at)),
        )
        logger.info(f"Created short URL: {short_code}")
        return self.get_url_by_code(short_code)

    def increment_clicks(self, short_code: str) -> None:
        """Increment click count for a URL.

        Args:
            short_code: The short URL code.
        """
        query = "UPDATE urls SET click_count = click_count + 1 WHERE short_code = ?"
        self.execute(query, (short_code,))

    def get_all_urls(self) -> list[dict]:
        """Get all URLs, newest first.

        Returns:
            List of URL records.
        """
        query = "SELECT * FROM urls ORDER BY created_at DESC, id DESC"
        return self.execute(query, fetch=True) or []

    def url_exists(self, short_code: str) -> bool:
        """Check if a short code already exists.

        Args:
            short_code: The short URL code.

        Returns:
            True if exists, False otherwise.
        """
        query = "SELECT 1 FROM urls WHERE short_code = ?"
        results = self.execute(query, (short_code,), fetch=True)
        return len(results) > 0 if results else False


# Global database instance
db = Database()


def get_db() -> Database:
    """Get database instance for dependency injection.

    Returns:
        Database instance.
    """
    return db


def get_test_db() -> Database:
    """Get a fresh in-memory database for testing.

    Returns:
        In-memory Database instance.
    """
    test_db = Database(":memory:")
    test_db.init_db()
    return test_db
