"""
Base repository with connection management.

Provides context managers for database connections that handle:
- Automatic connection cleanup
- Transaction commit on success
- Transaction rollback on failure
"""

from contextlib import contextmanager
from typing import Any, Callable, Generator, Optional

from database_postgres import get_connection


class BaseRepository:
    """
    Base class for all repositories.

    Subclasses should use self.connection() for writes and
    self.read_connection() for queries.

    Args:
        connection_factory: Callable returning a DB-API connection.
            Defaults to database_postgres.get_connection.
    """

    def __init__(self, connection_factory: Optional[Callable[[], Any]] = None):
        self._connection_factory = connection_factory

    def _connect(self):
        if self._connection_factory is not None:
            return self._connection_factory()
        return get_connection()

    @contextmanager
    def connection(self, auto_commit: bool = True) -> Generator[Any, None, None]:
        """
        Context manager for write operations.

        Commits on successful exit (if auto_commit=True), rolls back and
        re-raises on exception, and always closes the connection.

        Yields:
            A tuple of (connection, cursor) for database operations.

        Example:
            with self.connection() as (conn, cursor):
                cursor.execute("INSERT INTO scores ...")
        """
        conn = self._connect()
        cursor = conn.cursor()
        try:
            yield conn, cursor
            if auto_commit:
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    @contextmanager
    def read_connection(self) -> Generator[Any, None, None]:
        """
        Context manager for read-only operations (no commit).

        Yields:
            A tuple of (connection, cursor) for database operations.
        """
        conn = self._connect()
        cursor = conn.cursor()
        try:
            yield conn, cursor
        finally:
            cursor.close()
            conn.close()
