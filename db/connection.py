"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool for efficient connection reuse across
concurrent request threads.

The pool is an explicitly constructed handle: create it once at startup and
pass it to the repositories and services that need it.
"""

import threading
from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2 import pool

import config
from exceptions import InfrastructureError, PoolExhaustionError
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """
    Bounded set of reusable database connections.

    psycopg2's pools fail immediately with ``PoolError`` once every connection
    is handed out. A semaphore sized to ``max_conn`` turns that into a bounded
    wait: callers block up to ``acquire_timeout`` seconds before giving up
    with ``PoolExhaustionError``.

    Args:
        raw_pool: A psycopg2 pool (anything with getconn/putconn/closeall).
        max_conn: Maximum number of connections handed out at once.
        acquire_timeout: Seconds to wait for a free connection.
    """

    def __init__(self, raw_pool, max_conn: int, acquire_timeout: float = 5.0):
        self._raw_pool = raw_pool
        self.max_conn = max_conn
        self.acquire_timeout = acquire_timeout
        self._slots = threading.BoundedSemaphore(max_conn)
        self._lock = threading.Lock()
        self._in_use = 0
        self._acquisitions = 0

    @classmethod
    def from_dsn(
        cls,
        dsn: str,
        min_conn: int = 1,
        max_conn: int = 10,
        acquire_timeout: float = 5.0,
        statement_timeout_ms: int = 5000,
    ) -> "ConnectionPool":
        """
        Open a ThreadedConnectionPool against ``dsn``.

        Every connection gets a server-side ``statement_timeout`` so a stuck
        statement aborts its transaction instead of holding row locks.

        Raises:
            InfrastructureError: If the database is unreachable.
        """
        try:
            raw_pool = pool.ThreadedConnectionPool(
                min_conn,
                max_conn,
                dsn,
                options=f"-c statement_timeout={statement_timeout_ms}",
            )
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise InfrastructureError("Database unreachable", cause=e) from e
        logger.info(f"Database connection pool initialized (max {max_conn} connections).")
        return cls(raw_pool, max_conn, acquire_timeout)

    @classmethod
    def from_config(cls) -> "ConnectionPool":
        """Build the pool from the values in ``config``."""
        return cls.from_dsn(
            config.DATABASE_URL,
            min_conn=config.DB_POOL_MIN,
            max_conn=config.DB_POOL_MAX,
            acquire_timeout=config.DB_POOL_TIMEOUT_SECONDS,
            statement_timeout_ms=config.DB_STATEMENT_TIMEOUT_MS,
        )

    @property
    def available(self) -> int:
        """Number of connections that can be handed out right now."""
        with self._lock:
            return self.max_conn - self._in_use

    @property
    def acquisitions(self) -> int:
        """Total number of successful acquisitions since the pool was created."""
        with self._lock:
            return self._acquisitions

    def get_connection(self):
        """
        Get a connection from the pool, waiting up to ``acquire_timeout``.

        Returns:
            A psycopg2 connection object.

        Raises:
            PoolExhaustionError: No connection became free in time.
            InfrastructureError: Opening a new connection failed.
        """
        if not self._slots.acquire(timeout=self.acquire_timeout):
            logger.warning(
                f"Connection pool exhausted after waiting {self.acquire_timeout}s."
            )
            raise PoolExhaustionError(
                f"No database connection available within {self.acquire_timeout}s"
            )
        try:
            conn = self._raw_pool.getconn()
        except pool.PoolError as e:
            self._slots.release()
            raise PoolExhaustionError("Connection pool exhausted", cause=e) from e
        except psycopg2.Error as e:
            self._slots.release()
            logger.error(f"Failed to open database connection: {e}")
            raise InfrastructureError("Could not open a database connection", cause=e) from e

        with self._lock:
            self._in_use += 1
            self._acquisitions += 1
        return conn

    def release_connection(self, conn, close: bool = False) -> None:
        """
        Return a connection back to the pool.

        Args:
            conn: The psycopg2 connection to release.
            close: Discard the connection instead of reusing it.
        """
        try:
            self._raw_pool.putconn(conn, close=close or bool(conn.closed))
        except pool.PoolError as e:
            logger.error(f"Failed to return connection to pool: {e}")
        finally:
            with self._lock:
                self._in_use -= 1
            self._slots.release()

    @contextmanager
    def connection(self) -> Iterator:
        """
        Borrow a connection for a single statement; always released afterwards.

        The caller commits or rolls back; this only guarantees the release.
        """
        conn = self.get_connection()
        try:
            yield conn
        finally:
            self.release_connection(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        self._raw_pool.closeall()
        logger.info("Database connection pool closed.")
