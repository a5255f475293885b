"""
db/transaction.py
-----------------
Transaction scope for multi-statement writes.

    with transaction(pool) as cur:
        cur.execute(...)
        cur.execute(...)

psycopg2 opens the transaction implicitly on the first statement. Leaving
the block normally commits; leaving it through any exception (including
cancellation) rolls back. The connection goes back to the pool on every
path, and is discarded if its state can no longer be trusted.
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg2

from db.connection import ConnectionPool
from exceptions import (
    ConstraintViolationError,
    InfrastructureError,
    TransactionError,
)
from utils.logger import get_logger

logger = get_logger(__name__)


def translate_error(error: psycopg2.Error) -> TransactionError:
    """
    Map a psycopg2 exception onto the application's error taxonomy.

    Integrity and data errors are client-correctable; everything else
    (operational, interface, internal) is an infrastructure failure.
    """
    message = str(error).strip() or error.__class__.__name__
    if isinstance(error, (psycopg2.IntegrityError, psycopg2.DataError)):
        return ConstraintViolationError(message, cause=error)
    return InfrastructureError(message, cause=error)


def _rollback(conn) -> bool:
    """Roll back ``conn``; returns False if the rollback itself failed."""
    if conn.closed:
        return False
    try:
        conn.rollback()
        return True
    except psycopg2.Error as e:
        logger.error(f"Rollback failed, discarding connection: {e}")
        return False


@contextmanager
def transaction(pool: ConnectionPool) -> Iterator:
    """
    Run the enclosed statements as one atomic unit on one pooled connection.

    Yields:
        A cursor bound to the transaction's connection.

    Raises:
        PoolExhaustionError: No connection was available (nothing to roll back).
        ConstraintViolationError: A constraint rejected one of the statements.
        InfrastructureError: Connection loss, timeout or commit failure.
    """
    conn = pool.get_connection()
    discard = False
    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except BaseException as exc:
        discard = not _rollback(conn)
        if isinstance(exc, psycopg2.Error):
            raise translate_error(exc) from exc
        raise
    finally:
        pool.release_connection(conn, close=discard)
