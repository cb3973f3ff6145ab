from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Type

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import CollaboratorUnavailableError, StoreUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Connector errors that mean "the server is not reachable right now".
TRANSIENT_ERRORS = (
    mysql.connector.errors.InterfaceError,
    mysql.connector.errors.OperationalError,
    mysql.connector.errors.PoolError,
)


@contextmanager
def db_cursor(
    conn_factory: DatabaseConnection,
    *,
    dictionary: bool = True,
    unavailable: Type[CollaboratorUnavailableError] = StoreUnavailableError,
):
    """Open a connection + cursor, commit on success, roll back on error.

    Transient connector failures are re-raised as ``unavailable``; any other
    connector error (integrity, programming) propagates unchanged.
    """
    try:
        conn = conn_factory.connect()
    except TRANSIENT_ERRORS as e:
        logger.error("Database connection failed: %s", e)
        raise unavailable(f"Database unavailable: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except TRANSIENT_ERRORS as e:
        _safe_rollback(conn)
        logger.error("Database operation failed: %s", e)
        raise unavailable(f"Database unavailable: {e}") from e
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as e:
        logger.warning("Rollback failed: %s", e)


def is_duplicate_key(error: BaseException) -> bool:
    return isinstance(error, mysql.connector.errors.IntegrityError) and getattr(error, "errno", None) == errorcode.ER_DUP_ENTRY


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
