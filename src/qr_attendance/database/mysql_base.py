from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.app_logger import get_logger
from ..core.exceptions import PersistenceError
from .connection import DatabaseConnection

log = get_logger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, rollback and raise PersistenceError on driver errors."""
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        log.error("database connection failed: %s", e)
        raise PersistenceError("Database is not reachable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        log.error("database statement failed: %s", e)
        raise PersistenceError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_duplicate_key(exc: BaseException) -> bool:
    """True when the driver error behind *exc* is a unique-key violation (ER_DUP_ENTRY)."""
    cause = exc.__cause__ if isinstance(exc, PersistenceError) else exc
    return isinstance(cause, mysql.connector.IntegrityError) and getattr(cause, "errno", None) == 1062
