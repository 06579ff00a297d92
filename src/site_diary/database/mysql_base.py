from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_KEY_ERRNO
from ..core.exceptions import DuplicateEntryError, StoreUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Commits when the block exits cleanly and rolls back otherwise. Driver
    errors are translated: duplicate keys become ``DuplicateEntryError``,
    everything else ``StoreUnavailableError``.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("Could not connect to database: %s", e)
        raise StoreUnavailableError("Database unavailable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        if e.errno == MYSQL_DUPLICATE_KEY_ERRNO:
            raise DuplicateEntryError("Record already exists") from e
        raise StoreUnavailableError("Database rejected the write") from e
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("Database error: %s", e)
        raise StoreUnavailableError("Database error") from e
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
