"""
repositories/base.py
--------------------
Shared statement execution for all repositories.

Each helper is one round trip on a pooled connection. Store failures are
logged and re-raised unchanged; the `Database` context manager rolls the
connection back before it returns to the pool.
"""

from typing import Any, Optional, Sequence

import psycopg2

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)


class BaseRepository:
    """Holds the `Database` handle and runs statements built by the query builder."""

    table: str = ""

    def __init__(self, db: Database):
        self.db = db

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """
        Run a mutating statement.

        Returns:
            The affected-row count reported by the driver.
        """
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, tuple(params))
                    return cur.rowcount
        except psycopg2.Error as e:
            logger.error(f"Statement on {self.table} failed: {e}")
            raise

    def _fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[tuple]:
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, tuple(params))
                    return cur.fetchone()
        except psycopg2.Error as e:
            logger.error(f"Query on {self.table} failed: {e}")
            raise

    def _fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[tuple]:
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, tuple(params))
                    return cur.fetchall()
        except psycopg2.Error as e:
            logger.error(f"Query on {self.table} failed: {e}")
            raise
