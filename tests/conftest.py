import os
import sys
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure project root on sys.path
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")


class FakeDatabase:
    """Stands in for `db.connection.Database`, recording every statement."""

    def __init__(self):
        self.cursor = MagicMock()
        self.cursor.rowcount = 1
        self.cursor.fetchone.return_value = None
        self.cursor.fetchall.return_value = []
        self.conn = MagicMock()
        self.conn.cursor.return_value.__enter__.return_value = self.cursor
        self.commits = 0
        self.rollbacks = 0

    @contextmanager
    def connection(self):
        try:
            yield self.conn
            self.commits += 1
        except Exception:
            self.rollbacks += 1
            raise

    @property
    def last_sql(self) -> str:
        return self.cursor.execute.call_args[0][0]

    @property
    def last_params(self) -> tuple:
        return self.cursor.execute.call_args[0][1]


@pytest.fixture()
def fake_db():
    return FakeDatabase()


@pytest.fixture(scope="session")
def pg_database():
    """A real PostgreSQL database, only when TEST_DATABASE_URL is set."""
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set")
    from db.connection import Database
    from db.init_db import create_tables

    db = Database(TEST_DATABASE_URL, min_conn=1, max_conn=20)
    db.open()
    create_tables(db)
    yield db
    db.close()


@pytest.fixture()
def pg_db(pg_database):
    # Safety: only wipe the database named by TEST_DATABASE_URL
    assert pg_database.dsn == TEST_DATABASE_URL, "Refusing to clean non-test DB"
    with pg_database.connection() as conn:
        with conn.cursor() as cur:
            cur.execute("TRUNCATE users, posts, questions;")
    yield pg_database
