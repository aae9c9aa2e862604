"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: accounts, their city and their pending notifications
CREATE TABLE IF NOT EXISTS users (
    id              VARCHAR(36) PRIMARY KEY,
    username        VARCHAR(100) UNIQUE NOT NULL,
    password        VARCHAR(64) NOT NULL,
    is_active       BOOLEAN NOT NULL DEFAULT TRUE,
    city            VARCHAR(100) NOT NULL,
    dwelling_age    INT NOT NULL DEFAULT 0,
    tag             VARCHAR(20) NOT NULL CHECK (tag IN ('resident', 'newbie')),
    notification    JSONB NOT NULL DEFAULT '[]'::jsonb
);

-- Posts table: user posts with an atomically incremented like counter
CREATE TABLE IF NOT EXISTS posts (
    post_id         VARCHAR(36) PRIMARY KEY,
    user_id         VARCHAR(36) NOT NULL,
    title           VARCHAR(200) NOT NULL,
    type            VARCHAR(20) NOT NULL CHECK (type IN ('food', 'travel', 'shopping', 'other')),
    content         TEXT NOT NULL,
    likes           INT NOT NULL DEFAULT 0 CHECK (likes >= 0),
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Questions table: questions on posts with an append-only reply list
CREATE TABLE IF NOT EXISTS questions (
    q_id            VARCHAR(36) PRIMARY KEY,
    post_id         VARCHAR(36) NOT NULL,
    user_id         VARCHAR(36) NOT NULL,
    text            TEXT NOT NULL,
    replies         JSONB NOT NULL DEFAULT '[]'::jsonb,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_posts_user ON posts(user_id);
CREATE INDEX IF NOT EXISTS idx_posts_type ON posts(type);
CREATE INDEX IF NOT EXISTS idx_questions_post ON questions(post_id);
"""


def create_tables(db: Database) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    try:
        with db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    with Database() as database:
        create_tables(database)
    logger.info("Database schema created successfully.")
