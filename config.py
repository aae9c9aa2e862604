"""
config.py
---------
Settings for the LocalEyes backend: PostgreSQL connection and pool size,
the admin password hash, signup defaults and the log level.
Values come from the environment, with a local .env file loaded first.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "local_eyes")
DB_USER: str = os.getenv("DB_USER", "local_eyes_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

# ── Connection Pool ───────────────────────────────────────
DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "10"))

# ── Admin ─────────────────────────────────────────────────
# SHA-256 hex digest of the admin password.
ADMIN_PASSWORD_HASH: str = os.getenv("ADMIN_PASSWORD_HASH", "")

# ── Users ─────────────────────────────────────────────────
DEFAULT_CITY: str = os.getenv("DEFAULT_CITY", "delhi")
RESIDENT_THRESHOLD_YEARS: float = float(os.getenv("RESIDENT_THRESHOLD_YEARS", "1"))
RESERVED_USERNAMES: tuple[str, ...] = ("admin", "Admin")

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
