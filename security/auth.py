"""
security/auth.py
-----------------
Password hashing and admin authentication.

Passwords are stored as SHA-256 hex digests so that login can be a single
lookup on (username, password hash).
"""

import hashlib
import hmac
from typing import Optional

from config import ADMIN_PASSWORD_HASH
from utils.logger import get_logger

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    """Return the SHA-256 hex digest of a password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_admin_password(password: str, expected_hash: Optional[str] = None) -> bool:
    """
    Check a password against the configured admin hash.

    Behavior:
        - If no admin hash is configured, admin login is disabled.
        - Failed attempts are logged.
    """
    if expected_hash is None:
        expected_hash = ADMIN_PASSWORD_HASH
    if not expected_hash:
        logger.warning("Admin login attempted but ADMIN_PASSWORD_HASH is not configured")
        return False
    if hmac.compare_digest(hash_password(password), expected_hash.lower()):
        return True
    logger.warning("🚫 Failed admin login attempt")
    return False
