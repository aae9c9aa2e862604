"""
services/user_service.py
-------------------------
Business logic for accounts: signup, login, deactivation and notifications.
"""

from config import DEFAULT_CITY
from models.user import User
from repositories.errors import NotFound
from repositories.user_repo import UserRepository
from security.auth import hash_password
from utils.logger import get_logger
from utils.validations import (
    ValidationError,
    derive_tag,
    is_reserved_username,
    validate_password,
    validate_username,
)

logger = get_logger(__name__)


class AuthenticationError(Exception):
    """Username/password pair does not match any account."""


class InactiveAccount(AuthenticationError):
    """The credentials are valid but the account was deactivated."""


class UserService:
    """Handles user accounts and their notification queues."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def is_username_available(self, username: str) -> bool:
        """Reserved names are never available; otherwise check the database."""
        if is_reserved_username(username):
            return False
        try:
            self.user_repo.find_by_username(username)
        except NotFound:
            return True
        return False

    def signup(self, username: str, password: str, dwelling_years: float, city: str = DEFAULT_CITY) -> User:
        """
        Register a new user.

        Raises:
            ValidationError: If the username is reserved or taken, or the password is weak.
        """
        validate_username(username)
        validate_password(password)
        if not self.is_username_available(username):
            raise ValidationError(f"Username '{username}' is already taken")

        user = User(
            username=username,
            password=hash_password(password),
            city=city,
            dwelling_age=int(dwelling_years),
            tag=derive_tag(dwelling_years),
        )
        self.user_repo.create(user)
        logger.info(f"User '{username}' signed up as {user.tag}")
        return user

    def login(self, username: str, password: str) -> User:
        """
        Authenticate a user.

        Raises:
            AuthenticationError: On unknown username or wrong password.
            InactiveAccount: If the account is deactivated.
        """
        if is_reserved_username(username):
            raise AuthenticationError("Invalid account credentials")
        try:
            user = self.user_repo.find_by_credentials(username, hash_password(password))
        except NotFound:
            raise AuthenticationError("Invalid account credentials") from None
        if not user.is_active:
            raise InactiveAccount("Inactive account")
        return user

    def deactivate(self, user_id: str) -> None:
        self.user_repo.update_active_status(user_id, False)

    def get_user(self, user_id: str) -> User:
        return self.user_repo.find_by_id(user_id)

    def notify_users(self, author_id: str, message: str) -> int:
        """Push `message` to every user except the author."""
        return self.user_repo.broadcast_notification(author_id, message)

    def get_notifications(self, user_id: str) -> list[str]:
        """Return pending notifications, oldest first, and empty the queue."""
        return self.user_repo.drain_notifications(user_id)
