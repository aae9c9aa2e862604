"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
All SQL queries related to the `users` table live here.
"""

import psycopg2

from db.query_builder import (
    Condition,
    build_delete,
    build_insert,
    build_select,
    build_update,
    build_update_with_expression,
)
from models.user import User
from repositories import list_codec
from repositories.base import BaseRepository
from repositories.errors import NotFound
from utils.logger import get_logger

logger = get_logger(__name__)

TABLE = "users"
COLUMNS = ("id", "username", "password", "is_active", "city", "dwelling_age", "tag", "notification")

_APPEND_NOTIFICATION = list_codec.append_expression("notification")


class UserRepository(BaseRepository):
    """Repository for CRUD operations on the users table."""

    table = TABLE

    # ── CREATE ────────────────────────────────────────────

    def create(self, user: User) -> User:
        """
        Insert a new user.

        Raises:
            psycopg2.IntegrityError: If the id or username is already taken.
        """
        sql = build_insert(TABLE, COLUMNS)
        self._execute(sql, (
            user.id, user.username, user.password, user.is_active,
            user.city, user.dwelling_age, user.tag,
            list_codec.encode(user.notification),
        ))
        logger.info(f"Created user '{user.username}' ({user.id})")
        return user

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, user_id: str) -> User:
        """
        Fetch a user by id.

        Raises:
            NotFound: If no user has this id.
            CorruptData: If the notification column cannot be decoded.
        """
        row = self._fetch_one(build_select(TABLE, "id", None, COLUMNS), (user_id,))
        if row is None:
            raise NotFound(f"No user exists with id {user_id}")
        return self._row_to_user(row)

    def find_by_username(self, username: str) -> User:
        row = self._fetch_one(build_select(TABLE, "username", None, COLUMNS), (username,))
        if row is None:
            raise NotFound(f"No user exists with username '{username}'")
        return self._row_to_user(row)

    def find_by_credentials(self, username: str, password_hash: str) -> User:
        """Fetch a user matching both username and password hash."""
        sql = build_select(TABLE, "username", "password", COLUMNS)
        row = self._fetch_one(sql, (username, password_hash))
        if row is None:
            raise NotFound("No user matches these credentials")
        return self._row_to_user(row)

    def find_all(self) -> list[User]:
        sql = build_select(TABLE, None, None, COLUMNS, order_by="username")
        return [self._row_to_user(r) for r in self._fetch_all(sql)]

    # ── UPDATE ────────────────────────────────────────────

    def update_active_status(self, user_id: str, active: bool) -> None:
        """
        Activate or deactivate a user.

        Raises:
            NotFound: If no user has this id.
        """
        sql = build_update(TABLE, "id", None, ("is_active",))
        if self._execute(sql, (active, user_id)) == 0:
            raise NotFound(f"No user exists with id {user_id}")
        logger.info(f"Set is_active={active} for user {user_id}")

    def push_notification(self, user_id: str, message: str) -> None:
        """
        Append one notification to a user's queue in a single statement.

        Raises:
            NotFound: If no user has this id.
        """
        sql = build_update_with_expression(TABLE, "id", None, _APPEND_NOTIFICATION)
        if self._execute(sql, (message, user_id)) == 0:
            raise NotFound(f"No user exists with id {user_id}")

    def broadcast_notification(self, author_id: str, message: str) -> int:
        """
        Append a notification to every user except the author.

        Returns:
            Number of users notified (zero is not an error).
        """
        sql = build_update_with_expression(TABLE, Condition("id", "<>"), None, _APPEND_NOTIFICATION)
        notified = self._execute(sql, (message, author_id))
        logger.info(f"Broadcast notification from {author_id} to {notified} users")
        return notified

    def clear_notifications(self, user_id: str) -> None:
        """
        Replace a user's notification queue with an empty list.

        Raises:
            NotFound: If no user has this id.
        """
        sql = build_update(TABLE, "id", None, ("notification",))
        if self._execute(sql, (list_codec.encode([]), user_id)) == 0:
            raise NotFound(f"No user exists with id {user_id}")

    def drain_notifications(self, user_id: str) -> list[str]:
        """
        Return a user's notifications and empty the queue.

        The row is locked between the read and the clear, so a concurrent
        `push_notification` lands either in the returned list or in the
        fresh queue, never in neither.

        Raises:
            NotFound: If no user has this id.
            CorruptData: If the stored queue cannot be decoded.
        """
        select_sql = build_select(TABLE, "id", None, ("notification",)) + " FOR UPDATE"
        clear_sql = build_update(TABLE, "id", None, ("notification",))
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(select_sql, (user_id,))
                    row = cur.fetchone()
                    if row is None:
                        raise NotFound(f"No user exists with id {user_id}")
                    notifications = list_codec.decode(row[0], "notification")
                    cur.execute(clear_sql, (list_codec.encode([]), user_id))
        except psycopg2.Error as e:
            logger.error(f"Failed to drain notifications for user {user_id}: {e}")
            raise
        return notifications

    # ── DELETE ────────────────────────────────────────────

    def delete(self, user_id: str) -> None:
        """
        Delete a user by id.

        Raises:
            NotFound: If no user has this id.
        """
        if self._execute(build_delete(TABLE, "id"), (user_id,)) == 0:
            raise NotFound(f"No user exists with id {user_id}")
        logger.info(f"Deleted user {user_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        """Convert a database row tuple to a User domain object."""
        return User(
            id=row[0],
            username=row[1],
            password=row[2],
            is_active=row[3],
            city=row[4],
            dwelling_age=row[5],
            tag=row[6],
            notification=list_codec.decode(row[7], "notification"),
        )
