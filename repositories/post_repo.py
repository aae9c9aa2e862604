"""
repositories/post_repo.py
--------------------------
Data access layer for posts.
All SQL queries related to the `posts` table live here.
"""

from db.query_builder import (
    SetExpression,
    build_delete,
    build_insert,
    build_select,
    build_update,
    build_update_with_expression,
)
from models.post import Post
from repositories.base import BaseRepository
from repositories.errors import NotFound, NotFoundOrNotOwned
from utils.logger import get_logger

logger = get_logger(__name__)

TABLE = "posts"
COLUMNS = ("post_id", "user_id", "title", "type", "content", "likes", "created_at")

_INCREMENT_LIKES = SetExpression("likes = likes + 1")


class PostRepository(BaseRepository):
    """Repository for CRUD operations on the posts table."""

    table = TABLE

    # ── CREATE ────────────────────────────────────────────

    def create(self, post: Post) -> Post:
        sql = build_insert(TABLE, COLUMNS)
        self._execute(sql, (
            post.id, post.user_id, post.title, post.type,
            post.content, post.likes, post.created_at,
        ))
        logger.info(f"Created post '{post.title}' ({post.id}) for user {post.user_id}")
        return post

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, post_id: str) -> Post:
        """
        Fetch a single post.

        Raises:
            NotFound: If no post has this id.
        """
        row = self._fetch_one(build_select(TABLE, "post_id", None, COLUMNS), (post_id,))
        if row is None:
            raise NotFound(f"No post exists with id {post_id}")
        return self._row_to_post(row)

    def find_all(self) -> list[Post]:
        sql = build_select(TABLE, None, None, COLUMNS, order_by="created_at DESC")
        return [self._row_to_post(r) for r in self._fetch_all(sql)]

    def find_by_type(self, post_type: str) -> list[Post]:
        sql = build_select(TABLE, "type", None, COLUMNS, order_by="created_at DESC")
        return [self._row_to_post(r) for r in self._fetch_all(sql, (post_type,))]

    def find_by_user(self, user_id: str) -> list[Post]:
        sql = build_select(TABLE, "user_id", None, COLUMNS, order_by="created_at DESC")
        return [self._row_to_post(r) for r in self._fetch_all(sql, (user_id,))]

    # ── UPDATE ────────────────────────────────────────────

    def update_owned(self, post_id: str, user_id: str, title: str, content: str) -> None:
        """
        Update title and content of a post owned by `user_id`.

        Raises:
            NotFoundOrNotOwned: If the post is missing or belongs to someone else.
        """
        sql = build_update(TABLE, "post_id", "user_id", ("title", "content"))
        if self._execute(sql, (title, content, post_id, user_id)) == 0:
            raise NotFoundOrNotOwned(f"Post {post_id} not found or not owned by {user_id}")
        logger.info(f"Updated post {post_id}")

    def increment_likes(self, post_id: str) -> None:
        """
        Add one like, computed by the database in a single statement.

        Raises:
            NotFound: If no post has this id.
        """
        sql = build_update_with_expression(TABLE, "post_id", None, _INCREMENT_LIKES)
        if self._execute(sql, (post_id,)) == 0:
            raise NotFound(f"No post exists with id {post_id}")

    # ── DELETE ────────────────────────────────────────────

    def delete(self, post_id: str) -> None:
        """
        Delete a post by id, regardless of owner.

        Raises:
            NotFound: If no post has this id.
        """
        if self._execute(build_delete(TABLE, "post_id"), (post_id,)) == 0:
            raise NotFound(f"No post exists with id {post_id}")
        logger.info(f"Deleted post {post_id}")

    def delete_owned(self, post_id: str, user_id: str) -> None:
        """
        Delete a post owned by `user_id`.

        Raises:
            NotFoundOrNotOwned: If the post is missing or belongs to someone else.
        """
        sql = build_delete(TABLE, "post_id", "user_id")
        if self._execute(sql, (post_id, user_id)) == 0:
            raise NotFoundOrNotOwned(f"Post {post_id} not found or not owned by {user_id}")
        logger.info(f"Deleted post {post_id} owned by {user_id}")

    def delete_by_user(self, user_id: str) -> int:
        """Delete every post of a user. Returns the number removed."""
        return self._execute(build_delete(TABLE, "user_id"), (user_id,))

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_post(row: tuple) -> Post:
        """Convert a database row tuple to a Post domain object."""
        return Post(
            id=row[0],
            user_id=row[1],
            title=row[2],
            type=row[3],
            content=row[4],
            likes=row[5],
            created_at=row[6],
        )
