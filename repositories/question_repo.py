"""
repositories/question_repo.py
------------------------------
Data access layer for questions and their replies.
All SQL queries related to the `questions` table live here.
"""

from db.query_builder import (
    build_delete,
    build_insert,
    build_select,
    build_select_with_join,
    build_update_with_expression,
)
from models.question import Question
from repositories import list_codec
from repositories.base import BaseRepository
from repositories.errors import NotFound, NotFoundOrNotOwned
from utils.logger import get_logger

logger = get_logger(__name__)

TABLE = "questions"
COLUMNS = ("q_id", "post_id", "user_id", "text", "replies", "created_at")

_APPEND_REPLY = list_codec.append_expression("replies")
_POST_JOIN = "JOIN posts p ON p.post_id = q.post_id"


class QuestionRepository(BaseRepository):
    """Repository for CRUD operations on the questions table."""

    table = TABLE

    # ── CREATE ────────────────────────────────────────────

    def create(self, question: Question) -> Question:
        sql = build_insert(TABLE, COLUMNS)
        self._execute(sql, (
            question.id, question.post_id, question.user_id, question.text,
            list_codec.encode(question.replies), question.created_at,
        ))
        logger.info(f"Created question {question.id} on post {question.post_id}")
        return question

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, question_id: str) -> Question:
        """
        Fetch a single question.

        Raises:
            NotFound: If no question has this id.
            CorruptData: If the replies column cannot be decoded.
        """
        row = self._fetch_one(build_select(TABLE, "q_id", None, COLUMNS), (question_id,))
        if row is None:
            raise NotFound(f"No question exists with id {question_id}")
        return self._row_to_question(row)

    def find_all(self) -> list[Question]:
        sql = build_select(TABLE, None, None, COLUMNS, order_by="created_at")
        return [self._row_to_question(r) for r in self._fetch_all(sql)]

    def find_by_post(self, post_id: str) -> list[Question]:
        """All questions on a post, oldest first. Empty if there are none."""
        sql = build_select(TABLE, "post_id", None, COLUMNS, order_by="created_at")
        return [self._row_to_question(r) for r in self._fetch_all(sql, (post_id,))]

    def find_on_user_posts(self, user_id: str) -> list[Question]:
        """Questions asked on any post owned by `user_id`."""
        sql = build_select_with_join(
            f"{TABLE} q",
            "p.user_id",
            None,
            _POST_JOIN,
            [f"q.{col}" for col in COLUMNS],
            order_by="q.created_at",
        )
        return [self._row_to_question(r) for r in self._fetch_all(sql, (user_id,))]

    # ── UPDATE ────────────────────────────────────────────

    def append_reply(self, question_id: str, reply: str) -> None:
        """
        Append a reply in a single statement evaluated by the database.

        Raises:
            NotFound: If no question has this id.
        """
        sql = build_update_with_expression(TABLE, "q_id", None, _APPEND_REPLY)
        if self._execute(sql, (reply, question_id)) == 0:
            raise NotFound(f"No question exists with id {question_id}")
        logger.info(f"Added reply to question {question_id}")

    # ── DELETE ────────────────────────────────────────────

    def delete(self, question_id: str) -> None:
        """
        Delete a question by id, regardless of who asked it.

        Raises:
            NotFound: If no question has this id.
        """
        if self._execute(build_delete(TABLE, "q_id"), (question_id,)) == 0:
            raise NotFound(f"No question exists with id {question_id}")
        logger.info(f"Deleted question {question_id}")

    def delete_owned(self, question_id: str, user_id: str) -> None:
        """
        Delete a question asked by `user_id`.

        Raises:
            NotFoundOrNotOwned: If the question is missing or was asked by someone else.
        """
        sql = build_delete(TABLE, "q_id", "user_id")
        if self._execute(sql, (question_id, user_id)) == 0:
            raise NotFoundOrNotOwned(f"Question {question_id} not found or not owned by {user_id}")
        logger.info(f"Deleted question {question_id} asked by {user_id}")

    def delete_by_post(self, post_id: str) -> int:
        """
        Delete all questions on a post.

        Returns:
            Number of questions removed. A post without questions returns 0.
        """
        deleted = self._execute(build_delete(TABLE, "post_id"), (post_id,))
        if deleted:
            logger.info(f"Deleted {deleted} questions on post {post_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_question(row: tuple) -> Question:
        """Convert a database row tuple to a Question domain object."""
        return Question(
            id=row[0],
            post_id=row[1],
            user_id=row[2],
            text=row[3],
            replies=list_codec.decode(row[4], "replies"),
            created_at=row[5],
        )
