"""
services/question_service.py
-----------------------------
Business logic for questions on posts and their replies.
"""

from models.question import Question
from repositories.question_repo import QuestionRepository
from utils.logger import get_logger
from utils.validations import ValidationError

logger = get_logger(__name__)


class QuestionService:
    """Ask, answer and remove questions."""

    def __init__(self, question_repo: QuestionRepository):
        self.question_repo = question_repo

    def ask_question(self, user_id: str, post_id: str, text: str) -> Question:
        if not text:
            raise ValidationError("Question text is required")
        question = Question(post_id=post_id, user_id=user_id, text=text)
        return self.question_repo.create(question)

    def add_answer(self, question_id: str, answer: str) -> None:
        """
        Append an answer to a question's replies.

        Raises:
            NotFound: If the question does not exist.
        """
        if not answer:
            raise ValidationError("Answer text is required")
        self.question_repo.append_reply(question_id, answer)

    def post_questions(self, post_id: str) -> list[Question]:
        return self.question_repo.find_by_post(post_id)

    def questions_for_author(self, user_id: str) -> list[Question]:
        """Questions waiting on the posts a user wrote."""
        return self.question_repo.find_on_user_posts(user_id)

    def delete_my_question(self, user_id: str, question_id: str) -> None:
        self.question_repo.delete_owned(question_id, user_id)

    def delete_post_questions(self, post_id: str) -> int:
        return self.question_repo.delete_by_post(post_id)
