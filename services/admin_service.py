"""
services/admin_service.py
--------------------------
Moderation: the admin can list and delete anything and reactivate users.
"""

from models.post import Post
from models.question import Question
from models.user import User
from repositories.post_repo import PostRepository
from repositories.question_repo import QuestionRepository
from repositories.user_repo import UserRepository
from security.auth import verify_admin_password
from services.cascade import delete_post_cascade
from services.user_service import AuthenticationError
from utils.logger import get_logger

logger = get_logger(__name__)


class AdminService:
    """Moderation use cases. Callers are expected to have passed `login` first."""

    def __init__(
        self,
        user_repo: UserRepository,
        post_repo: PostRepository,
        question_repo: QuestionRepository,
    ):
        self.user_repo = user_repo
        self.post_repo = post_repo
        self.question_repo = question_repo

    def login(self, password: str) -> None:
        """
        Raises:
            AuthenticationError: If the password does not match the admin hash.
        """
        if not verify_admin_password(password):
            raise AuthenticationError("Invalid admin credentials")
        logger.info("Admin logged in")

    def all_users(self) -> list[User]:
        return self.user_repo.find_all()

    def all_posts(self) -> list[Post]:
        return self.post_repo.find_all()

    def all_questions(self) -> list[Question]:
        return self.question_repo.find_all()

    def delete_user(self, user_id: str) -> None:
        # Posts and questions of the user are kept.
        self.user_repo.delete(user_id)
        logger.info(f"Admin deleted user {user_id}")

    def delete_post(self, post_id: str) -> None:
        removed = delete_post_cascade(self.post_repo, self.question_repo, post_id)
        logger.info(f"Admin deleted post {post_id} and {removed} questions")

    def delete_question(self, question_id: str) -> None:
        self.question_repo.delete(question_id)
        logger.info(f"Admin deleted question {question_id}")

    def reactivate(self, user_id: str) -> None:
        self.user_repo.update_active_status(user_id, True)
        logger.info(f"Admin reactivated user {user_id}")
