"""
services/post_service.py
-------------------------
Business logic for posts: create-then-notify, owner-scoped edits,
likes and the post detail view.
"""

from models.post import Post, PostQuestion, PostWithQuestions
from repositories.post_repo import PostRepository
from repositories.question_repo import QuestionRepository
from repositories.user_repo import UserRepository
from services.cascade import delete_post_cascade
from utils.logger import get_logger
from utils.validations import ValidationError, validate_filter, validate_post

logger = get_logger(__name__)

NEW_POST_NOTIFICATION = "New post: {title}"


class PostService:
    """Manages posts and notifies other users about new ones."""

    def __init__(
        self,
        post_repo: PostRepository,
        user_repo: UserRepository,
        question_repo: QuestionRepository,
    ):
        self.post_repo = post_repo
        self.user_repo = user_repo
        self.question_repo = question_repo

    def create_post(self, user_id: str, title: str, content: str, post_type: str) -> Post:
        """
        Create a post, then notify every other user about it.

        The two statements are not atomic: if the broadcast fails the post
        stays created and the error propagates.
        """
        validate_post(title, content, post_type)
        post = Post(user_id=user_id, title=title, content=content, type=post_type)
        self.post_repo.create(post)
        self.user_repo.broadcast_notification(user_id, NEW_POST_NOTIFICATION.format(title=title))
        return post

    def update_my_post(self, post_id: str, user_id: str, title: str, content: str) -> None:
        if not title or not content:
            raise ValidationError("Title and content are required")
        self.post_repo.update_owned(post_id, user_id, title, content)

    def all_posts(self) -> list[Post]:
        return self.post_repo.find_all()

    def my_posts(self, user_id: str) -> list[Post]:
        return self.post_repo.find_by_user(user_id)

    def filtered_posts(self, post_type: str) -> list[Post]:
        """Posts of one type; an empty filter returns every post."""
        validate_filter(post_type)
        if not post_type:
            return self.post_repo.find_all()
        return self.post_repo.find_by_type(post_type)

    def like(self, post_id: str) -> None:
        self.post_repo.increment_likes(post_id)

    def delete_my_post(self, user_id: str, post_id: str) -> None:
        delete_post_cascade(self.post_repo, self.question_repo, post_id, owner_id=user_id)

    def post_with_questions(self, post_id: str) -> PostWithQuestions:
        """
        Load a post together with its questions and replies.

        Raises:
            NotFound: If the post does not exist.
        """
        post = self.post_repo.find_by_id(post_id)
        questions = self.question_repo.find_by_post(post_id)
        return PostWithQuestions(
            post=post,
            questions=[PostQuestion(id=q.id, text=q.text, replies=q.replies) for q in questions],
        )
