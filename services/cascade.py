"""
services/cascade.py
-------------------
Post deletion that also removes the post's questions.

The two deletes are separate statements. Ordering and error priority:

1. The post delete runs first.
2. For an owner-scoped delete, questions are only removed once the post
   delete succeeded; otherwise a caller could wipe questions on a post
   they do not own.
3. For an unscoped (admin) delete both statements are always attempted.
   If both fail the post error is raised, chained to the question error.
"""

from typing import Optional

from repositories.errors import RepositoryError, StoreError
from repositories.post_repo import PostRepository
from repositories.question_repo import QuestionRepository
from utils.logger import get_logger

logger = get_logger(__name__)


def delete_post_cascade(
    post_repo: PostRepository,
    question_repo: QuestionRepository,
    post_id: str,
    owner_id: Optional[str] = None,
) -> int:
    """
    Delete a post and its questions.

    Args:
        post_id: Post to delete.
        owner_id: If given, the post must belong to this user.

    Returns:
        Number of questions removed.

    Raises:
        NotFound / NotFoundOrNotOwned: If the post delete matched no row.
        StoreError: If either statement failed in the database.
    """
    if owner_id is not None:
        post_repo.delete_owned(post_id, owner_id)
        return question_repo.delete_by_post(post_id)

    post_error: Optional[Exception] = None
    try:
        post_repo.delete(post_id)
    except (RepositoryError, StoreError) as e:
        post_error = e

    try:
        removed = question_repo.delete_by_post(post_id)
    except (RepositoryError, StoreError) as question_error:
        if post_error is not None:
            logger.error(f"Deleting questions of post {post_id} also failed: {question_error}")
            raise post_error from question_error
        raise

    if post_error is not None:
        raise post_error
    return removed
