"""
main.py
-------
Entry point for the LocalEyes backend.

The HTTP or CLI boundary layer calls `bootstrap(db)` with a `Database` it
has opened and keeps the returned `Services` for its lifetime.

Run directly (`python main.py`), this module is a schema bootstrap only:
it opens the pool, creates missing tables, checks the services can be
wired and closes the pool again.
"""

from dataclasses import dataclass

from db.connection import Database
from db.init_db import create_tables
from repositories.post_repo import PostRepository
from repositories.question_repo import QuestionRepository
from repositories.user_repo import UserRepository
from services.admin_service import AdminService
from services.post_service import PostService
from services.question_service import QuestionService
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Services:
    users: UserService
    posts: PostService
    questions: QuestionService
    admin: AdminService


def build_services(db: Database) -> Services:
    """Create one repository per table over `db` and the services using them."""
    user_repo = UserRepository(db)
    post_repo = PostRepository(db)
    question_repo = QuestionRepository(db)
    return Services(
        users=UserService(user_repo),
        posts=PostService(post_repo, user_repo, question_repo),
        questions=QuestionService(question_repo),
        admin=AdminService(user_repo, post_repo, question_repo),
    )


def bootstrap(db: Database) -> Services:
    """Create missing tables on an open `db` and return the wired services."""
    create_tables(db)
    services = build_services(db)
    logger.info("✅ Services ready.")
    return services


def main() -> None:
    logger.info("🚀 Bootstrapping LocalEyes schema...")
    with Database() as db:
        bootstrap(db)
    logger.info("Schema bootstrap finished.")


if __name__ == "__main__":
    main()
