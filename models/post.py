"""
models/post.py
--------------
Domain models for posts and the post-with-questions read view.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

POST_TYPES = ("food", "travel", "shopping", "other")


@dataclass
class Post:
    """
    Represents a post shared by a user.

    Attributes:
        user_id: Owning user's id.
        title: Short headline.
        content: Post body.
        type: One of POST_TYPES.
        likes: Like counter; only ever incremented in the database.
        id: Primary key (a UUID4 string).
        created_at: Creation timestamp (UTC).
    """
    user_id: str
    title: str
    content: str
    type: str  # 'food' | 'travel' | 'shopping' | 'other'
    likes: int = 0
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        return f"[{self.type}] {self.title} ({self.likes} likes)"


@dataclass
class PostQuestion:
    """A question as shown beneath its post."""
    id: str
    text: str
    replies: list[str] = field(default_factory=list)


@dataclass
class PostWithQuestions:
    post: Post
    questions: list[PostQuestion] = field(default_factory=list)
