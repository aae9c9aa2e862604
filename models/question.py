"""
models/question.py
------------------
Domain model for a question asked on a post.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Question:
    """
    Represents a question and its replies.

    Attributes:
        post_id: Post the question was asked on.
        user_id: Asking user's id.
        text: The question itself.
        replies: Answers in the order they were given; append-only.
        id: Primary key (a UUID4 string).
        created_at: Creation timestamp (UTC).
    """
    post_id: str
    user_id: str
    text: str
    replies: list[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        return f"{self.text} ({len(self.replies)} replies)"
