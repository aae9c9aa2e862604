"""
models/user.py
--------------
Domain model for a LocalEyes user.
"""

import uuid
from dataclasses import dataclass, field


@dataclass
class User:
    """
    Represents a registered user.

    Attributes:
        id: Primary key (a UUID4 string).
        username: Unique, case-sensitive login name.
        password: SHA-256 hex digest of the password.
        city: City the user lives in.
        dwelling_age: Years lived in the city.
        tag: 'resident' or 'newbie', derived from dwelling_age.
        is_active: False once the user deactivates their account.
        notification: Pending notifications, oldest first.
    """
    username: str
    password: str
    city: str
    dwelling_age: int
    tag: str
    is_active: bool = True
    notification: list[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __str__(self) -> str:
        status = "active" if self.is_active else "inactive"
        return f"{self.username} ({self.tag}, {self.city}) [{status}]"
