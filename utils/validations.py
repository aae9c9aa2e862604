"""
utils/validations.py
--------------------
Input validation run by the services before any repository call.
"""

from config import RESERVED_USERNAMES, RESIDENT_THRESHOLD_YEARS
from models.post import POST_TYPES

_PASSWORD_SPECIALS = "@#$%^*"
_MIN_PASSWORD_LENGTH = 6


class ValidationError(ValueError):
    """Raised when user-supplied input is rejected."""


def is_reserved_username(username: str) -> bool:
    return username in RESERVED_USERNAMES


def validate_username(username: str) -> None:
    """
    Reject empty and reserved usernames.

    Raises:
        ValidationError: If the username can never belong to a user.
    """
    if not username or not username.strip():
        raise ValidationError("Username is required")
    if is_reserved_username(username):
        raise ValidationError(f"Username '{username}' is reserved")


def validate_password(password: str) -> None:
    """
    Passwords need at least 6 characters, one of @#$%^* and a digit.

    Raises:
        ValidationError: If the password is too weak.
    """
    if (
        len(password) < _MIN_PASSWORD_LENGTH
        or not any(c in _PASSWORD_SPECIALS for c in password)
        or not any(c.isdigit() for c in password)
    ):
        raise ValidationError(
            "Password must be at least 6 characters and contain a digit "
            f"and one of {_PASSWORD_SPECIALS}"
        )


def validate_post_type(post_type: str) -> None:
    if post_type not in POST_TYPES:
        raise ValidationError(f"Invalid post type '{post_type}', expected one of {', '.join(POST_TYPES)}")


def validate_filter(post_type: str) -> None:
    """Like `validate_post_type`, but an empty filter (meaning "all") is allowed."""
    if post_type:
        validate_post_type(post_type)


def validate_post(title: str, content: str, post_type: str) -> None:
    if not title:
        raise ValidationError("Required field 'title' is missing")
    if not content:
        raise ValidationError("Required field 'content' is missing")
    if not post_type:
        raise ValidationError("Required field 'type' is missing")
    validate_post_type(post_type)


def derive_tag(dwelling_years: float) -> str:
    """'resident' once a user has lived in the city longer than the threshold."""
    return "resident" if dwelling_years > RESIDENT_THRESHOLD_YEARS else "newbie"
