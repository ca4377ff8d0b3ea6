"""Test configuration and helpers."""

from uuid import uuid4

from discuss.config import AuthSettings
from discuss.domain.value import UserId
from discuss.util.jwt import create_token

# Longest body the service accepts, written like prose so the spam
# heuristics leave it alone
MAX_LENGTH_BODY = ("abc " * 124) + "abcd"


def make_user_id() -> UserId:
    """Fresh external identity for a test user."""
    return UserId(uuid4())


def make_token(user_id: UserId | str, username: str = "tester", role: str = "user") -> str:
    """Sign a session token the way the site's auth system would.

    Uses the default AuthSettings, which is what the test container
    loads when no AUTH__* variables are set.

    Args:
        user_id: User the token identifies
        username: Display name
        role: Site role ("moderator" grants deletion rights)

    Returns:
        Encoded JWT
    """
    return create_token(str(user_id), username, role, AuthSettings())
