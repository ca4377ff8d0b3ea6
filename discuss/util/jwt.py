"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from pydantic import BaseModel, ValidationError, field_validator

from discuss.config import AuthSettings

MODERATOR_ROLES = frozenset({"admin", "moderator"})


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    username: str
    role: str = "user"
    exp: datetime

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        """User IDs are UUIDs; reject anything else at verification time."""
        UUID(v)
        return v

    @property
    def is_moderator(self) -> bool:
        """Whether the holder may moderate other users' comments."""
        return self.role.lower() in MODERATOR_ROLES


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str, username: str, role: str, settings: AuthSettings
) -> str:
    """Create a JWT token for the user.

    Args:
        user_id: User ID
        username: Display name
        role: Site role
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "username": username,
        "role": role,
        "exp": expiry,
    }

    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    return token


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
    except ValidationError:
        raise JWTError("Invalid token payload")
