"""Domain layer errors."""

from datetime import datetime


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (bad body, bad pagination, flagged content)."""

    pass


class AuthenticationRequiredError(DomainError):
    """Raised when a write is attempted without an authenticated identity."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to remove content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to delete {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class RateLimitExceededError(DomainError):
    """Raised when an identity has used up its quota for the current window.

    Carries the retry guidance a client needs to show a countdown.
    """

    def __init__(self, limit: int, remaining: int, reset_at: datetime):
        self.limit = limit
        self.remaining = remaining
        self.reset_at = reset_at
        super().__init__("Rate limit exceeded. Please try again later.")
