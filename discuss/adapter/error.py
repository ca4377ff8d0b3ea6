"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class RateLimiterUnavailableError(AdapterError):
    """The rate limiter backend could not be reached."""

    pass
