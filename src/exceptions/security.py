class BaseSecurityError(Exception):
    """Base exception class for security-related errors."""

    def __init__(self, message=None) -> None:
        if message is None:
            message = "A security error occurred."
        super().__init__(message)


class TokenExpiredError(BaseSecurityError):
    """Raised when a JWT access token has passed its expiration time."""

    def __init__(self, message="Token has expired.") -> None:
        super().__init__(message)


class InvalidTokenError(BaseSecurityError):
    """Raised when a JWT access token cannot be decoded or validated."""

    def __init__(self, message="Invalid token.") -> None:
        super().__init__(message)
