from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional


class JWTManagerInterface(ABC):
    """Abstract interface for JWT access token management."""

    @abstractmethod
    def create_access_token(
        self, data: dict, expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create an access token for user authentication.

        Args:
            data (dict): Data to encode in the access token.
            expires_delta (Optional[timedelta]): Custom expiration time.

        Returns:
            str: Encoded access token.
        """
        pass

    @abstractmethod
    def decode_access_token(self, token: str) -> dict:
        """Decode and validate an access token.

        Args:
            token (str): The access token to decode.

        Returns:
            dict: Decoded token data.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or malformed.
        """
        pass
