from datetime import timedelta, datetime, timezone
from typing import Optional

from jose import jwt, ExpiredSignatureError, JWTError

from exceptions.security import TokenExpiredError, InvalidTokenError
from security.interfaces import JWTManagerInterface


class JWTManager(JWTManagerInterface):
    """Issues and validates the access tokens that carry the session user id."""

    def __init__(
        self,
        access_secret_key: str,
        access_expires_delta: int,
        algorithm: str
    ) -> None:
        """Initialize the JWT manager with configuration.

        Args:
            access_secret_key (str): Secret key for signing access tokens.
            access_expires_delta (int): Access token expiration time in minutes.
            algorithm (str): JWT signing algorithm (e.g., 'HS256').
        """
        self.access_expires_delta: timedelta = timedelta(
            minutes=access_expires_delta
        )
        self._access_secret_key = access_secret_key
        self._algorithm = algorithm

    def create_access_token(
        self,
        data: dict,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + (
            expires_delta if expires_delta else self.access_expires_delta
        )
        to_encode.update({"exp": expire})

        return jwt.encode(
            to_encode,
            key=self._access_secret_key,
            algorithm=self._algorithm
        )

    def decode_access_token(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self._access_secret_key,
                algorithms=[self._algorithm]
            )
        except ExpiredSignatureError:
            raise TokenExpiredError
        except JWTError:
            raise InvalidTokenError
