"""JWT session token service.

Issues and verifies the signed session tokens that carry an account's ID
and role between requests.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTService:
    """Service for creating and validating session tokens.

    The signing secret is injected at construction; the service never reads
    configuration on its own.
    """

    ALGORITHM = "HS256"
    ISSUER = "fleetgrid"

    def __init__(self, secret_key: str, expire_days: int = 7) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens.
            expire_days: Session lifetime in days.
        """
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self.expire_days = expire_days

    @property
    def expires_delta(self) -> timedelta:
        return timedelta(days=self.expire_days)

    def get_expires_in(self) -> int:
        """Session lifetime in seconds, used as the cookie Max-Age."""
        return int(self.expires_delta.total_seconds())

    def create_session_token(
        self,
        account_id: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a session token.

        Args:
            account_id: The account's unique identifier.
            role: The account's role at sign-in time.
            expires_delta: Custom expiration time. Defaults to ``expire_days``.

        Returns:
            Encoded JWT session token.
        """
        if expires_delta is None:
            expires_delta = self.expires_delta

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": account_id,
            "iat": now,
            "exp": now + expires_delta,
            "id": account_id,
            "role": role,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a session token.

        Args:
            token: The encoded JWT token.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or lacks an account ID.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

        if not isinstance(payload.get("id"), str):
            raise InvalidTokenError("Token has no account ID")
        return payload
