"""
JWT token utilities for authentication.

This module provides the token issuer used to sign and validate session
tokens. One issuer is built per application from its settings.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from pydantic import ValidationError
from backend.app.core.config import Settings
from backend.app.core.exceptions import InvalidTokenError
from backend.app.schemas.auth import Identity


class TokenIssuer:
    """
    Signs and validates stateless session tokens.

    Example payload:
        {
            "sub": "engineer1",
            "user_id": 2,
            "role": "engineer",
            "iat": 1704096000,
            "exp": 1704182400
        }
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 24 * 60):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def create_access_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None,
        issued_at: Optional[datetime] = None,
    ) -> str:
        """
        Create a JWT access token.

        Args:
            data: Data payload to encode in the token (sub, user_id, role)
            expires_delta: Optional custom lifetime, defaults to the configured expiry
            issued_at: Issue time, defaults to now

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()
        now = issued_at or datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.expire_minutes))

        to_encode.update({"iat": now, "exp": expire})
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def issue(self, user_id: int, username: str, role: str) -> str:
        return self.create_access_token({"sub": username, "user_id": user_id, "role": role})

    def decode_access_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Decode and validate a JWT access token.

        Returns:
            Decoded token payload if signature and expiry are valid, None otherwise
        """
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

    def verify(self, token: str) -> Identity:
        """Resolve a token to the caller identity or raise InvalidTokenError."""
        payload = self.decode_access_token(token)
        if payload is None:
            raise InvalidTokenError()

        try:
            return Identity(
                id=payload["user_id"],
                username=payload["sub"],
                role=payload["role"],
            )
        except (KeyError, ValidationError):
            raise InvalidTokenError()
