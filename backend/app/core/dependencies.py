"""
Authentication dependencies for FastAPI.

This module provides dependencies for protecting routes with JWT authentication.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from backend.app.core.context import AppContext, get_context
from backend.app.core.exceptions import MissingCredentialsError
from backend.app.schemas.auth import Identity

# HTTP Bearer security scheme. Missing headers are reported by get_current_user.
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    context: AppContext = Depends(get_context),
) -> Identity:
    """
    FastAPI dependency for JWT authentication.

    Tokens are stateless: the identity comes from the verified claims and no
    revocation list is consulted.

    Raises:
        MissingCredentialsError: 401 if no bearer token is sent
        InvalidTokenError: 403 if the token is expired, tampered or malformed
    """
    if credentials is None or not credentials.credentials:
        raise MissingCredentialsError()

    return context.tokens.verify(credentials.credentials)
