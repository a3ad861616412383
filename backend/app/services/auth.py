"""
Login service.

Checks credentials against the credential store and issues session tokens.
"""

import logging
from typing import Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.core.exceptions import InvalidCredentialsError
from backend.app.core.jwt import TokenIssuer
from backend.app.core.security import dummy_verify, verify_password
from backend.app.models.user import User
from backend.app.services import credentials

logger = logging.getLogger("equipment_monitoring.auth")


async def login(
    db: AsyncSession,
    tokens: TokenIssuer,
    username: str,
    password: str,
) -> Tuple[str, User]:
    """
    Authenticate a user and issue a session token.

    Unknown usernames and wrong passwords raise the same error after the
    same amount of hashing work.

    Raises:
        InvalidCredentialsError: on any credential mismatch
    """
    user = await credentials.find_by_username(db, username)

    if user is None:
        dummy_verify()
        logger.warning("Failed login for unknown username %r", username)
        raise InvalidCredentialsError()

    if not verify_password(password, user.password_hash):
        logger.warning("Failed login for user id=%s", user.id)
        raise InvalidCredentialsError()

    token = tokens.issue(user_id=user.id, username=user.username, role=user.role)
    logger.info("User id=%s logged in", user.id)
    return token, user
