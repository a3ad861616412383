"""
Credential store.

Lookup, listing and provisioning of user accounts, plus the idempotent
bootstrap of the default admin and engineer accounts.
"""

import logging
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.core.exceptions import DuplicateUsernameError
from backend.app.core.security import get_password_hash
from backend.app.db.session import storage_errors
from backend.app.models.enums import UserRole
from backend.app.models.user import User

logger = logging.getLogger("equipment_monitoring.credentials")

# username, password, role, full_name
SEED_USERS = (
    ("admin", "admin123", UserRole.ADMIN, "Administrator"),
    ("engineer1", "eng123", UserRole.ENGINEER, "Test Engineer"),
)


async def find_by_username(db: AsyncSession, username: str) -> Optional[User]:
    async with storage_errors(db, "find user by username"):
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()


async def find_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    async with storage_errors(db, "find user by id"):
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()


async def list_all(db: AsyncSession) -> List[User]:
    """All accounts ordered by id. Callers serialize without password_hash."""
    async with storage_errors(db, "list users"):
        result = await db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())


async def create_user(
    db: AsyncSession,
    username: str,
    password: str,
    role: UserRole = UserRole.ENGINEER,
    full_name: Optional[str] = None,
) -> User:
    """
    Provision a new account.

    Raises:
        DuplicateUsernameError: if the username is taken
    """
    user = User(
        username=username,
        password_hash=get_password_hash(password),
        role=UserRole(role).value,
        full_name=full_name,
    )

    try:
        async with storage_errors(db, "create user"):
            db.add(user)
            await db.commit()
            await db.refresh(user)
    except IntegrityError:
        raise DuplicateUsernameError(username)

    logger.info("Created user %s (%s)", user.username, user.role)
    return user


async def bootstrap_seed(db: AsyncSession) -> int:
    """
    Insert the default accounts if they are absent.

    Existing accounts are left untouched, so running this twice never
    creates duplicates or resets passwords.

    Returns:
        Number of accounts created
    """
    created = 0
    for username, password, role, full_name in SEED_USERS:
        if await find_by_username(db, username) is not None:
            continue
        try:
            await create_user(db, username, password, role, full_name)
            created += 1
        except DuplicateUsernameError:
            # Another process inserted it between lookup and insert
            logger.debug("Seed user %s already present", username)

    if created:
        logger.info("Seeded %d default user(s)", created)
    return created
