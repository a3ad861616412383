"""
User management API endpoints (admin only).
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.core.guards import require_admin
from backend.app.db.session import get_db
from backend.app.schemas.auth import Identity
from backend.app.schemas.user import UserCreate, UserResponse
from backend.app.services import credentials

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserResponse])
async def list_users(
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """List every account. Password hashes are never included."""
    users = await credentials.list_all(db)
    return [UserResponse.model_validate(user) for user in users]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Provision a new account. Returns 409 if the username is taken."""
    user = await credentials.create_user(
        db,
        username=payload.username,
        password=payload.password,
        role=payload.role,
        full_name=payload.full_name,
    )
    return UserResponse.model_validate(user)
