"""
Authentication API endpoints.

Provides login and current-user endpoints. Logout is client-side: the
client discards its token.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.core.context import AppContext, get_context
from backend.app.core.dependencies import get_current_user
from backend.app.core.exceptions import ResourceNotFoundError
from backend.app.db.session import get_db
from backend.app.schemas.auth import Identity, TokenResponse, UserLogin, UserSummary
from backend.app.services import auth as auth_service
from backend.app.services import credentials

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: UserLogin,
    db: AsyncSession = Depends(get_db),
    context: AppContext = Depends(get_context),
):
    """
    Login user and return a 24 hour session token.

    Wrong passwords and unknown usernames both return 401 "Invalid credentials".
    """
    token, user = await auth_service.login(db, context.tokens, payload.username, payload.password)

    return TokenResponse(token=token, user=UserSummary.model_validate(user))


@router.get("/me", response_model=UserSummary)
async def get_current_user_info(
    current_user: Identity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get current authenticated user information.

    Requires valid JWT token in Authorization header.
    """
    user = await credentials.find_by_id(db, current_user.id)

    if not user:
        raise ResourceNotFoundError("User", current_user.id)

    return UserSummary.model_validate(user)
