"""
Authentication Pydantic schemas.

Defines request and response schemas for authentication endpoints.
"""

from pydantic import BaseModel, Field
from typing import Optional
from backend.app.models.enums import UserRole


class Identity(BaseModel):
    """Caller identity resolved from a valid session token."""
    id: int
    username: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserLogin(BaseModel):
    """
    Schema for user login.

    Used by POST /api/auth/login endpoint.
    """
    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")


class UserSummary(BaseModel):
    """Public view of an account, without the password hash."""
    id: int
    username: str
    role: UserRole
    full_name: Optional[str] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """
    Schema for login response.

    Returned by a successful POST /api/auth/login.
    """
    token: str = Field(..., description="JWT session token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserSummary
