"""
User management schemas for admin endpoints.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from backend.app.models.enums import UserRole


class UserCreate(BaseModel):
    """Schema for provisioning a new account."""
    username: str = Field(..., min_length=3, max_length=100, description="Unique username")
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    role: UserRole = Field(default=UserRole.ENGINEER, description="User role (defaults to engineer)")
    full_name: Optional[str] = Field(default=None, max_length=200)


class UserResponse(BaseModel):
    id: int
    username: str
    role: UserRole
    full_name: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
