"""
Shift Pydantic schemas.

Defines request and response models for shift scheduling.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class ShiftCreate(BaseModel):
    """Schema for creating or replacing a shift (admin only)."""
    user_id: int = Field(..., description="Engineer the shift is assigned to")
    start_time: datetime
    end_time: datetime
    description: Optional[str] = None


class ShiftResponse(BaseModel):
    """Shift enriched with the owner's username and display name."""
    id: int
    user_id: int
    start_time: datetime
    end_time: datetime
    description: Optional[str] = None
    created_at: datetime
    username: str
    full_name: Optional[str] = None


class CreatedResponse(BaseModel):
    id: int
    message: str


class MessageResponse(BaseModel):
    message: str
