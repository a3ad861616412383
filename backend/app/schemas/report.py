"""
Report Pydantic schemas.

Status stays a plain string here so that unknown values reach the record
store and are rejected there as a domain error.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class ReportCreate(BaseModel):
    """
    Schema for a text report.

    Any user_id in the body is ignored; the reporter is the caller.
    """
    equipment_id: Optional[str] = Field(None, max_length=100)
    status: str = Field(..., description="working | faulty | maintenance")
    description: Optional[str] = None


class ReportResponse(BaseModel):
    """Report enriched with the reporter's username and display name."""
    id: int
    user_id: int
    equipment_id: Optional[str] = None
    status: str
    description: Optional[str] = None
    audio_file: Optional[str] = None
    created_at: datetime
    username: str
    full_name: Optional[str] = None


class ReportCreatedResponse(BaseModel):
    id: int
    message: str
    audio_file: Optional[str] = None
