"""
Report API endpoints.

Any authenticated user files reports as themselves, with or without a
voice memo. Reports cannot be edited or deleted.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.core.context import AppContext, get_context
from backend.app.core.dependencies import get_current_user
from backend.app.db.session import get_db
from backend.app.schemas.auth import Identity
from backend.app.schemas.report import ReportCreate, ReportCreatedResponse, ReportResponse
from backend.app.services import reports as report_service

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("", response_model=List[ReportResponse])
async def list_reports(
    current_user: Identity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """All reports for admins, own reports for engineers. Newest first."""
    return await report_service.list_reports(db, current_user)


@router.post("", response_model=ReportCreatedResponse, response_model_exclude_none=True)
async def create_report(
    payload: ReportCreate,
    current_user: Identity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    report_id = await report_service.create_text_report(db, current_user, payload)
    return ReportCreatedResponse(id=report_id, message="Report created successfully")


@router.post("/audio", response_model=ReportCreatedResponse)
async def create_audio_report(
    status: str = Form(...),
    equipment_id: Optional[str] = Form(None, max_length=100),
    description: Optional[str] = Form(None),
    audio: Optional[UploadFile] = File(None),
    current_user: Identity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    context: AppContext = Depends(get_context),
):
    """
    File a report with a voice memo (multipart form, file field "audio").

    Only audio/* uploads up to the configured size limit are accepted.
    """
    payload = ReportCreate(equipment_id=equipment_id, status=status, description=description)
    report_id, audio_file = await report_service.create_audio_report(
        db, current_user, payload, audio, context.attachments
    )
    return ReportCreatedResponse(
        id=report_id,
        message="Audio report created successfully",
        audio_file=audio_file,
    )


@router.get("/audio/{audio_file}", response_class=FileResponse)
async def download_audio(
    audio_file: str,
    current_user: Identity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    context: AppContext = Depends(get_context),
):
    """Stream a stored voice memo belonging to a report the caller can see."""
    path = await report_service.get_audio_path(db, current_user, audio_file, context.attachments)
    return FileResponse(path, filename=audio_file)
