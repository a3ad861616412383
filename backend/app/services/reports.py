"""
Report record store.

Reports form an append-only log: they are created by the caller as
themselves and never updated or deleted.
"""

import logging
from typing import List, Optional
from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.core.exceptions import InvalidStatusError, ResourceNotFoundError, StorageError
from backend.app.core.guards import OwnershipGuard, scope_to_owner
from backend.app.db.session import storage_errors
from backend.app.models.enums import ReportStatus
from backend.app.models.report import Report
from backend.app.models.user import User
from backend.app.schemas.auth import Identity
from backend.app.schemas.report import ReportCreate, ReportResponse
from backend.app.services import credentials
from backend.app.services.attachments import AttachmentStore

logger = logging.getLogger("equipment_monitoring.reports")
ownership_guard = OwnershipGuard()


def validate_status(value: str) -> str:
    try:
        return ReportStatus(value).value
    except ValueError:
        raise InvalidStatusError(value, ReportStatus.values())


async def list_reports(db: AsyncSession, identity: Identity) -> List[ReportResponse]:
    """Scoped reports, newest first."""
    query = (
        select(Report, User.username, User.full_name)
        .join(User, Report.user_id == User.id)
        .order_by(Report.created_at.desc(), Report.id.desc())
    )
    query = scope_to_owner(query, Report.user_id, identity)

    async with storage_errors(db, "list reports"):
        result = await db.execute(query)
        rows = result.all()

    return [
        ReportResponse(
            id=report.id,
            user_id=report.user_id,
            equipment_id=report.equipment_id,
            status=report.status,
            description=report.description,
            audio_file=report.audio_file,
            created_at=report.created_at,
            username=username,
            full_name=full_name,
        )
        for report, username, full_name in rows
    ]


async def _insert(db: AsyncSession, identity: Identity, payload: ReportCreate,
                  audio_file: Optional[str] = None) -> int:
    report = Report(
        user_id=identity.id,
        equipment_id=payload.equipment_id,
        status=validate_status(payload.status),
        description=payload.description,
        audio_file=audio_file,
    )

    try:
        async with storage_errors(db, "create report"):
            db.add(report)
            await db.commit()
    except IntegrityError as exc:
        # Status is already valid here; a token for a vanished user trips the FK
        if await credentials.find_by_id(db, identity.id) is None:
            raise ResourceNotFoundError("User", identity.id) from exc
        raise StorageError("create report") from exc

    logger.info("User id=%s filed report id=%s (%s)", identity.id, report.id, report.status)
    return report.id


async def create_text_report(db: AsyncSession, identity: Identity, payload: ReportCreate) -> int:
    return await _insert(db, identity, payload)


async def create_audio_report(
    db: AsyncSession,
    identity: Identity,
    payload: ReportCreate,
    audio: Optional[UploadFile],
    attachments: AttachmentStore,
) -> tuple:
    """
    File a report with an optional voice memo.

    The status is checked before anything is written. The blob is stored
    before the row is committed and removed again if the commit fails.

    Returns:
        (report id, stored audio file name or None)
    """
    validate_status(payload.status)

    audio_file = None
    if audio is not None:
        audio_file = await attachments.save(audio)

    try:
        report_id = await _insert(db, identity, payload, audio_file)
    except Exception:
        if audio_file:
            await attachments.delete(audio_file)
        raise

    return report_id, audio_file


async def get_audio_path(db: AsyncSession, identity: Identity, audio_file: str, attachments: AttachmentStore):
    """
    Resolve an attachment the caller is allowed to download.

    Raises:
        ResourceNotFoundError: unknown name, missing blob, or a report the caller may not see
    """
    async with storage_errors(db, "load report attachment"):
        result = await db.execute(select(Report).where(Report.audio_file == audio_file))
        report = result.scalar_one_or_none()

    if report is None:
        raise ResourceNotFoundError("Audio file")
    ownership_guard.enforce(report.user_id, identity, "Audio file")

    path = attachments.path_for(audio_file)
    if path is None:
        raise ResourceNotFoundError("Audio file")
    return path
