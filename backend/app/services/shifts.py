"""
Shift record store.

Admins schedule shifts for engineers; everyone lists the shifts they are
allowed to see.
"""

import logging
from datetime import datetime, timezone
from typing import List
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.core.exceptions import InvalidShiftWindowError, ResourceNotFoundError
from backend.app.core.guards import scope_to_owner
from backend.app.db.session import storage_errors
from backend.app.models.shift import Shift
from backend.app.models.user import User
from backend.app.schemas.auth import Identity
from backend.app.schemas.shift import ShiftCreate, ShiftResponse
from backend.app.services import credentials

logger = logging.getLogger("equipment_monitoring.shifts")


def _naive_utc(value: datetime) -> datetime:
    """Store aware datetimes as naive UTC, leave naive ones as given."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


async def _validated(db: AsyncSession, payload: ShiftCreate) -> dict:
    start_time = _naive_utc(payload.start_time)
    end_time = _naive_utc(payload.end_time)
    if start_time >= end_time:
        raise InvalidShiftWindowError()

    if await credentials.find_by_id(db, payload.user_id) is None:
        raise ResourceNotFoundError("User", payload.user_id)

    return {
        "user_id": payload.user_id,
        "start_time": start_time,
        "end_time": end_time,
        "description": payload.description,
    }


async def list_shifts(db: AsyncSession, identity: Identity) -> List[ShiftResponse]:
    """Scoped shifts, latest start first."""
    query = (
        select(Shift, User.username, User.full_name)
        .join(User, Shift.user_id == User.id)
        .order_by(Shift.start_time.desc(), Shift.id.desc())
    )
    query = scope_to_owner(query, Shift.user_id, identity)

    async with storage_errors(db, "list shifts"):
        result = await db.execute(query)
        rows = result.all()

    return [
        ShiftResponse(
            id=shift.id,
            user_id=shift.user_id,
            start_time=shift.start_time,
            end_time=shift.end_time,
            description=shift.description,
            created_at=shift.created_at,
            username=username,
            full_name=full_name,
        )
        for shift, username, full_name in rows
    ]


async def create_shift(db: AsyncSession, admin: Identity, payload: ShiftCreate) -> int:
    values = await _validated(db, payload)
    shift = Shift(**values)

    async with storage_errors(db, "create shift"):
        db.add(shift)
        await db.commit()

    logger.info("Admin id=%s created shift id=%s for user id=%s", admin.id, shift.id, shift.user_id)
    return shift.id


async def update_shift(db: AsyncSession, admin: Identity, shift_id: int, payload: ShiftCreate) -> None:
    """
    Replace every field of an existing shift. Last write wins.

    Raises:
        ResourceNotFoundError: if the shift or the target user does not exist
    """
    async with storage_errors(db, "load shift"):
        shift = await db.get(Shift, shift_id)
    if shift is None:
        raise ResourceNotFoundError("Shift", shift_id)

    values = await _validated(db, payload)

    async with storage_errors(db, "update shift"):
        for field, value in values.items():
            setattr(shift, field, value)
        await db.commit()

    logger.info("Admin id=%s updated shift id=%s", admin.id, shift_id)


async def delete_shift(db: AsyncSession, admin: Identity, shift_id: int) -> None:
    """Delete a shift. Deleting an id that does not exist also succeeds."""
    async with storage_errors(db, "delete shift"):
        result = await db.execute(delete(Shift).where(Shift.id == shift_id))
        await db.commit()

    logger.info("Admin id=%s deleted shift id=%s (rows=%s)", admin.id, shift_id, result.rowcount)
