"""
Shift API endpoints.

Everyone lists the shifts they may see; only admins create, replace or
delete them.
"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.core.dependencies import get_current_user
from backend.app.core.guards import require_admin
from backend.app.db.session import get_db
from backend.app.schemas.auth import Identity
from backend.app.schemas.shift import CreatedResponse, MessageResponse, ShiftCreate, ShiftResponse
from backend.app.services import shifts as shift_service

router = APIRouter(prefix="/shifts", tags=["Shifts"])


@router.get("", response_model=List[ShiftResponse])
async def list_shifts(
    current_user: Identity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """All shifts for admins, own shifts for engineers. Latest start first."""
    return await shift_service.list_shifts(db, current_user)


@router.post("", response_model=CreatedResponse)
async def create_shift(
    payload: ShiftCreate,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    shift_id = await shift_service.create_shift(db, admin, payload)
    return CreatedResponse(id=shift_id, message="Shift created successfully")


@router.put("/{shift_id}", response_model=MessageResponse)
async def update_shift(
    shift_id: int,
    payload: ShiftCreate,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Replace a shift. Returns 404 if it does not exist."""
    await shift_service.update_shift(db, admin, shift_id, payload)
    return MessageResponse(message="Shift updated successfully")


@router.delete("/{shift_id}", response_model=MessageResponse)
async def delete_shift(
    shift_id: int,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await shift_service.delete_shift(db, admin, shift_id)
    return MessageResponse(message="Shift deleted successfully")
