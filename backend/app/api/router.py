"""
API Router.

Aggregates all endpoints mounted under /api.
"""

from fastapi import APIRouter
from backend.app.api.endpoints import auth, shifts, reports, users

router = APIRouter()

router.include_router(auth.router)
router.include_router(shifts.router)
router.include_router(reports.router)
router.include_router(users.router)
