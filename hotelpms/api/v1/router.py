"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints.
"""
from fastapi import APIRouter

from hotelpms.api.v1 import calendar, reservations

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(calendar.router)
router.include_router(reservations.router)
