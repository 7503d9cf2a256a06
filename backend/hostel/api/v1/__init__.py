"""Versioned API router."""

from fastapi import APIRouter

from . import auth, availability, functions, health, reservations, rooms

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(rooms.router, prefix="/rooms", tags=["rooms"])
router.include_router(
    reservations.router, prefix="/reservations", tags=["reservations"]
)
router.include_router(availability.router, tags=["availability"])
# Public entry points for the booking bot
router.include_router(functions.router, prefix="/functions", tags=["functions"])

__all__ = ["router"]
