"""
API v1 router setup
Public routes only: availability lookup, booking intake and confirmation links
"""
from fastapi import APIRouter

from app.api.v1.public import availability, bookings

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required, rate limited)
# ============================================================================
api_v1_router.include_router(
    availability.router,
    prefix="/public",
    tags=["Public"]
)

api_v1_router.include_router(
    bookings.router,
    prefix="/public",
    tags=["Public"]
)
