# app/webhooks/router.py
from fastapi import APIRouter

webhook_router = APIRouter()

# Import handlers inside a function to avoid circular imports
def register_handlers():
    from app.webhooks import vapi_handler
    webhook_router.include_router(vapi_handler.router, prefix="/vapi")

register_handlers()

@webhook_router.get("/")
async def webhook_info():
    return {
        "endpoints": {
            "voice_assistant_bookings": "/webhooks/vapi/bookings",
        },
        "note": "POST with an x-vapi-secret header and an 'action' field"
    }
