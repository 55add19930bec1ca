"""
Widget support routes for the Zobot chatbot.

Simulated image upload and the legacy intelligence endpoint kept for older
widget builds.
"""

import logging

from fastapi import APIRouter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload")
async def upload():
    """Accept a listing photo (simulated; nothing is stored)."""
    logger.info("Upload received (simulated)")
    return {"ok": True, "message": "Upload simulated"}


@router.post("/monitor/intelligence")
async def monitor_intelligence():
    """Legacy endpoint; the widget now talks to /api/chat."""
    return {"ok": True, "reply": "Please use /api/chat for the new flow."}
