"""
Health Check Router
Simple health check endpoint
"""
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter

from nkwaboa.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns API status and whether the ledger directory exists yet.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "ledger_dir": settings.DATA_DIR,
        "ledger_present": Path(settings.DATA_DIR).is_dir(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
