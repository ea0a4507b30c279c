"""
Health endpoint

Liveness only; it does not touch the store.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from src.config.config import Config

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check():
    """Simple health check endpoint for monitoring and load balancing"""
    return {
        "status": "ok",
        "environment": Config.APP_ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
