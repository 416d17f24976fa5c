"""Health check endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {
        "success": True,
        "message": "API is healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
