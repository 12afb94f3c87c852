"""Health check router."""

from fastapi import APIRouter

from app.utils.time import utc_now_iso

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness probe. Does not touch the database."""
    return {"status": "OK", "timestamp": utc_now_iso()}
