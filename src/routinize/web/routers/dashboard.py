"""Dashboard route."""

from fastapi import APIRouter, Query

from ...services.dashboards import build_dashboard

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/{user_id}")
async def dashboard(user_id: str, days: int = Query(default=7, ge=1, le=365)):
    """Nutrition, sleep, mood, wellness and workout summaries."""
    return await build_dashboard(user_id, days=days)
