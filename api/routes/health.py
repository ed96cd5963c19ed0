"""Health check route"""

from datetime import datetime, timezone

from fastapi import APIRouter

from adapters import gemini_adapter
from app.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    """Liveness probe; also reports whether AI generation is live or on fallback"""
    return {
        "success": True,
        "message": "NutriPlan API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment.value,
        "ai_available": gemini_adapter.is_available(),
    }
