"""System API — health check."""

from fastapi import APIRouter

from assistant.config import settings

router = APIRouter(tags=["system"])


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "model": settings.completion_model,
        "completion_configured": bool(settings.openai_api_key),
    }
