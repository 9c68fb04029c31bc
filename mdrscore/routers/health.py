"""Health check endpoint."""
from datetime import datetime, timezone

from fastapi import APIRouter

from mdrscore.config import get_settings
from mdrscore.models import HealthResponse
from mdrscore.scoring.scoring_config import PARAM_VERSION

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check health status of the API and report the scoring parameter version."
)
async def health_check():
    """The engine has no external dependencies, so a running app is healthy."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        scoring_version=PARAM_VERSION,
    )
