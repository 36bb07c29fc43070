"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from config.config import Config
from config.profile import PROFILE_VERSION
from server.schemas.responses import HealthResponseDTO

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponseDTO)
async def health_check():
    """Health check endpoint. Configuration gaps are reported, not fatal."""
    return HealthResponseDTO(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version="1.0.0",
        retrieval_profile=PROFILE_VERSION,
        warnings=Config().validate(),
    )
