"""System endpoints: health check and version info."""

from fastapi import APIRouter

from screenspec import __version__
from screenspec.api.dependencies import get_bundle
from screenspec.api.models import HealthResponse

router = APIRouter(tags=["system"])


@router.get("/api/health", response_model=HealthResponse)
@router.get("/health")  # Keep both for compatibility
def health_check():
    """Health check endpoint."""
    return HealthResponse(version=__version__, bundle_dir=str(get_bundle().root))
