"""Health Probe: liveness endpoint for process supervisors."""

from fastapi import APIRouter, status

from calcrpc import __version__

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "calcrpc",
        "version": __version__,
    }
