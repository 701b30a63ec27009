"""Health check and system endpoints."""

from fastapi import APIRouter

from taskstation import __version__
from taskstation.config import settings

router = APIRouter()


@router.get("/version")
async def get_version() -> dict[str, str]:
    """Get API version information.

    Returns:
        Version, environment and where attachments are stored.
    """
    return {
        "version": __version__,
        "environment": settings.environment,
        "file_storage": "s3" if settings.s3_enabled else "inline",
    }
