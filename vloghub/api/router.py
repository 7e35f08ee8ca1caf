from fastapi import APIRouter

from vloghub.api.routers import auth, backend, stats, uploads, users, vlogs
from vloghub.core.config import Settings


def build_api_router(settings: Settings) -> APIRouter:
    """Routes under /api. Optional surfaces are included according to settings."""
    api_router = APIRouter()

    api_router.include_router(auth.router)
    api_router.include_router(users.router)
    api_router.include_router(stats.router)
    api_router.include_router(backend.router)

    if settings.expose_reset_tokens:
        api_router.include_router(auth.debug_router)

    # The vlog features live on the hosted backend only
    if settings.uses_hosted_backend:
        api_router.include_router(vlogs.router)
        api_router.include_router(uploads.router)

    return api_router
