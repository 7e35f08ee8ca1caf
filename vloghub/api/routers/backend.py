from fastapi import APIRouter, Depends

from vloghub.api.deps import get_settings, get_store
from vloghub.core.config import Settings
from vloghub.db.store import Store
from vloghub.schemas.backend import BackendStatus, MigrationResult
from vloghub.schemas.user import Stats
from vloghub.services import backend as backend_service

router = APIRouter(prefix="/backend", tags=["backend"])


@router.get("/status", response_model=BackendStatus)
def get_backend_status(settings: Settings = Depends(get_settings)):
    """Whether a hosted DATABASE_URL is configured."""
    return backend_service.get_status(settings)


@router.get("/stats", response_model=Stats)
def get_backend_stats(
    settings: Settings = Depends(get_settings),
    store: Store = Depends(get_store),
):
    return backend_service.get_hosted_stats(settings, store)


@router.post("/migrate", response_model=MigrationResult)
def migrate_to_backend(
    settings: Settings = Depends(get_settings),
    store: Store = Depends(get_store),
):
    """Copy users from the embedded SQLite file into the hosted store."""
    return backend_service.migrate_embedded_users(settings, store)
