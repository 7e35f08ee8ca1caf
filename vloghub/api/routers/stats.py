from fastapi import APIRouter, Depends

from vloghub.api.deps import get_store
from vloghub.db.store import Store
from vloghub.schemas.user import Stats
from vloghub.services import user as user_service

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=Stats)
def get_stats(store: Store = Depends(get_store)):
    return user_service.get_stats(store)
