from fastapi import APIRouter, Depends, status

from vloghub.api.deps import get_settings, get_store
from vloghub.core.config import Settings
from vloghub.db.store import Store
from vloghub.schemas.user import DeletedCount, UpdatedCount, User, UserCreate, UserUpdate
from vloghub.services import user as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[User])
def get_all_users(store: Store = Depends(get_store)):
    """All users, newest first."""
    return user_service.list_users(store)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_new_user(
    user_data: UserCreate,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Create a new user with the default password.

    is_active is set when status is "active".
    """
    return user_service.create_user(store, settings, user_data)


@router.put("/{user_id}", response_model=UpdatedCount)
def update_user_by_id(
    user_id: int,
    user_data: UserUpdate,
    store: Store = Depends(get_store),
):
    """Partially update a user. Returns how many rows changed (0 when the user does not exist)."""
    return user_service.update_user(store, user_id, user_data)


@router.delete("/{user_id}", response_model=DeletedCount)
def delete_user_by_id(user_id: int, store: Store = Depends(get_store)):
    return user_service.delete_user(store, user_id)
