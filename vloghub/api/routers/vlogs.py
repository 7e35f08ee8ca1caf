from fastapi import APIRouter, Depends, Query, status

from vloghub.api.deps import get_current_user_id, get_store
from vloghub.db.store import Store
from vloghub.schemas.user import DeletedCount
from vloghub.schemas.vlog import (
    Category,
    CategoryCreate,
    Comment,
    CommentCreate,
    FollowToggled,
    LikeCount,
    LikeToggled,
    Profile,
    ViewCount,
    Vlog,
    VlogCreate,
    VlogUpdate,
)
from vloghub.services import vlog as vlog_service

router = APIRouter(tags=["vlogs"])


@router.get("/vlog-categories", response_model=list[Category])
def get_categories(store: Store = Depends(get_store)):
    return vlog_service.list_categories(store)


@router.post("/vlog-categories", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryCreate,
    store: Store = Depends(get_store),
    _user_id: int = Depends(get_current_user_id),
):
    return vlog_service.create_category(store, data)


@router.get("/vlogs", response_model=list[Vlog])
def get_vlogs(
    user_id: int | None = Query(None, description="Only vlogs by this author"),
    category_id: int | None = Query(None, description="Only vlogs in this category"),
    store: Store = Depends(get_store),
):
    """Vlogs newest first."""
    return vlog_service.list_vlogs(store, user_id=user_id, category_id=category_id)


@router.post("/vlogs", response_model=Vlog, status_code=status.HTTP_201_CREATED)
def create_vlog(
    data: VlogCreate,
    store: Store = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    """Publish a vlog as the authenticated user."""
    return vlog_service.create_vlog(store, user_id, data)


@router.get("/vlogs/{vlog_id}", response_model=Vlog)
def get_vlog(vlog_id: int, store: Store = Depends(get_store)):
    return vlog_service.get_vlog(store, vlog_id)


@router.put("/vlogs/{vlog_id}", response_model=Vlog)
def update_vlog(
    vlog_id: int,
    data: VlogUpdate,
    store: Store = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    """Update a vlog. Only its author may do this."""
    return vlog_service.update_vlog(store, user_id, vlog_id, data)


@router.delete("/vlogs/{vlog_id}", response_model=DeletedCount)
def delete_vlog(
    vlog_id: int,
    store: Store = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return vlog_service.delete_vlog(store, user_id, vlog_id)


@router.post("/vlogs/{vlog_id}/views", response_model=ViewCount)
def record_view(vlog_id: int, store: Store = Depends(get_store)):
    return vlog_service.record_view(store, vlog_id)


@router.get("/vlogs/{vlog_id}/comments", response_model=list[Comment])
def get_comments(vlog_id: int, store: Store = Depends(get_store)):
    """Approved comments, newest first."""
    return vlog_service.list_comments(store, vlog_id)


@router.post(
    "/vlogs/{vlog_id}/comments", response_model=Comment, status_code=status.HTTP_201_CREATED
)
def add_comment(
    vlog_id: int,
    data: CommentCreate,
    store: Store = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    return vlog_service.add_comment(store, user_id, vlog_id, data)


@router.get("/vlogs/{vlog_id}/likes", response_model=LikeCount)
def get_likes(vlog_id: int, store: Store = Depends(get_store)):
    return vlog_service.get_likes(store, vlog_id)


@router.post("/vlogs/{vlog_id}/like", response_model=LikeToggled)
def toggle_like(
    vlog_id: int,
    store: Store = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    """Like the vlog, or unlike it if the caller already does."""
    return vlog_service.toggle_like(store, user_id, vlog_id)


@router.get("/profiles/{user_id}", response_model=Profile)
def get_profile(user_id: int, store: Store = Depends(get_store)):
    return vlog_service.get_profile(store, user_id)


@router.post("/profiles/{user_id}/follow", response_model=FollowToggled)
def toggle_follow(
    user_id: int,
    store: Store = Depends(get_store),
    follower_id: int = Depends(get_current_user_id),
):
    """Follow a creator, or unfollow if already following."""
    return vlog_service.toggle_follow(store, follower_id, user_id)
