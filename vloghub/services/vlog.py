"""Vlog service: categories, vlogs, views, comments, likes, follows and public profiles."""

import logging

import vloghub.repositories.user as user_repo
import vloghub.repositories.vlog as vlog_repo
from vloghub.errors import (
    ConstraintViolationError,
    DomainValidationError,
    DuplicateResourceError,
    ForbiddenError,
    NotFoundError,
)
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

logger = logging.getLogger(__name__)


def _get_vlog_or_404(store, vlog_id: int) -> dict:
    vlog = vlog_repo.get_vlog(store, vlog_id)
    if not vlog:
        raise NotFoundError("Vlog not found")
    return vlog


def _get_owned_vlog(store, vlog_id: int, user_id: int) -> dict:
    vlog = _get_vlog_or_404(store, vlog_id)
    if vlog["user_id"] != user_id:
        raise ForbiddenError("You can only modify your own vlogs")
    return vlog


def _check_category(store, category_id: int | None) -> None:
    if category_id is not None and not vlog_repo.get_category(store, category_id):
        raise NotFoundError(f"Category with id {category_id} not found")


def list_categories(store) -> list[Category]:
    return [Category(**row) for row in vlog_repo.list_categories(store)]


def create_category(store, data: CategoryCreate) -> Category:
    name = (data.name or "").strip()
    if not name:
        raise DomainValidationError("name is required")
    try:
        category_id = vlog_repo.create_category(store, name)
    except ConstraintViolationError:
        raise DuplicateResourceError("Category already exists")
    return Category(id=category_id, name=name)


def list_vlogs(store, user_id: int | None = None, category_id: int | None = None) -> list[Vlog]:
    return [Vlog(**row) for row in vlog_repo.list_vlogs(store, user_id=user_id, category_id=category_id)]


def get_vlog(store, vlog_id: int) -> Vlog:
    return Vlog(**_get_vlog_or_404(store, vlog_id))


def create_vlog(store, user_id: int, data: VlogCreate) -> Vlog:
    """
    Publish a vlog for the caller.

    Raises:
        DomainValidationError: If the title is missing or blank.
        NotFoundError: If category_id does not exist.
    """
    if not data.title or not data.title.strip():
        raise DomainValidationError("title is required")
    _check_category(store, data.category_id)

    vlog_id = vlog_repo.create_vlog(
        store,
        user_id=user_id,
        title=data.title.strip(),
        description=data.description,
        category_id=data.category_id,
        video_url=data.video_url,
        thumbnail_url=data.thumbnail_url,
    )
    logger.info("User %s published vlog %s", user_id, vlog_id)
    return get_vlog(store, vlog_id)


def update_vlog(store, user_id: int, vlog_id: int, data: VlogUpdate) -> Vlog:
    """
    Update a vlog owned by the caller. Omitted fields keep their value.

    Raises:
        NotFoundError: If the vlog or the new category does not exist.
        ForbiddenError: If the caller is not the author.
    """
    _get_owned_vlog(store, vlog_id, user_id)
    _check_category(store, data.category_id)
    if data.title is not None and not data.title.strip():
        raise DomainValidationError("title cannot be empty")

    vlog_repo.update_vlog(
        store,
        vlog_id,
        title=data.title.strip() if data.title is not None else None,
        description=data.description,
        category_id=data.category_id,
        video_url=data.video_url,
        thumbnail_url=data.thumbnail_url,
    )
    return get_vlog(store, vlog_id)


def delete_vlog(store, user_id: int, vlog_id: int) -> DeletedCount:
    _get_owned_vlog(store, vlog_id, user_id)
    return DeletedCount(deleted=vlog_repo.delete_vlog(store, vlog_id))


def record_view(store, vlog_id: int) -> ViewCount:
    views = vlog_repo.increment_views(store, vlog_id)
    if views is None:
        raise NotFoundError("Vlog not found")
    return ViewCount(views=views)


def list_comments(store, vlog_id: int) -> list[Comment]:
    _get_vlog_or_404(store, vlog_id)
    return [Comment(**row) for row in vlog_repo.list_approved_comments(store, vlog_id)]


def add_comment(store, user_id: int, vlog_id: int, data: CommentCreate) -> Comment:
    if not data.content or not data.content.strip():
        raise DomainValidationError("content is required")
    _get_vlog_or_404(store, vlog_id)
    comment_id = vlog_repo.create_comment(store, vlog_id, user_id, data.content.strip())
    return Comment(**vlog_repo.get_comment(store, comment_id))


def get_likes(store, vlog_id: int) -> LikeCount:
    _get_vlog_or_404(store, vlog_id)
    return LikeCount(likes=vlog_repo.count_likes(store, vlog_id))


def toggle_like(store, user_id: int, vlog_id: int) -> LikeToggled:
    """Like the vlog, or remove the caller's existing like."""
    _get_vlog_or_404(store, vlog_id)
    if vlog_repo.remove_like(store, vlog_id, user_id):
        liked = False
    else:
        try:
            vlog_repo.add_like(store, vlog_id, user_id)
        except ConstraintViolationError:
            # Only a like added by a concurrent request is expected here
            if not vlog_repo.has_like(store, vlog_id, user_id):
                raise
        liked = True
    return LikeToggled(liked=liked, likes=vlog_repo.count_likes(store, vlog_id))


def toggle_follow(store, follower_id: int, following_id: int) -> FollowToggled:
    """Follow a creator, or stop following them."""
    if follower_id == following_id:
        raise DomainValidationError("You cannot follow yourself")
    if not user_repo.get_user_by_id(store, following_id):
        raise NotFoundError("User not found")

    if vlog_repo.remove_follow(store, follower_id, following_id):
        following = False
    else:
        try:
            vlog_repo.add_follow(store, follower_id, following_id)
        except ConstraintViolationError:
            if not vlog_repo.has_follow(store, follower_id, following_id):
                raise
        following = True
    return FollowToggled(following=following, followers=vlog_repo.count_followers(store, following_id))


def get_profile(store, user_id: int) -> Profile:
    user = user_repo.get_user_by_id(store, user_id)
    if not user:
        raise NotFoundError("User not found")
    return Profile(
        id=user["id"],
        name=user["name"],
        created_at=user["created_at"],
        followers=vlog_repo.count_followers(store, user_id),
        following=vlog_repo.count_following(store, user_id),
        vlog_count=vlog_repo.count_vlogs_by_user(store, user_id),
    )
