from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, insert, literal, select, true, update

from vloghub.db.models import (
    user_follows,
    users,
    vlog_categories,
    vlog_comments,
    vlog_likes,
    vlogs,
)

VLOG_COLUMNS = (
    vlogs.c.id,
    vlogs.c.user_id,
    vlogs.c.category_id,
    vlogs.c.title,
    vlogs.c.description,
    vlogs.c.video_url,
    vlogs.c.thumbnail_url,
    vlogs.c.views,
    vlogs.c.created_at,
    users.c.name.label("author_name"),
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ----------------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------------


def list_categories(store) -> list[dict[str, Any]]:
    return store.get_all(
        select(vlog_categories.c.id, vlog_categories.c.name).order_by(vlog_categories.c.name)
    )


def create_category(store, name: str) -> int:
    result = store.execute(insert(vlog_categories).values(name=name, created_at=_now()))
    return result.last_insert_id


def get_category(store, category_id: int) -> dict[str, Any] | None:
    return store.get_one(
        select(vlog_categories.c.id, vlog_categories.c.name).where(
            vlog_categories.c.id == category_id
        )
    )


# ----------------------------------------------------------------------------
# Vlogs
# ----------------------------------------------------------------------------


def get_vlog(store, vlog_id: int) -> dict[str, Any] | None:
    """Get a vlog with its author's name."""
    return store.get_one(
        select(*VLOG_COLUMNS)
        .join(users, users.c.id == vlogs.c.user_id)
        .where(vlogs.c.id == vlog_id)
    )


def list_vlogs(
    store, user_id: int | None = None, category_id: int | None = None
) -> list[dict[str, Any]]:
    """Vlogs newest first, optionally filtered by author and category."""
    query = select(*VLOG_COLUMNS).join(users, users.c.id == vlogs.c.user_id)
    if user_id is not None:
        query = query.where(vlogs.c.user_id == user_id)
    if category_id is not None:
        query = query.where(vlogs.c.category_id == category_id)
    return store.get_all(query.order_by(vlogs.c.created_at.desc(), vlogs.c.id.desc()))


def create_vlog(
    store,
    user_id: int,
    title: str,
    description: str | None = None,
    category_id: int | None = None,
    video_url: str | None = None,
    thumbnail_url: str | None = None,
) -> int:
    result = store.execute(
        insert(vlogs).values(
            user_id=user_id,
            title=title,
            description=description,
            category_id=category_id,
            video_url=video_url,
            thumbnail_url=thumbnail_url,
            views=0,
            created_at=_now(),
        )
    )
    return result.last_insert_id


def update_vlog(store, vlog_id: int, **fields: Any) -> int:
    """Update vlog fields, keeping the stored value for every field passed as None."""
    values = {
        name: func.coalesce(literal(value, vlogs.c[name].type), vlogs.c[name])
        for name, value in fields.items()
    }
    if not values:
        return 0
    result = store.execute(update(vlogs).where(vlogs.c.id == vlog_id).values(**values))
    return result.rowcount


def delete_vlog(store, vlog_id: int) -> int:
    result = store.execute(delete(vlogs).where(vlogs.c.id == vlog_id))
    return result.rowcount


def increment_views(store, vlog_id: int) -> int | None:
    """Add one view and return the new total, or None when the vlog does not exist."""
    with store.transaction() as tx:
        result = tx.execute(
            update(vlogs).where(vlogs.c.id == vlog_id).values(views=vlogs.c.views + 1)
        )
        if result.rowcount == 0:
            return None
        row = tx.get_one(select(vlogs.c.views).where(vlogs.c.id == vlog_id))
    return row["views"]


# ----------------------------------------------------------------------------
# Comments
# ----------------------------------------------------------------------------


def list_approved_comments(store, vlog_id: int) -> list[dict[str, Any]]:
    return store.get_all(
        select(
            vlog_comments.c.id,
            vlog_comments.c.vlog_id,
            vlog_comments.c.user_id,
            vlog_comments.c.content,
            vlog_comments.c.created_at,
            users.c.name.label("author_name"),
        )
        .join(users, users.c.id == vlog_comments.c.user_id)
        .where(vlog_comments.c.vlog_id == vlog_id, vlog_comments.c.is_approved == true())
        .order_by(vlog_comments.c.created_at.desc(), vlog_comments.c.id.desc())
    )


def create_comment(store, vlog_id: int, user_id: int, content: str) -> int:
    result = store.execute(
        insert(vlog_comments).values(
            vlog_id=vlog_id,
            user_id=user_id,
            content=content,
            is_approved=True,
            created_at=_now(),
        )
    )
    return result.last_insert_id


def get_comment(store, comment_id: int) -> dict[str, Any] | None:
    return store.get_one(
        select(
            vlog_comments.c.id,
            vlog_comments.c.vlog_id,
            vlog_comments.c.user_id,
            vlog_comments.c.content,
            vlog_comments.c.created_at,
            users.c.name.label("author_name"),
        )
        .join(users, users.c.id == vlog_comments.c.user_id)
        .where(vlog_comments.c.id == comment_id)
    )


# ----------------------------------------------------------------------------
# Likes
# ----------------------------------------------------------------------------


def count_likes(store, vlog_id: int) -> int:
    row = store.get_one(
        select(func.count().label("c")).select_from(vlog_likes).where(vlog_likes.c.vlog_id == vlog_id)
    )
    return row["c"] if row else 0


def remove_like(store, vlog_id: int, user_id: int) -> int:
    result = store.execute(
        delete(vlog_likes).where(vlog_likes.c.vlog_id == vlog_id, vlog_likes.c.user_id == user_id)
    )
    return result.rowcount


def has_like(store, vlog_id: int, user_id: int) -> bool:
    row = store.get_one(
        select(vlog_likes.c.id).where(vlog_likes.c.vlog_id == vlog_id, vlog_likes.c.user_id == user_id)
    )
    return row is not None


def add_like(store, vlog_id: int, user_id: int) -> None:
    store.execute(
        insert(vlog_likes).values(vlog_id=vlog_id, user_id=user_id, created_at=_now())
    )


# ----------------------------------------------------------------------------
# Follows
# ----------------------------------------------------------------------------


def remove_follow(store, follower_id: int, following_id: int) -> int:
    result = store.execute(
        delete(user_follows).where(
            user_follows.c.follower_id == follower_id,
            user_follows.c.following_id == following_id,
        )
    )
    return result.rowcount


def has_follow(store, follower_id: int, following_id: int) -> bool:
    row = store.get_one(
        select(user_follows.c.id).where(
            user_follows.c.follower_id == follower_id,
            user_follows.c.following_id == following_id,
        )
    )
    return row is not None


def add_follow(store, follower_id: int, following_id: int) -> None:
    store.execute(
        insert(user_follows).values(
            follower_id=follower_id, following_id=following_id, created_at=_now()
        )
    )


def count_followers(store, user_id: int) -> int:
    row = store.get_one(
        select(func.count().label("c"))
        .select_from(user_follows)
        .where(user_follows.c.following_id == user_id)
    )
    return row["c"] if row else 0


def count_following(store, user_id: int) -> int:
    row = store.get_one(
        select(func.count().label("c"))
        .select_from(user_follows)
        .where(user_follows.c.follower_id == user_id)
    )
    return row["c"] if row else 0


def count_vlogs_by_user(store, user_id: int) -> int:
    row = store.get_one(
        select(func.count().label("c")).select_from(vlogs).where(vlogs.c.user_id == user_id)
    )
    return row["c"] if row else 0
