from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
    text,
    true,
)

from vloghub.db.base import metadata

vlog_categories = Table(
    "vlog_categories",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), unique=True, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)

vlogs = Table(
    "vlogs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    Column(
        "category_id",
        Integer,
        ForeignKey("vlog_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    ),
    Column("title", String(255), nullable=False),
    Column("description", Text, nullable=True),
    Column("video_url", String, nullable=True),
    Column("thumbnail_url", String, nullable=True),
    Column("views", Integer, nullable=False, server_default=text("0")),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)

vlog_comments = Table(
    "vlog_comments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("vlog_id", Integer, ForeignKey("vlogs.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("content", Text, nullable=False),
    Column("is_approved", Boolean, nullable=False, server_default=true()),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)

vlog_likes = Table(
    "vlog_likes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("vlog_id", Integer, ForeignKey("vlogs.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    UniqueConstraint("vlog_id", "user_id", name="uq_vlog_likes_vlog_user"),
)

user_follows = Table(
    "user_follows",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("follower_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("following_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    UniqueConstraint("follower_id", "following_id", name="uq_user_follows_pair"),
)
