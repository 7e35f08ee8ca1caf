from sqlalchemy import Boolean, Column, DateTime, Integer, String, Table, false, func, text

from vloghub.db.base import metadata

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(320), unique=True, nullable=False, index=True),
    Column("password_hash", String, nullable=False),
    Column("name", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("status", String(32), server_default=text("'active'")),
    Column("is_active", Boolean, server_default=false()),
)
