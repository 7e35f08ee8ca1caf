from pydantic import BaseModel, ConfigDict, Field

from vloghub.schemas.common import UtcDatetime


class UserIdentity(BaseModel):
    """The identity carried in tokens and auth responses."""

    id: int
    email: str
    name: str


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    email: str
    name: str
    status: str | None = None
    is_active: bool = Field(default=False, alias="isActive")
    created_at: UtcDatetime | None = Field(default=None, alias="createdAt")


class UserCreate(BaseModel):
    # Presence is checked by the service so missing fields map to 400, not 422
    name: str | None = None
    email: str | None = None
    status: str | None = None


class UserUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    status: str | None = None


class UpdatedCount(BaseModel):
    updated: int


class DeletedCount(BaseModel):
    deleted: int


class Stats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_users: int = Field(alias="totalUsers")
    active_sessions: int = Field(alias="activeSessions")
    pending_actions: int = Field(alias="pendingActions")
