from pydantic import BaseModel, ConfigDict, Field

from vloghub.schemas.common import UtcDatetime


class Category(BaseModel):
    id: int
    name: str


class CategoryCreate(BaseModel):
    name: str | None = None


class Vlog(BaseModel):
    id: int
    user_id: int
    category_id: int | None = None
    title: str
    description: str | None = None
    video_url: str | None = None
    thumbnail_url: str | None = None
    views: int = 0
    created_at: UtcDatetime
    author_name: str | None = None


class VlogCreate(BaseModel):
    title: str | None = None
    description: str | None = None
    category_id: int | None = None
    video_url: str | None = None
    thumbnail_url: str | None = None


class VlogUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    category_id: int | None = None
    video_url: str | None = None
    thumbnail_url: str | None = None


class ViewCount(BaseModel):
    views: int


class Comment(BaseModel):
    id: int
    vlog_id: int
    user_id: int
    content: str
    created_at: UtcDatetime
    author_name: str | None = None


class CommentCreate(BaseModel):
    content: str | None = None


class LikeCount(BaseModel):
    likes: int


class LikeToggled(BaseModel):
    liked: bool
    likes: int


class FollowToggled(BaseModel):
    following: bool
    followers: int


class Profile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    created_at: UtcDatetime | None = Field(default=None, alias="createdAt")
    followers: int
    following: int
    vlog_count: int = Field(alias="vlogCount")


class UploadedFile(BaseModel):
    url: str
    kind: str
    size: int
