from vloghub.db.models.user import users
from vloghub.db.models.password_reset_token import password_reset_tokens
from vloghub.db.models.vlog import user_follows, vlog_categories, vlog_comments, vlog_likes, vlogs

__all__ = [
    "users",
    "password_reset_tokens",
    "vlog_categories",
    "vlogs",
    "vlog_comments",
    "vlog_likes",
    "user_follows",
]
