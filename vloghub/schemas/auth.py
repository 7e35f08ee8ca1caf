from pydantic import BaseModel, ConfigDict, Field

from vloghub.schemas.common import UtcDatetime
from vloghub.schemas.user import UserIdentity


class SignupRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    token: str
    user: UserIdentity


class MeResponse(BaseModel):
    user: UserIdentity


class PasswordResetRequest(BaseModel):
    email: str | None = None


class PasswordResetRequested(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    reset_token: str | None = Field(default=None, alias="resetToken")
    reset_url: str | None = Field(default=None, alias="resetUrl")
    expires: UtcDatetime | None = None


class PasswordReset(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str | None = None
    new_password: str | None = Field(default=None, alias="newPassword")


class PasswordResetDone(BaseModel):
    message: str
    user: UserIdentity


class ResetTokenInfo(BaseModel):
    id: int
    token: str
    user_id: int
    email: str
    name: str
    expires_at: UtcDatetime
    created_at: UtcDatetime


class ResetTokenList(BaseModel):
    tokens: list[ResetTokenInfo]
