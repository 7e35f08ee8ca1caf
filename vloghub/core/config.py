from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "dev-secret-change-me"


class Settings(BaseSettings):
    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3001, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Storage: a hosted Postgres-compatible URL, or an embedded SQLite file in data_dir
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    data_dir: str = Field(default=".data", alias="DATA_DIR")
    # Uploaded videos and thumbnails are stored under DATA_DIR/uploads
    upload_max_bytes: int = Field(default=500 * 1024 * 1024, alias="UPLOAD_MAX_BYTES")

    # JWT Configuration
    secret_key: str = Field(default=DEFAULT_SECRET_KEY, alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=60 * 24 * 7, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Users created by an admin get this password until they reset it
    default_user_password: str = Field(default="changeme123", alias="DEFAULT_USER_PASSWORD")

    # Password Reset
    password_reset_token_expire_minutes: int = Field(
        default=15, alias="PASSWORD_RESET_TOKEN_EXPIRE_MINUTES"
    )
    # Development aid: echo reset tokens in API responses and list them. Never enable in production.
    expose_reset_tokens: bool = Field(default=False, alias="EXPOSE_RESET_TOKENS")

    # SMTP Configuration (optional)
    smtp_host: str | None = Field(default=None, alias="SMTP_HOST")
    smtp_port: int | None = Field(default=None, alias="SMTP_PORT")
    smtp_user: str | None = Field(default=None, alias="SMTP_USER")
    smtp_password: str | None = Field(default=None, alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(default=True, alias="SMTP_USE_TLS")
    smtp_from_email: str | None = Field(default=None, alias="SMTP_FROM_EMAIL")

    # Frontend URL for CORS and password reset links
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    @field_validator(
        "database_url",
        "smtp_host",
        "smtp_user",
        "smtp_password",
        "smtp_from_email",
        "frontend_url",
        mode="before",
    )
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("smtp_port", mode="before")
    @classmethod
    def empty_str_to_none_int(cls, v: str | int | None) -> int | None:
        """Convert empty strings to None for optional integer fields."""
        if v == "":
            return None
        if isinstance(v, str):
            try:
                return int(v)
            except ValueError:
                return None
        return v

    @property
    def uses_hosted_backend(self) -> bool:
        return self.database_url is not None

    @property
    def sqlite_path(self) -> Path:
        return Path(self.data_dir) / "app.db"

    @property
    def upload_dir(self) -> Path:
        return Path(self.data_dir) / "uploads"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
