from typing import Any

from fastapi import APIRouter, Depends

from vloghub.api.deps import get_current_claims, get_settings, get_store
from vloghub.core.config import Settings
from vloghub.db.store import Store
from vloghub.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    PasswordReset,
    PasswordResetDone,
    PasswordResetRequest,
    PasswordResetRequested,
    ResetTokenList,
    SignupRequest,
)
from vloghub.schemas.user import UserIdentity
from vloghub.services import auth as auth_service
from vloghub.services import password_reset as reset_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse)
def signup(
    payload: SignupRequest,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Register with email, password and name; returns a token and the new user."""
    return auth_service.signup(store, settings, payload.email, payload.password, payload.name)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Login endpoint - returns JWT token."""
    return auth_service.login(store, settings, payload.email, payload.password)


@router.get("/me", response_model=MeResponse)
def get_current_user_info(claims: dict[str, Any] = Depends(get_current_claims)):
    """Identity carried by the bearer token."""
    return MeResponse(user=UserIdentity(id=claims["id"], email=claims["email"], name=claims["name"]))


@router.post(
    "/forgot-password",
    response_model=PasswordResetRequested,
    response_model_exclude_none=True,
)
async def forgot_password(
    request: PasswordResetRequest,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Request password reset - emails a single-use reset token."""
    return await reset_service.request_reset(store, settings, request.email)


@router.post("/reset-password", response_model=PasswordResetDone)
def reset_password(reset_data: PasswordReset, store: Store = Depends(get_store)):
    """Reset password using a token from forgot-password."""
    return reset_service.consume_reset(store, reset_data.token, reset_data.new_password)


# Mounted only when EXPOSE_RESET_TOKENS is on; see vloghub.api.router.
debug_router = APIRouter(prefix="/auth", tags=["auth"])


@debug_router.get("/reset-tokens", response_model=ResetTokenList)
def list_reset_tokens(store: Store = Depends(get_store)):
    """Active reset tokens in plaintext. Development aid only."""
    return reset_service.active_tokens(store)
