"""
Auth API routes — signup, login, logout, current user.

Route prefix: /users
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import AuthError, ConflictError, InternalError, ValidationError
from auth.dependencies import (
    CurrentUser,
    db_session,
    get_app_settings,
    get_current_user,
    get_token_service,
)
from auth.jwt import TokenService
from auth.password import hash_password, verify_password
from config.settings import Settings
from database.helpers import DuplicateEmail, create_user, get_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

EMAIL_EXISTS = "Email already exists!"
INVALID_CREDENTIALS = "Invalid credentials!"
CONFIG_ERROR = "Server configuration error"


# ── Request / response schemas ─────────────────────────────────────────


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PublicUser(BaseModel):
    name: str
    email: str


class AuthResponse(BaseModel):
    user: PublicUser
    token: str


class MessageResponse(BaseModel):
    message: str


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    session: AsyncSession = Depends(db_session),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """Register a new user."""
    if not tokens.configured:
        logger.error("JWT_SECRET is not set; refusing signup")
        raise InternalError(CONFIG_ERROR)

    if await get_user_by_email(session, req.email) is not None:
        raise ConflictError(EMAIL_EXISTS)

    # bcrypt is CPU-bound; keep it off the event loop.
    password_hash = await run_in_threadpool(
        hash_password, req.password, rounds=settings.bcrypt_rounds
    )
    try:
        user = await create_user(
            session, name=req.name, email=req.email, password_hash=password_hash
        )
    except DuplicateEmail:
        raise ConflictError(EMAIL_EXISTS)

    token = tokens.issue(user.id, user.email)
    logger.info("Registered user %s (%s)", user.name, user.id)

    return {"user": {"name": user.name, "email": user.email}, "token": token}


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    if not req.email or not req.password:
        raise ValidationError("Email and password required!")

    user = await get_user_by_email(session, req.email)
    if user is None or not await run_in_threadpool(
        verify_password, req.password, user.password_hash
    ):
        logger.info("Failed login for %s", req.email)
        raise AuthError(INVALID_CREDENTIALS)

    if not tokens.configured:
        logger.error("JWT_SECRET is not set; refusing login")
        raise InternalError(CONFIG_ERROR)

    token = tokens.issue(user.id, user.email)
    logger.info("Login: %s (%s)", user.name, user.id)

    return {"user": {"name": user.name, "email": user.email}, "token": token}


@router.post("/logout", response_model=MessageResponse)
async def logout() -> Dict[str, str]:
    """Stateless: issued tokens stay valid until they expire."""
    return {"message": "Logged out successfully!"}


@router.get("/current", response_model=PublicUser)
async def current_user(user: CurrentUser = Depends(get_current_user)) -> Dict[str, str]:
    return {"name": user.name, "email": user.email}
