"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_token_service`` and ``get_current_user``
dependencies that are used across all protected routes.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import AuthError
from auth.jwt import TokenError, TokenService
from config.settings import Settings
from database.helpers import get_user_by_id
from database.session import get_db_session

logger = logging.getLogger(__name__)

NOT_AUTHORIZED = "Not authorized!"

_bearer_scheme = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    """Identity attached to an authenticated request (never the password hash)."""

    id: int
    name: str
    email: str


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    session: AsyncSession = Depends(db_session),
) -> CurrentUser:
    """
    Extract and verify the Bearer token, then load the user it names.

    Every rejection is the same 401; the reason is only logged.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError(NOT_AUTHORIZED)

    try:
        claims = tokens.verify(credentials.credentials)
    except TokenError as exc:
        logger.debug("Rejected bearer token: %s (%s)", type(exc).__name__, exc)
        raise AuthError(NOT_AUTHORIZED) from exc

    user = await get_user_by_id(session, claims.user_id)
    if user is None:
        logger.debug("Token for unknown user %s", claims.user_id)
        raise AuthError(NOT_AUTHORIZED)

    return CurrentUser(id=user.id, name=user.name, email=user.email)
