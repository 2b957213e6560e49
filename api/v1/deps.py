from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.log import get_logger
from services.auth import TokenError, TokenService, token_service
from services.db import User, get_session, get_user_by_username

log = get_logger("api.auth")

_bearer = HTTPBearer(auto_error=False)


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: AsyncSession = Depends(get_session),
    tokens: TokenService = Depends(token_service),
) -> User:
    """Resolve the bearer token to a stored principal or fail with 401."""
    if creds is None:
        raise unauthorized("Missing bearer token")

    token = creds.credentials
    try:
        username = tokens.get_subject(token)
        user = await get_user_by_username(db, username)
        if user is None or not tokens.is_valid(token, user.username):
            log.info("authentication failed", sub=username, reason="unknown principal")
            raise unauthorized("Token does not belong to an active user")
    except TokenError as exc:
        log.info("authentication failed", reason=type(exc).__name__)
        raise unauthorized("Invalid or expired token") from exc

    return user
