"""Auth controller: registration, login and the refresh-token lifecycle."""

import logging

from fastapi import Response
from sqlalchemy import func, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.core.config import ModeEnum, settings
from chatbot_platform.core.exceptions import AuthenticationError, ConflictError
from chatbot_platform.core.security import (
    ACCESS_COOKIE,
    REFRESH_COOKIE,
    create_access_token,
    create_refresh_token,
    hash_password,
    hash_token,
    verify_password,
)
from chatbot_platform.models.refresh_token import RefreshToken
from chatbot_platform.models.user import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def _set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    cookies = (
        (ACCESS_COOKIE, access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60),
        (REFRESH_COOKIE, refresh_token, settings.REFRESH_TOKEN_EXPIRE_DAYS * 86400),
    )
    for key, value, max_age in cookies:
        response.set_cookie(
            key=key,
            value=value,
            max_age=max_age,
            httponly=True,
            secure=settings.MODE == ModeEnum.production,
            samesite="lax",
            path="/",
        )


def _clear_auth_cookies(response: Response) -> None:
    for key in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(key, path="/")


async def _find_user_by_email(email: str, db: AsyncSession) -> User | None:
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
    return result.scalar_one_or_none()


async def _find_refresh_token(raw_token: str, db: AsyncSession) -> RefreshToken | None:
    result = await db.execute(
        select(RefreshToken).where(RefreshToken.token_hash == hash_token(raw_token))
    )
    return result.scalar_one_or_none()


# ── Email / password ──────────────────────────────────────────

async def handle_register(
    email: str,
    username: str,
    password: str,
    db: AsyncSession,
    display_name: str | None = None,
) -> User:
    if await _find_user_by_email(email, db):
        raise ConflictError("Email already registered")

    taken = await db.execute(select(User.id).where(User.username == username))
    if taken.first() is not None:
        raise ConflictError("Username already taken")

    user = User(
        email=email,
        username=username,
        display_name=display_name,
        hashed_password=hash_password(password),
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


async def handle_login(email: str, password: str, db: AsyncSession) -> User:
    user = await _find_user_by_email(email, db)
    # Same message for unknown email and wrong password
    if not user or not user.hashed_password or not verify_password(password, user.hashed_password):
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not user.is_active:
        raise AuthenticationError("Account is inactive")
    return user


# ── Tokens ────────────────────────────────────────────────────

async def issue_tokens(user: User, response: Response, db: AsyncSession) -> str:
    """Set fresh access and refresh cookies on *response*; return the access token."""
    access_token = create_access_token(user.id)
    refresh_token = await create_refresh_token(user.id, db)
    _set_auth_cookies(response, access_token, refresh_token)
    return access_token


async def handle_refresh(
    refresh_token_value: str | None,
    response: Response,
    db: AsyncSession,
) -> User:
    """Rotate a refresh token.

    A token that was already rotated out is being replayed, so every live
    token of its owner is revoked and the caller has to log in again.
    """
    if not refresh_token_value:
        raise AuthenticationError("No refresh token")

    record = await _find_refresh_token(refresh_token_value, db)
    if record is None:
        raise AuthenticationError("Invalid refresh token")

    if record.is_revoked:
        await db.execute(
            update(RefreshToken)
            .where(
                RefreshToken.user_id == record.user_id,
                RefreshToken.is_revoked == False,  # noqa: E712
            )
            .values(is_revoked=True)
        )
        # Commit now: the request fails and get_db rolls back afterwards
        await db.commit()
        logger.warning("Refresh token reuse detected for user %s", record.user_id)
        raise AuthenticationError("Refresh token reuse detected, all sessions revoked")

    if record.is_expired():
        raise AuthenticationError("Refresh token expired")

    user = await db.get(User, record.user_id)
    if not user or not user.is_active:
        raise AuthenticationError("User not found or inactive")

    record.revoke()
    await issue_tokens(user, response, db)
    return user


async def handle_logout(
    refresh_token_value: str | None,
    response: Response,
    db: AsyncSession,
) -> None:
    if refresh_token_value:
        record = await _find_refresh_token(refresh_token_value, db)
        if record is not None:
            record.revoke()
    _clear_auth_cookies(response)
