"""
Credentials and tokens.

- passwords: bcrypt via passlib
- access tokens: short-lived HS256 JWTs, read from the ``access_token``
  cookie or an ``Authorization: Bearer`` header
- refresh tokens: random strings; the database keeps only their SHA-256
"""

import hashlib
import secrets
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, Request
from passlib.context import CryptContext
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.core.config import settings
from chatbot_platform.core.exceptions import AuthenticationError
from chatbot_platform.db.database import get_db
from chatbot_platform.models.refresh_token import RefreshToken
from chatbot_platform.models.user import User

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


# ── Access tokens ─────────────────────────────────────────────

def create_access_token(user_id: uuid.UUID) -> str:
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> uuid.UUID:
    """Validate *token* and return the user id it was issued for."""
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    if claims.get("type") != "access":
        raise AuthenticationError("Invalid token type")
    try:
        return uuid.UUID(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")


def extract_access_token(request: Request) -> str | None:
    token = request.cookies.get(ACCESS_COOKIE)
    if token:
        return token
    scheme, _, value = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


# ── Refresh tokens ────────────────────────────────────────────

def hash_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode()).hexdigest()


async def create_refresh_token(user_id: uuid.UUID, db: AsyncSession) -> str:
    """Persist a new refresh token for *user_id* and return the raw value for the cookie."""
    raw_token = secrets.token_urlsafe(64)
    db.add(
        RefreshToken.issue(
            user_id,
            hash_token(raw_token),
            timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )
    )
    await db.flush()
    return raw_token


# ── Dependency ────────────────────────────────────────────────

async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the request's access token to an active user, or fail with 401."""
    token = extract_access_token(request)
    if not token:
        raise AuthenticationError("Not authenticated")

    user = await db.get(User, decode_access_token(token))
    if not user or not user.is_active:
        raise AuthenticationError("User not found or inactive")
    return user
