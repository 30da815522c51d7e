"""
Shared FastAPI dependencies: single source of truth for DI.

All routers should import get_db, get_current_user and the outbound clients
from HERE, not directly from core or db modules.
"""

from functools import lru_cache
from uuid import UUID

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.core.config import ModeEnum, settings
from chatbot_platform.core.file_storage import FileStorageClient, FileStorageConfig
from chatbot_platform.core.provider import OpenRouterGateway, ProviderConfig
from chatbot_platform.core.security import (
    extract_access_token,
    get_current_user as _require_auth,
)
from chatbot_platform.db.database import get_db as _get_db
from chatbot_platform.models.user import User

__all__ = ["get_db", "get_current_user", "get_provider_gateway", "get_file_storage"]

# Dev user ID, consistent across restarts for dev testing
DEV_USER_ID = UUID("00000000-0000-0000-0000-000000000001")


async def get_db() -> AsyncSession:
    """Yield an async database session."""
    async for session in _get_db():
        yield session


async def _get_or_create_dev_user(db: AsyncSession) -> User:
    """Get or create a development test user."""
    user = await db.get(User, DEV_USER_ID)
    if not user:
        user = User(
            id=DEV_USER_ID,
            email="dev@localhost.test",
            username="dev_user",
            display_name="Development User",
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)
    return user


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Require authentication. In dev mode with no token, auto-creates a dev user
    so you can test protected endpoints without logging in.
    """
    token = extract_access_token(request)

    # Dev bypass: if no token in development mode, use a dev user
    if not token and settings.MODE == ModeEnum.development:
        return await _get_or_create_dev_user(db)

    # Otherwise delegate to the real auth check
    return await _require_auth(request, db)


@lru_cache
def get_provider_config() -> ProviderConfig:
    return ProviderConfig.from_settings(settings)


def get_provider_gateway() -> OpenRouterGateway:
    """Gateway built from the startup-validated provider config."""
    return OpenRouterGateway(get_provider_config())


def get_file_storage() -> FileStorageClient:
    return FileStorageClient(FileStorageConfig.from_settings(settings))
