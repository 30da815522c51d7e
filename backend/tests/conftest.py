"""
Pytest configuration and shared fixtures.

- A throwaway SQLite database (aiosqlite) per test, schema from SQLModel metadata
- Users / projects seeded through the real models
- A stub completion gateway standing in for OpenRouter
- An httpx AsyncClient bound to the FastAPI app with dependency overrides
"""
from collections.abc import AsyncGenerator, Sequence

import httpx
import pytest
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import chatbot_platform.models  # noqa: F401 (registers all tables)
from chatbot_platform.core.context import ContextMessage
from chatbot_platform.core.exceptions import UpstreamError
from chatbot_platform.db.database import create_engine_for, create_session_factory
from chatbot_platform.models.project import Project
from chatbot_platform.models.user import User


# =============================================================================
# Stub provider
# =============================================================================

class StubGateway:
    """Records every context it receives and answers with a canned reply."""

    def __init__(self, reply: str = "Hi! How can I help?", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str | None, list[ContextMessage]]] = []

    async def complete(self, model_id: str | None, context: Sequence[ContextMessage]) -> str:
        self.calls.append((model_id, list(context)))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def failing_gateway() -> StubGateway:
    return StubGateway(error=UpstreamError("Model not available", upstream_status=400))


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
async def engine(tmp_path):
    engine = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# =============================================================================
# Seed data
# =============================================================================

async def _create_user(db: AsyncSession, username: str) -> User:
    user = User(email=f"{username}@example.com", username=username)
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def user(db) -> User:
    return await _create_user(db, "alice")


@pytest.fixture
async def other_user(db) -> User:
    return await _create_user(db, "mallory")


@pytest.fixture
async def project(db, user) -> Project:
    project = Project(
        user_id=user.id,
        name="Support bot",
        model="openai/gpt-4o-mini",
        system_prompt="You are a helpful assistant.",
    )
    db.add(project)
    await db.commit()
    return project


# =============================================================================
# HTTP client
# =============================================================================

class CurrentUser:
    """Mutable holder so a test can switch the authenticated caller."""

    def __init__(self, user: User | None = None):
        self.user = user


@pytest.fixture
def current_user(user) -> CurrentUser:
    return CurrentUser(user)


@pytest.fixture
async def client(session_factory, current_user, gateway) -> AsyncGenerator[httpx.AsyncClient, None]:
    """AsyncClient with the database, caller and provider overridden."""
    from chatbot_platform.api import deps
    from chatbot_platform.main import app

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_get_current_user():
        return current_user.user

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_current_user] = override_get_current_user
    app.dependency_overrides[deps.get_provider_gateway] = lambda: gateway

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
