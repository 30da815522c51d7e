import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession
from starlette.middleware.cors import CORSMiddleware

from chatbot_platform.api.deps import get_db, get_provider_config
from chatbot_platform.api.v1.api import router
from chatbot_platform.core.config import ModeEnum, settings
from chatbot_platform.core.exceptions import ConfigurationError, register_exception_handlers
from chatbot_platform.core.logging import setup_logging
from chatbot_platform.db.database import engine

logger = logging.getLogger(__name__)


def validate_provider_config() -> None:
    """Fail fast on a missing provider credential (warn outside production)."""
    provider_config = get_provider_config()
    if provider_config.has_credential:
        return
    if settings.MODE == ModeEnum.production:
        raise ConfigurationError("OPENROUTER_API_KEY must be set in production")
    logger.warning("OPENROUTER_API_KEY is not set; chat requests will fail until it is configured")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging, validate provider config, warm up DB pool. Shutdown: dispose engine."""
    setup_logging()
    validate_provider_config()
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("%s started in %s mode", settings.PROJECT_NAME, settings.MODE.value)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)


# ── Exception Handlers (every error renders as {"message": ...}) ──

register_exception_handlers(app)


# ── Middleware ────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────

app.include_router(router, prefix=settings.API_V1_STR)


# ── Health / Root ─────────────────────────────────────────────

@app.get("/")
def read_root():
    return {"message": "Welcome to the Chatbot Platform API"}


@app.get(f"{settings.API_V1_STR}/health")
def health():
    return {"status": "OK", "message": "Server is running"}


@app.get("/db_check")
async def db_check(db: AsyncSession = Depends(get_db)):
    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar()
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.warning("Database check failed: %s", e)
        return {
            "status": "unhealthy",
            "database": "disconnected",
        }
