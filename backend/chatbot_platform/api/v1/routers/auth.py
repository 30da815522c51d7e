"""Auth router: thin HTTP layer, delegates all logic to auth_controller."""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.api.deps import get_current_user, get_db
from chatbot_platform.controllers import auth_controller
from chatbot_platform.core.security import REFRESH_COOKIE
from chatbot_platform.models.user import User
from chatbot_platform.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserProfile

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Create an account and sign it in."""
    user = await auth_controller.handle_register(
        payload.email, payload.username, payload.password, db, display_name=payload.display_name
    )
    token = await auth_controller.issue_tokens(user, response, db)
    return AuthResponse(user=UserProfile.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    user = await auth_controller.handle_login(payload.email, payload.password, db)
    token = await auth_controller.issue_tokens(user, response, db)
    return AuthResponse(user=UserProfile.model_validate(user), token=token)


# ── Token Management ─────────────────────────────────────────

@router.get("/me", response_model=UserProfile)
async def get_me(user: User = Depends(get_current_user)):
    """Return the currently authenticated user's profile."""
    return UserProfile.model_validate(user)


@router.post("/refresh")
async def refresh_token(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Rotate the refresh token and issue a new access token."""
    refresh_token_value = request.cookies.get(REFRESH_COOKIE)
    user = await auth_controller.handle_refresh(refresh_token_value, response, db)
    return {"status": "ok", "userId": str(user.id)}


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Revoke the refresh token and clear auth cookies."""
    refresh_token_value = request.cookies.get(REFRESH_COOKIE)
    await auth_controller.handle_logout(refresh_token_value, response, db)
    return {"status": "logged_out"}
