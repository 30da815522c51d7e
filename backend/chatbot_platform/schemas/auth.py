import datetime
import uuid

from pydantic import EmailStr, Field

from chatbot_platform.schemas.base import APIModel


class RegisterRequest(APIModel):
    email: EmailStr
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=72)
    display_name: str | None = Field(default=None, max_length=100)


class LoginRequest(APIModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserProfile(APIModel):
    id: uuid.UUID
    email: str
    username: str
    is_active: bool
    display_name: str | None = None
    created_at: datetime.datetime


class AuthResponse(APIModel):
    user: UserProfile
    token: str
