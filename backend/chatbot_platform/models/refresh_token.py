from datetime import datetime, timedelta
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship

from chatbot_platform.models.base import BaseUUIDModel, as_utc, utc_now

if TYPE_CHECKING:
    from chatbot_platform.models.user import User


class RefreshToken(BaseUUIDModel, table=True):
    """Server-side record of one issued refresh token (only its SHA-256 is stored)."""

    __tablename__ = "refresh_tokens"

    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    token_hash: str = Field(max_length=64, unique=True, index=True)
    expires_at: datetime = Field(sa_type=DateTime(timezone=True))
    is_revoked: bool = Field(default=False)

    # Relationships
    user: "User" = Relationship(back_populates="refresh_tokens")

    @classmethod
    def issue(cls, user_id: UUID, token_hash: str, lifetime: timedelta) -> "RefreshToken":
        return cls(user_id=user_id, token_hash=token_hash, expires_at=utc_now() + lifetime)

    def is_expired(self, now: datetime | None = None) -> bool:
        return as_utc(self.expires_at) <= (now or utc_now())

    def revoke(self) -> None:
        self.is_revoked = True
