from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from chatbot_platform.models.base import BaseUUIDModel

if TYPE_CHECKING:
    from chatbot_platform.models.project import Project
    from chatbot_platform.models.refresh_token import RefreshToken


class User(BaseUUIDModel, table=True):
    __tablename__ = "users"

    email: str = Field(max_length=320, unique=True, index=True)
    username: str = Field(max_length=50, unique=True, index=True)
    display_name: str | None = Field(default=None, max_length=100)
    hashed_password: str | None = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)

    # Relationships
    projects: list["Project"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )
    refresh_tokens: list["RefreshToken"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )
