from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Column, Text
from sqlmodel import Field, Relationship

from chatbot_platform.core.config import settings
from chatbot_platform.models.base import BaseUUIDModel

if TYPE_CHECKING:
    from chatbot_platform.models.user import User
    from chatbot_platform.models.chat_turn import ChatTurn


DEFAULT_MODEL = settings.DEFAULT_MODEL
DEFAULT_SYSTEM_PROMPT = settings.DEFAULT_SYSTEM_PROMPT


class LLMProvider(str, Enum):
    openrouter = "openrouter"


class Project(BaseUUIDModel, table=True):
    __tablename__ = "projects"

    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    name: str = Field(max_length=255)
    description: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    llm_provider: str = Field(default=LLMProvider.openrouter.value, max_length=50)
    model: str = Field(default=DEFAULT_MODEL, max_length=255)
    system_prompt: str = Field(
        default=DEFAULT_SYSTEM_PROMPT,
        sa_column=Column(Text, nullable=False, default=DEFAULT_SYSTEM_PROMPT),
    )

    # Relationships (rows are removed by the database via ON DELETE CASCADE)
    user: "User" = Relationship(back_populates="projects")
    turns: list["ChatTurn"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "passive_deletes": True,
            "order_by": "ChatTurn.created_at",
        },
    )
    prompts: list["Prompt"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )
    files: list["ProjectFile"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )


class Prompt(BaseUUIDModel, table=True):
    __tablename__ = "prompts"

    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    name: str = Field(max_length=255)
    content: str = Field(sa_column=Column(Text, nullable=False))

    # Relationships
    project: "Project" = Relationship(back_populates="prompts")


class ProjectFile(BaseUUIDModel, table=True):
    __tablename__ = "project_files"

    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    file_id: str = Field(max_length=255, index=True)  # id assigned by the file-storage API
    file_name: str = Field(max_length=255)

    # Relationships
    project: "Project" = Relationship(back_populates="files")
