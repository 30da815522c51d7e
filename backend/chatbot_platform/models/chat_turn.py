from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Column, Index, Text
from sqlmodel import Field, Relationship

from chatbot_platform.models.base import BaseUUIDModel

if TYPE_CHECKING:
    from chatbot_platform.models.project import Project


class TurnRole(str, Enum):
    user = "user"
    assistant = "assistant"


class ChatTurn(BaseUUIDModel, table=True):
    """One immutable message in a project's conversation.

    ``created_at`` is the ordering key; the conversation store keeps it
    strictly increasing per project.
    """

    __tablename__ = "chat_turns"
    __table_args__ = (
        Index("ix_chat_turns_project_created", "project_id", "created_at"),
    )

    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    role: str = Field(max_length=20)  # "user" or "assistant"
    content: str = Field(sa_column=Column(Text, nullable=False))

    # Relationships
    project: "Project" = Relationship(back_populates="turns")
