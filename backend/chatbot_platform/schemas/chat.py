import datetime
from uuid import UUID

from pydantic import Field, field_validator

from chatbot_platform.schemas.base import APIModel


class ChatRequest(APIModel):
    project_id: str = Field(min_length=1)
    message: str = Field(min_length=1)

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        # Stored as sent; only all-whitespace text is rejected
        if not v.strip():
            raise ValueError("Message is required")
        return v


class ChatTurnSummary(APIModel):
    id: UUID
    content: str
    role: str
    created_at: datetime.datetime


class ChatTurnRead(ChatTurnSummary):
    project_id: UUID
    user_id: UUID


class ChatResponse(APIModel):
    message: str
    user_message: ChatTurnSummary
    assistant_message: ChatTurnSummary


class ChatHistory(APIModel):
    messages: list[ChatTurnRead]
