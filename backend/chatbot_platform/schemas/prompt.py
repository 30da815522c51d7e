import datetime
from uuid import UUID

from pydantic import Field, field_validator

from chatbot_platform.schemas.base import APIModel


class PromptCreate(APIModel):
    name: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    project: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Prompt name is required")
        return v


class PromptUpdate(APIModel):
    name: str | None = Field(default=None, max_length=255)
    content: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Prompt name cannot be empty")
        return v.strip() if v else v

    @field_validator("content")
    @classmethod
    def content_not_empty(cls, v: str | None) -> str | None:
        if v is not None and not v:
            raise ValueError("Prompt content cannot be empty")
        return v


class PromptRead(APIModel):
    id: UUID
    project_id: UUID
    user_id: UUID
    name: str
    content: str
    created_at: datetime.datetime
    updated_at: datetime.datetime | None


class PromptEnvelope(APIModel):
    prompt: PromptRead


class PromptList(APIModel):
    prompts: list[PromptRead]
