import datetime
from uuid import UUID

from pydantic import Field, field_validator

from chatbot_platform.models.project import LLMProvider
from chatbot_platform.schemas.base import APIModel


class ProjectCreate(APIModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    llm_provider: LLMProvider = LLMProvider.openrouter
    model: str | None = Field(default=None, max_length=255)
    system_prompt: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name is required")
        return v


class ProjectUpdate(APIModel):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    llm_provider: LLMProvider | None = None
    model: str | None = Field(default=None, max_length=255)
    system_prompt: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty")
        return v


class ProjectRead(APIModel):
    id: UUID
    user_id: UUID
    name: str
    description: str | None = None
    llm_provider: str
    model: str
    system_prompt: str
    created_at: datetime.datetime
    updated_at: datetime.datetime | None


class ProjectEnvelope(APIModel):
    project: ProjectRead


class ProjectList(APIModel):
    projects: list[ProjectRead]
