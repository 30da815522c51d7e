import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.api.deps import get_current_user, get_db
from chatbot_platform.controllers import prompt_controller
from chatbot_platform.core.exceptions import NotFoundError
from chatbot_platform.models.user import User
from chatbot_platform.schemas.base import MessageResponse
from chatbot_platform.schemas.prompt import (
    PromptCreate,
    PromptEnvelope,
    PromptList,
    PromptRead,
    PromptUpdate,
)

router = APIRouter(prefix="/prompts", tags=["prompts"])


def _parse_prompt_id(raw_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw_id)
    except ValueError:
        raise NotFoundError("Prompt not found")


@router.get("/project/{project_id}", response_model=PromptList)
async def list_prompts(
    project_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List a project's prompt templates, newest first."""
    prompts = await prompt_controller.list_prompts(user, project_id, db)
    return PromptList(prompts=[PromptRead.model_validate(p) for p in prompts])


@router.post("", response_model=PromptEnvelope, status_code=status.HTTP_201_CREATED)
async def create_prompt(
    payload: PromptCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    prompt = await prompt_controller.create_prompt(
        user, payload.project, payload.name, payload.content, db
    )
    return PromptEnvelope(prompt=PromptRead.model_validate(prompt))


@router.put("/{prompt_id}", response_model=PromptEnvelope)
async def update_prompt(
    prompt_id: str,
    payload: PromptUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    prompt = await prompt_controller.update_prompt(
        user, _parse_prompt_id(prompt_id), db, name=payload.name, content=payload.content
    )
    return PromptEnvelope(prompt=PromptRead.model_validate(prompt))


@router.delete("/{prompt_id}", response_model=MessageResponse)
async def delete_prompt(
    prompt_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await prompt_controller.delete_prompt(user, _parse_prompt_id(prompt_id), db)
    return MessageResponse(message="Prompt deleted successfully")
