from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.api.deps import get_current_user, get_db
from chatbot_platform.controllers import project_controller
from chatbot_platform.models.user import User
from chatbot_platform.schemas.base import MessageResponse
from chatbot_platform.schemas.project import (
    ProjectCreate,
    ProjectEnvelope,
    ProjectList,
    ProjectRead,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=ProjectList)
async def list_projects(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the current user's projects, newest first."""
    projects = await project_controller.list_projects(user, db)
    return ProjectList(projects=[ProjectRead.model_validate(p) for p in projects])


@router.get("/{project_id}", response_model=ProjectEnvelope)
async def get_project(
    project_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    project = await project_controller.get_project(user, project_id, db)
    return ProjectEnvelope(project=ProjectRead.model_validate(project))


@router.post("", response_model=ProjectEnvelope, status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a project bound to a provider, model and system prompt."""
    project = await project_controller.create_project(
        user,
        payload.name,
        db,
        description=payload.description,
        llm_provider=payload.llm_provider,
        model=payload.model,
        system_prompt=payload.system_prompt,
    )
    return ProjectEnvelope(project=ProjectRead.model_validate(project))


@router.put("/{project_id}", response_model=ProjectEnvelope)
async def update_project(
    project_id: str,
    payload: ProjectUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    project = await project_controller.update_project(
        user,
        project_id,
        db,
        name=payload.name,
        description=payload.description,
        llm_provider=payload.llm_provider,
        model=payload.model,
        system_prompt=payload.system_prompt,
    )
    return ProjectEnvelope(project=ProjectRead.model_validate(project))


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a project along with its chat history, prompts and files."""
    await project_controller.delete_project(user, project_id, db)
    return MessageResponse(message="Project deleted successfully")
