import logging
import uuid

from sqlalchemy import select
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.core.config import settings
from chatbot_platform.core.exceptions import NotFoundError
from chatbot_platform.db import conversation_store
from chatbot_platform.models.project import LLMProvider, Project
from chatbot_platform.models.user import User

logger = logging.getLogger(__name__)


def parse_project_id(raw_id: str | uuid.UUID) -> uuid.UUID:
    """Parse a client-supplied project id; malformed ids are reported as not found."""
    if isinstance(raw_id, uuid.UUID):
        return raw_id
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        raise NotFoundError("Project not found")


async def find_owned_project(
    project_id: uuid.UUID,
    user_id: uuid.UUID,
    db: AsyncSession,
) -> Project | None:
    """Return the project only if *user_id* owns it."""
    project = await db.get(Project, project_id)
    if not project or project.user_id != user_id:
        return None
    return project


async def get_project(user: User, project_id: uuid.UUID | str, db: AsyncSession) -> Project:
    project = await find_owned_project(parse_project_id(project_id), user.id, db)
    if project is None:
        raise NotFoundError("Project not found")
    return project


async def list_projects(user: User, db: AsyncSession) -> list[Project]:
    result = await db.execute(
        select(Project)
        .where(Project.user_id == user.id)
        .order_by(Project.created_at.desc())
    )
    return list(result.scalars().all())


async def create_project(
    user: User,
    name: str,
    db: AsyncSession,
    description: str | None = None,
    llm_provider: LLMProvider = LLMProvider.openrouter,
    model: str | None = None,
    system_prompt: str | None = None,
) -> Project:
    project = Project(
        user_id=user.id,
        name=name,
        description=description,
        llm_provider=LLMProvider(llm_provider).value,
        model=model or settings.DEFAULT_MODEL,
        system_prompt=system_prompt or settings.DEFAULT_SYSTEM_PROMPT,
    )
    db.add(project)
    await db.flush()
    await db.refresh(project)
    return project


async def update_project(
    user: User,
    project_id: uuid.UUID | str,
    db: AsyncSession,
    name: str | None = None,
    description: str | None = None,
    llm_provider: LLMProvider | None = None,
    model: str | None = None,
    system_prompt: str | None = None,
) -> Project:
    project = await get_project(user, project_id, db)
    if name:
        project.name = name
    if description is not None:
        project.description = description
    if llm_provider:
        project.llm_provider = LLMProvider(llm_provider).value
    if model:
        project.model = model
    if system_prompt is not None:
        project.system_prompt = system_prompt or settings.DEFAULT_SYSTEM_PROMPT

    db.add(project)
    await db.flush()
    await db.refresh(project)
    return project


async def delete_project(user: User, project_id: uuid.UUID | str, db: AsyncSession) -> None:
    """Delete a project together with its turns, prompts and files."""
    project = await get_project(user, project_id, db)
    purged = await conversation_store.count_turns(project.id, db)
    await db.delete(project)
    await db.flush()
    logger.info("Deleted project %s and purged %d chat turns", project.id, purged)
