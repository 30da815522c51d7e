import uuid

from sqlalchemy import select
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.controllers import project_controller
from chatbot_platform.core.exceptions import NotFoundError
from chatbot_platform.models.project import Prompt
from chatbot_platform.models.user import User


async def list_prompts(user: User, project_id: uuid.UUID | str, db: AsyncSession) -> list[Prompt]:
    project = await project_controller.get_project(user, project_id, db)  # Verify ownership
    result = await db.execute(
        select(Prompt)
        .where(Prompt.project_id == project.id)
        .order_by(Prompt.created_at.desc())
    )
    return list(result.scalars().all())


async def create_prompt(
    user: User,
    project_id: uuid.UUID | str,
    name: str,
    content: str,
    db: AsyncSession,
) -> Prompt:
    project = await project_controller.get_project(user, project_id, db)
    prompt = Prompt(project_id=project.id, user_id=user.id, name=name, content=content)
    db.add(prompt)
    await db.flush()
    await db.refresh(prompt)
    return prompt


async def get_prompt(user: User, prompt_id: uuid.UUID, db: AsyncSession) -> Prompt:
    prompt = await db.get(Prompt, prompt_id)
    if not prompt or prompt.user_id != user.id:
        raise NotFoundError("Prompt not found")
    return prompt


async def update_prompt(
    user: User,
    prompt_id: uuid.UUID,
    db: AsyncSession,
    name: str | None = None,
    content: str | None = None,
) -> Prompt:
    prompt = await get_prompt(user, prompt_id, db)
    if name:
        prompt.name = name
    if content is not None:
        prompt.content = content

    db.add(prompt)
    await db.flush()
    await db.refresh(prompt)
    return prompt


async def delete_prompt(user: User, prompt_id: uuid.UUID, db: AsyncSession) -> None:
    prompt = await get_prompt(user, prompt_id, db)
    await db.delete(prompt)
    await db.flush()
