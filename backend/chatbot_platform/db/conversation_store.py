"""
Conversation store: the append-only, per-project log of chat turns.

Turns are never updated or deleted through this module. Reads always go to
the database; nothing is cached between calls.
"""

import logging
import uuid
from datetime import timedelta

from sqlalchemy import func, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.core.exceptions import NotFoundError, ValidationError
from chatbot_platform.models.base import as_utc, utc_now
from chatbot_platform.models.chat_turn import ChatTurn, TurnRole
from chatbot_platform.models.project import Project

logger = logging.getLogger(__name__)

# Smallest step between two ordering keys (timestamp precision of Postgres).
_ORDERING_STEP = timedelta(microseconds=1)


async def _next_ordering_key(project_id: uuid.UUID, db: AsyncSession):
    """Return a timestamp strictly later than the project's latest turn."""
    result = await db.execute(
        select(func.max(ChatTurn.created_at)).where(ChatTurn.project_id == project_id)
    )
    latest = result.scalar_one_or_none()
    now = utc_now()
    if latest is None:
        return now
    return max(now, as_utc(latest) + _ORDERING_STEP)


async def _lock_project(project_id: uuid.UUID, db: AsyncSession) -> bool:
    """Take the project's row write lock until the next commit or rollback.

    Appends to one project run one at a time from here to commit, so the
    max-then-insert in ``_next_ordering_key`` cannot interleave. The no-op
    UPDATE locks the row on Postgres and takes the write lock on SQLite.
    Returns False if the project does not exist.
    """
    result = await db.execute(
        update(Project)
        .where(Project.id == project_id)
        .values(updated_at=Project.updated_at)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


async def append_turn(
    project_id: uuid.UUID,
    user_id: uuid.UUID,
    role: TurnRole | str,
    content: str,
    db: AsyncSession,
) -> ChatTurn:
    """Create and commit one immutable turn.

    Raises ``ValidationError`` for empty content or an unknown role and
    ``NotFoundError`` if the project does not exist.
    """
    if not content or not content.strip():
        raise ValidationError(
            "Message content is required",
            errors=[{"field": "content", "message": "Message content is required"}],
        )
    try:
        role = TurnRole(role)
    except ValueError:
        raise ValidationError(
            f"Invalid role '{role}'",
            errors=[{"field": "role", "message": "Role must be 'user' or 'assistant'"}],
        )

    if not await _lock_project(project_id, db):
        raise NotFoundError("Project not found")

    turn = ChatTurn(
        project_id=project_id,
        user_id=user_id,
        role=role.value,
        content=content,
        created_at=await _next_ordering_key(project_id, db),
    )
    db.add(turn)
    await db.commit()

    logger.debug("Appended %s turn %s to project %s", role.value, turn.id, project_id)
    return turn


async def recent_turns(
    project_id: uuid.UUID,
    limit: int,
    db: AsyncSession,
) -> list[ChatTurn]:
    """Return at most *limit* latest turns, oldest first.

    Selects the newest *limit* rows in descending order, then reverses them,
    so truncation always drops the oldest turns.
    """
    if limit <= 0:
        return []

    result = await db.execute(
        select(ChatTurn)
        .where(ChatTurn.project_id == project_id)
        .order_by(ChatTurn.created_at.desc(), ChatTurn.id.desc())
        .limit(limit)
    )
    latest_first = list(result.scalars().all())
    latest_first.reverse()
    return latest_first


async def all_turns(project_id: uuid.UUID, db: AsyncSession) -> list[ChatTurn]:
    """Return the full history of *project_id*, oldest first."""
    result = await db.execute(
        select(ChatTurn)
        .where(ChatTurn.project_id == project_id)
        .order_by(ChatTurn.created_at.asc(), ChatTurn.id.asc())
    )
    return list(result.scalars().all())


async def count_turns(project_id: uuid.UUID, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(ChatTurn).where(ChatTurn.project_id == project_id)
    )
    return result.scalar_one()
