"""Tests for the append-only conversation store."""
import uuid

import pytest

from chatbot_platform.core.exceptions import NotFoundError, ValidationError
from chatbot_platform.db import conversation_store
from chatbot_platform.models.base import as_utc
from chatbot_platform.models.chat_turn import TurnRole


async def _append_many(project, user, db, count):
    turns = []
    for i in range(count):
        role = TurnRole.user if i % 2 == 0 else TurnRole.assistant
        turns.append(
            await conversation_store.append_turn(project.id, user.id, role, f"turn {i + 1}", db)
        )
    return turns


class TestAppendTurn:
    """append_turn validation and persistence."""

    @pytest.mark.asyncio
    async def test_append_persists_turn(self, db, project, user):
        """An appended turn should be readable from the store."""
        turn = await conversation_store.append_turn(project.id, user.id, "user", "Hello", db)

        assert turn.role == "user"
        assert turn.content == "Hello"
        assert turn.project_id == project.id
        assert turn.user_id == user.id

        history = await conversation_store.all_turns(project.id, db)
        assert [t.id for t in history] == [turn.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n"])
    async def test_empty_content_rejected(self, db, project, user, content):
        with pytest.raises(ValidationError):
            await conversation_store.append_turn(project.id, user.id, "user", content, db)

        assert await conversation_store.count_turns(project.id, db) == 0

    @pytest.mark.asyncio
    async def test_unknown_role_rejected(self, db, project, user):
        """Only user and assistant turns are stored; system prompts are not."""
        with pytest.raises(ValidationError):
            await conversation_store.append_turn(project.id, user.id, "system", "Be terse", db)

    @pytest.mark.asyncio
    async def test_missing_project_raises_not_found(self, db, user):
        with pytest.raises(NotFoundError):
            await conversation_store.append_turn(uuid.uuid4(), user.id, "user", "Hello", db)

    @pytest.mark.asyncio
    async def test_ordering_key_strictly_increases(self, db, project, user):
        """Back-to-back appends never share a timestamp."""
        turns = await _append_many(project, user, db, 5)

        keys = [as_utc(t.created_at) for t in turns]
        assert all(earlier < later for earlier, later in zip(keys, keys[1:]))


class TestRecentTurns:
    """recent_turns keeps the latest N and returns them oldest first."""

    @pytest.mark.asyncio
    async def test_keeps_latest_turns_in_ascending_order(self, db, project, user):
        await _append_many(project, user, db, 12)

        recent = await conversation_store.recent_turns(project.id, 10, db)

        assert [t.content for t in recent] == [f"turn {i}" for i in range(3, 13)]

    @pytest.mark.asyncio
    async def test_fewer_turns_than_limit(self, db, project, user):
        await _append_many(project, user, db, 3)

        recent = await conversation_store.recent_turns(project.id, 10, db)

        assert [t.content for t in recent] == ["turn 1", "turn 2", "turn 3"]

    @pytest.mark.asyncio
    async def test_non_positive_limit_returns_nothing(self, db, project, user):
        await _append_many(project, user, db, 2)

        assert await conversation_store.recent_turns(project.id, 0, db) == []

    @pytest.mark.asyncio
    async def test_scoped_to_project(self, db, project, user):
        from chatbot_platform.models.project import Project

        other = Project(user_id=user.id, name="Other")
        db.add(other)
        await db.commit()

        await conversation_store.append_turn(project.id, user.id, "user", "mine", db)
        await conversation_store.append_turn(other.id, user.id, "user", "theirs", db)

        recent = await conversation_store.recent_turns(project.id, 10, db)
        assert [t.content for t in recent] == ["mine"]


class TestAllTurns:

    @pytest.mark.asyncio
    async def test_returns_full_history_oldest_first(self, db, project, user):
        await _append_many(project, user, db, 12)

        history = await conversation_store.all_turns(project.id, db)

        assert len(history) == 12
        assert history[0].content == "turn 1"
        assert history[-1].content == "turn 12"

    @pytest.mark.asyncio
    async def test_empty_project(self, db, project):
        assert await conversation_store.all_turns(project.id, db) == []
