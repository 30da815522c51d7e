"""HTTP tests for the /api/prompts endpoints."""
import uuid

import pytest


async def _create_prompt(client, project, name="greeting", content="Say hello politely."):
    response = await client.post(
        "/api/prompts", json={"name": name, "content": content, "project": str(project.id)}
    )
    assert response.status_code == 201
    return response.json()["prompt"]


class TestPrompts:

    @pytest.mark.asyncio
    async def test_create_and_list(self, client, project):
        created = await _create_prompt(client, project)

        assert created["name"] == "greeting"
        assert created["projectId"] == str(project.id)

        response = await client.get(f"/api/prompts/project/{project.id}")
        assert response.status_code == 200
        assert [p["id"] for p in response.json()["prompts"]] == [created["id"]]

    @pytest.mark.asyncio
    async def test_create_requires_fields(self, client, project):
        response = await client.post("/api/prompts", json={"project": str(project.id)})

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert {"name", "content"} <= fields

    @pytest.mark.asyncio
    async def test_create_on_foreign_project(self, client, project, current_user, other_user):
        current_user.user = other_user

        response = await client.post(
            "/api/prompts", json={"name": "x", "content": "y", "project": str(project.id)}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update(self, client, project):
        created = await _create_prompt(client, project)

        response = await client.put(f"/api/prompts/{created['id']}", json={"content": "Say hi."})

        assert response.status_code == 200
        updated = response.json()["prompt"]
        assert updated["content"] == "Say hi."
        assert updated["name"] == "greeting"

    @pytest.mark.asyncio
    async def test_delete(self, client, project):
        created = await _create_prompt(client, project)

        response = await client.delete(f"/api/prompts/{created['id']}")

        assert response.status_code == 200
        listing = await client.get(f"/api/prompts/project/{project.id}")
        assert listing.json() == {"prompts": []}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("prompt_id", [str(uuid.uuid4()), "garbage"])
    async def test_missing_prompt(self, client, prompt_id):
        response = await client.put(f"/api/prompts/{prompt_id}", json={"name": "x"})

        assert response.status_code == 404
        assert response.json() == {"message": "Prompt not found"}

    @pytest.mark.asyncio
    async def test_foreign_prompt(self, client, project, current_user, other_user):
        created = await _create_prompt(client, project)
        current_user.user = other_user

        response = await client.delete(f"/api/prompts/{created['id']}")

        assert response.status_code == 404
