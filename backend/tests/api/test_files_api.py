"""HTTP tests for /api/files, with the storage API replaced by httpx.MockTransport."""
import httpx
import pytest

from chatbot_platform.api import deps
from chatbot_platform.core.file_storage import FileStorageClient, FileStorageConfig
from chatbot_platform.main import app


class FakeStorage:
    """In-memory stand-in for the OpenAI /files endpoints."""

    def __init__(self):
        self.stored: dict[str, bytes] = {}
        self.fail_deletes = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.method == "POST" and request.url.path == "/v1/files":
            file_id = f"file-{len(self.stored) + 1}"
            self.stored[file_id] = request.content
            return httpx.Response(200, json={"id": file_id, "object": "file"})
        if request.method == "DELETE" and request.url.path.startswith("/v1/files/"):
            if self.fail_deletes:
                return httpx.Response(500, json={"error": {"message": "boom"}})
            self.stored.pop(request.url.path.rsplit("/", 1)[-1], None)
            return httpx.Response(200, json={"deleted": True})
        return httpx.Response(404)


@pytest.fixture
def storage(client):
    fake = FakeStorage()
    config = FileStorageConfig(api_key="sk-test")
    app.dependency_overrides[deps.get_file_storage] = lambda: FileStorageClient(
        config, transport=httpx.MockTransport(fake.handler)
    )
    return fake


async def _upload(client, project, name="notes.txt", data=b"hello world"):
    return await client.post(
        f"/api/files/upload/{project.id}", files={"file": (name, data, "text/plain")}
    )


class TestFiles:

    @pytest.mark.asyncio
    async def test_upload_and_list(self, client, project, storage):
        response = await _upload(client, project)

        assert response.status_code == 200
        uploaded = response.json()["file"]
        assert uploaded["id"] == "file-1"
        assert uploaded["fileName"] == "notes.txt"
        assert "file-1" in storage.stored

        listing = await client.get(f"/api/files/{project.id}")
        assert [f["id"] for f in listing.json()["files"]] == ["file-1"]

    @pytest.mark.asyncio
    async def test_upload_without_file(self, client, project, storage):
        response = await client.post(f"/api/files/upload/{project.id}")

        assert response.status_code == 400
        assert response.json()["message"] == "No file uploaded"

    @pytest.mark.asyncio
    async def test_upload_to_foreign_project(self, client, project, storage, current_user, other_user):
        current_user.user = other_user

        response = await _upload(client, project)

        assert response.status_code == 404
        assert storage.stored == {}

    @pytest.mark.asyncio
    async def test_delete(self, client, project, storage):
        await _upload(client, project)

        response = await client.delete(f"/api/files/{project.id}/file-1")

        assert response.status_code == 200
        assert storage.stored == {}
        listing = await client.get(f"/api/files/{project.id}")
        assert listing.json() == {"files": []}

    @pytest.mark.asyncio
    async def test_delete_survives_storage_failure(self, client, project, storage):
        await _upload(client, project)
        storage.fail_deletes = True

        response = await client.delete(f"/api/files/{project.id}/file-1")

        assert response.status_code == 200
        listing = await client.get(f"/api/files/{project.id}")
        assert listing.json() == {"files": []}

    @pytest.mark.asyncio
    async def test_delete_unknown_file(self, client, project, storage):
        response = await client.delete(f"/api/files/{project.id}/file-404")

        assert response.status_code == 404
        assert response.json() == {"message": "File not found in project"}

    @pytest.mark.asyncio
    async def test_missing_storage_key(self, client, project):
        app.dependency_overrides[deps.get_file_storage] = lambda: FileStorageClient(
            FileStorageConfig(api_key="")
        )

        response = await _upload(client, project)

        assert response.status_code == 500
        assert response.json() == {"message": "OpenAI API key not configured"}
