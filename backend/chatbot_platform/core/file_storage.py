"""Thin proxy to the OpenAI file-storage API used for project attachments."""

import logging
from dataclasses import dataclass
from typing import Any, BinaryIO

import httpx

from chatbot_platform.core.config import Settings, settings
from chatbot_platform.core.exceptions import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

FILE_PURPOSE = "assistants"
GENERIC_UPLOAD_MESSAGE = "Error uploading file"


@dataclass(frozen=True)
class FileStorageConfig:
    api_key: str
    base_url: str = "https://api.openai.com/v1"
    timeout: float = 120.0

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "FileStorageConfig":
        return cls(api_key=config.OPENAI_API_KEY, base_url=config.OPENAI_BASE_URL.rstrip("/"))


class FileStorageClient:
    def __init__(
        self,
        config: FileStorageConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        if not self._config.api_key:
            raise ConfigurationError("OpenAI API key not configured")
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=httpx.Timeout(self._config.timeout, connect=10.0),
            headers={"Authorization": f"Bearer {self._config.api_key}"},
            transport=self._transport,
        )

    async def upload(self, file_name: str, stream: BinaryIO, content_type: str | None = None) -> str:
        """Upload *stream* and return the provider's file id."""
        async with self._client() as client:
            try:
                response = await client.post(
                    "/files",
                    data={"purpose": FILE_PURPOSE},
                    files={"file": (file_name, stream, content_type or "application/octet-stream")},
                )
            except httpx.HTTPError as e:
                logger.warning("File upload failed: %s", e)
                raise UpstreamError(GENERIC_UPLOAD_MESSAGE) from e

        payload: Any
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error or not isinstance(payload, dict) or not payload.get("id"):
            message = GENERIC_UPLOAD_MESSAGE
            if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
                message = payload["error"].get("message") or message
            raise UpstreamError(message, upstream_status=response.status_code, payload=payload)

        return payload["id"]

    async def delete(self, file_id: str) -> None:
        async with self._client() as client:
            try:
                response = await client.delete(f"/files/{file_id}")
            except httpx.HTTPError as e:
                raise UpstreamError("Error deleting file") from e
        if response.is_error:
            raise UpstreamError("Error deleting file", upstream_status=response.status_code)
