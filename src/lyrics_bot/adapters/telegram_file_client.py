"""Telegram file download client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_API_BASE = "https://api.telegram.org"


class TelegramFileClient(Protocol):
    """Interface for fetching files users attached to messages."""

    async def download_file_bytes(self, file_id: str) -> bytes:
        """Download a Telegram file and return its bytes."""


@dataclass
class HttpxTelegramFileClient(TelegramFileClient):
    """Telegram file client using httpx."""

    bot_token: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, bot_token: str) -> "HttpxTelegramFileClient":
        """Create a Telegram file client with a managed httpx session."""
        return cls(bot_token=bot_token, http_client=httpx.AsyncClient())

    async def resolve_download_url(self, file_id: str) -> str:
        """Resolve a file id to its direct download URL via getFile."""
        response = await self.http_client.get(
            f"{_API_BASE}/bot{self.bot_token}/getFile",
            params={"file_id": file_id},
            timeout=10,
        )
        response.raise_for_status()
        payload = response.json()
        if not payload.get("ok"):
            raise RuntimeError(f"Telegram getFile failed for {file_id}")
        file_path = payload["result"].get("file_path")
        if not file_path:
            raise RuntimeError(f"Telegram returned no file path for {file_id}")
        return f"{_API_BASE}/file/bot{self.bot_token}/{file_path}"

    async def download_file_bytes(self, file_id: str) -> bytes:
        """Download the bytes behind a Telegram file id."""
        download_url = await self.resolve_download_url(file_id)
        response = await self.http_client.get(download_url, timeout=20)
        response.raise_for_status()
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
