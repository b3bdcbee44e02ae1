"""Imgur image hosting client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_UPLOAD_URL = "https://api.imgur.com/3/upload"


class ImageHost(Protocol):
    """Interface for rehosting images at a public URL."""

    async def upload_image(self, content: bytes, filename: str = "image.jpg") -> str:
        """Upload image bytes and return the public link."""


@dataclass
class HttpxImgurClient(ImageHost):
    """Anonymous Imgur uploads authenticated with a client id."""

    client_id: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, client_id: str) -> "HttpxImgurClient":
        """Create an Imgur client with a managed httpx session."""
        return cls(client_id=client_id, http_client=httpx.AsyncClient())

    async def upload_image(self, content: bytes, filename: str = "image.jpg") -> str:
        """Upload an image as multipart form data and return its link."""
        response = await self.http_client.post(
            _UPLOAD_URL,
            headers={"Authorization": f"Client-ID {self.client_id}"},
            files={"image": (filename, content)},
            timeout=30,
        )
        response.raise_for_status()
        payload = response.json()
        data = payload.get("data") if isinstance(payload, dict) else None
        link = data.get("link") if isinstance(data, dict) else None
        if not isinstance(link, str) or not link:
            raise RuntimeError(f"Imgur upload returned no link: {payload}")
        return link

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
