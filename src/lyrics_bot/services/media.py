"""Fetch-then-rehost pipeline for images users attach in chat."""

import logging
from dataclasses import dataclass

from lyrics_bot.adapters.imgur_client import ImageHost
from lyrics_bot.adapters.telegram_file_client import TelegramFileClient

logger = logging.getLogger(__name__)


class MediaIngestionError(RuntimeError):
    """Raised when an attachment can't be turned into a public URL."""

    user_message = "Failed to process image."


class MediaFetchError(MediaIngestionError):
    """The attachment bytes could not be downloaded."""

    user_message = "Failed to download image."


class MediaUploadError(MediaIngestionError):
    """The image host rejected or failed the upload."""

    user_message = "Failed to upload image."


@dataclass
class MediaIngestionService:
    """Turns a Telegram file reference into a durable public URL."""

    file_client: TelegramFileClient
    image_host: ImageHost

    async def rehost(self, file_id: str) -> str:
        """Download the file and upload it to the image host."""
        try:
            content = await self.file_client.download_file_bytes(file_id)
        except Exception as exc:
            logger.exception(
                "Failed to download Telegram file", extra={"file_id": file_id}
            )
            raise MediaFetchError(str(exc)) from exc
        try:
            url = await self.image_host.upload_image(content)
        except Exception as exc:
            logger.exception("Failed to upload image", extra={"file_id": file_id})
            raise MediaUploadError(str(exc)) from exc
        logger.info("Image rehosted", extra={"file_id": file_id, "url": url})
        return url
