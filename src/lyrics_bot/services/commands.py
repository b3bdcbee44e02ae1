"""Command handlers for Telegram slash commands."""

import logging
from dataclasses import dataclass

from lyrics_bot.domain.catalog import CatalogEntry
from lyrics_bot.domain.events import Command
from lyrics_bot.domain.replies import Reply
from lyrics_bot.services.authorization import AuthorizationGate
from lyrics_bot.services.browsing import BrowsingService
from lyrics_bot.services.catalog import CatalogService
from lyrics_bot.services.dialogs import DialogService
from lyrics_bot.services.failures import failure_text
from lyrics_bot.services.media import MediaIngestionError, MediaIngestionService
from lyrics_bot.telegram_commands import BotCommand

logger = logging.getLogger(__name__)

ADD_SONG_USAGE = "Usage: /addsong <title>|<lyrics>|<image_url>"


@dataclass
class CommandHandler:
    """Handle the bot's slash commands."""

    browsing_service: BrowsingService
    dialog_service: DialogService
    catalog_service: CatalogService
    media_service: MediaIngestionService
    authorization: AuthorizationGate
    environment: str = "production"

    async def handle(self, command: Command) -> list[Reply]:  # noqa: PLR0911
        """Run a command and return the replies to send."""
        bot_command = BotCommand.from_name(command.name)
        if bot_command is BotCommand.START:
            return self.browsing_service.main_menu()
        if bot_command is BotCommand.HELP:
            return self.browsing_service.help()
        if bot_command is BotCommand.LYRICS:
            if not command.args.strip():
                return [Reply(text="Usage: /lyrics <song title>")]
            return self.browsing_service.lyrics(command.args)
        if bot_command is BotCommand.ADD_SONG:
            return self._add_song(command)
        if bot_command is BotCommand.UPLOAD_IMAGE:
            return await self._upload_image(command)
        if bot_command is BotCommand.CANCEL:
            return await self.dialog_service.cancel(command.sender_id)
        return [
            Reply(text=f"Unknown command /{command.name}. Send /help to see options.")
        ]

    def _add_song(self, command: Command) -> list[Reply]:
        if not self.authorization.is_privileged(command.sender_id):
            return [Reply(text="You are not authorized to add songs.")]
        parts = command.args.split("|", maxsplit=2)
        if len(parts) != 3:  # noqa: PLR2004
            return [Reply(text=ADD_SONG_USAGE)]
        title, lyrics, image_url = (part.strip() for part in parts)
        if not title:
            return [Reply(text=ADD_SONG_USAGE)]
        entry = CatalogEntry(title=title, lyrics=lyrics, image_url=image_url)
        try:
            self.catalog_service.add(entry)
        except Exception as exc:
            logger.exception("Failed to insert song", extra={"title": title})
            return [
                Reply(text=failure_text("Failed to add song.", exc, self.environment))
            ]
        logger.info("Song added via command", extra={"title": title})
        return [Reply(text="Song added successfully!")]

    async def _upload_image(self, command: Command) -> list[Reply]:
        if command.photo_file_id is None:
            return await self.dialog_service.start_upload(command.sender_id)
        if not self.authorization.is_privileged(command.sender_id):
            return [Reply(text="You are not authorized to upload images.")]
        try:
            url = await self.media_service.rehost(command.photo_file_id)
        except MediaIngestionError as exc:
            return [
                Reply(text=failure_text(exc.user_message, exc, self.environment))
            ]
        return [Reply(text=f"Image uploaded successfully: {url}")]
