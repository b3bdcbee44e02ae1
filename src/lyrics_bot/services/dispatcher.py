"""Route classified updates to browsing, commands or the dialog state machine."""

import logging
from dataclasses import dataclass

from lyrics_bot.adapters.telegram_client import TelegramClient
from lyrics_bot.api.classifier import classify_update
from lyrics_bot.api.telegram_models import TelegramUpdate
from lyrics_bot.domain.catalog import Category
from lyrics_bot.domain.events import (
    Command,
    InboundEvent,
    InlineCallback,
    MenuButton,
    PhotoAttachment,
)
from lyrics_bot.domain.replies import Reply
from lyrics_bot.keyboards import (
    ADD_SONG,
    CANCEL,
    CHOIR_SONGS,
    EDIT_SONG,
    HELP,
    NON_CHOIR_SONGS,
    RANDOM_SONG,
    SEARCH_LYRICS,
    UPLOAD_IMAGE,
    VIEW_ALL_SONGS,
)
from lyrics_bot.services.browsing import BrowsingService
from lyrics_bot.services.commands import CommandHandler
from lyrics_bot.services.dialogs import DialogService
from lyrics_bot.services.failures import failure_text

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Something went wrong. Please try again later."


@dataclass
class UpdateDispatcher:
    """Entry point for every inbound update.

    Guards are evaluated in a fixed order: commands, then exact button
    labels, then the sender's active dialog, then catalog browsing. Button
    labels therefore shadow dialog input; typing "Cancel" as a song title
    cancels the dialog.
    """

    telegram_client: TelegramClient
    browsing_service: BrowsingService
    dialog_service: DialogService
    command_handler: CommandHandler
    environment: str = "production"

    async def handle_update(self, update: TelegramUpdate) -> None:
        """Handle one update; failures never escape to other updates."""
        event = classify_update(update)
        if event is None:
            logger.info("Ignoring update", extra={"update_id": update.update_id})
            return
        if isinstance(event, InlineCallback):
            await self._answer_callback(event.callback_id)
        try:
            replies = await self.dispatch(event)
        except Exception as exc:
            logger.exception(
                "Failed to handle update",
                extra={"update_id": update.update_id, "user_id": event.sender_id},
            )
            replies = [Reply(text=failure_text(GENERIC_FAILURE, exc, self.environment))]
        if event.chat_id is not None:
            await self._send(event.chat_id, replies)

    async def dispatch(self, event: InboundEvent) -> list[Reply]:
        """Compute the replies for a classified event."""
        if isinstance(event, InlineCallback):
            return self.browsing_service.handle_callback(event.data)
        if isinstance(event, Command):
            return await self.command_handler.handle(event)
        if isinstance(event, MenuButton):
            return await self._press(event)
        replies = await self.dialog_service.handle_input(event.sender_id, event)
        if replies is not None:
            return replies
        if isinstance(event, PhotoAttachment):
            return self.browsing_service.handle_photo()
        return self.browsing_service.handle_text(event.text)

    async def _press(self, event: MenuButton) -> list[Reply]:  # noqa: PLR0911
        label = event.label
        if label == SEARCH_LYRICS:
            return self.browsing_service.search_prompt()
        if label == VIEW_ALL_SONGS:
            return self.browsing_service.letters_prompt()
        if label == CHOIR_SONGS:
            return self.browsing_service.category(Category.CHOIR)
        if label == NON_CHOIR_SONGS:
            return self.browsing_service.category(Category.NON_CHOIR)
        if label == RANDOM_SONG:
            return self.browsing_service.random_song()
        if label == HELP:
            return self.browsing_service.help()
        if label == ADD_SONG:
            return await self.dialog_service.start_add(event.sender_id)
        if label == EDIT_SONG:
            return await self.dialog_service.start_edit(event.sender_id)
        if label == UPLOAD_IMAGE:
            return await self.dialog_service.start_upload(event.sender_id)
        if label == CANCEL:
            return await self.dialog_service.cancel(event.sender_id)
        raise ValueError(f"Unknown menu button {label!r}")

    async def _answer_callback(self, callback_id: str) -> None:
        try:
            await self.telegram_client.answer_callback_query(callback_id)
        except Exception:
            logger.exception(
                "Failed to answer callback query", extra={"callback_id": callback_id}
            )

    async def _send(self, chat_id: int, replies: list[Reply]) -> None:
        # Delivery is best effort; a failed send never changes dialog state.
        for reply in replies:
            try:
                if reply.photo_url:
                    await self.telegram_client.send_photo(
                        chat_id=chat_id,
                        photo=reply.photo_url,
                        caption=reply.text or None,
                        reply_markup=reply.reply_markup,
                    )
                else:
                    await self.telegram_client.send_message(
                        chat_id=chat_id,
                        text=reply.text,
                        reply_markup=reply.reply_markup,
                    )
            except Exception:
                logger.exception("Failed to send reply", extra={"chat_id": chat_id})
