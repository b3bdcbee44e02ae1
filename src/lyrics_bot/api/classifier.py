"""Classify raw Telegram updates into inbound events."""

from lyrics_bot.api.telegram_models import (
    TelegramMessage,
    TelegramPhotoSize,
    TelegramUpdate,
)
from lyrics_bot.domain.events import (
    Command,
    FreeText,
    InboundEvent,
    InlineCallback,
    MenuButton,
    PhotoAttachment,
)
from lyrics_bot.keyboards import MENU_BUTTON_LABELS


def classify_update(update: TelegramUpdate) -> InboundEvent | None:
    """Return the single event an update represents, or None to ignore it.

    Commands win over button labels, which win over attachments and plain
    text. A photo whose caption is a command stays a command and carries the
    photo along.
    """
    if update.callback_query:
        callback = update.callback_query
        return InlineCallback(
            sender_id=callback.from_user.id,
            chat_id=callback.message.chat.id if callback.message else None,
            callback_id=callback.id,
            data=callback.data or "",
        )

    message = update.message
    if message is None or message.from_user is None:
        return None
    sender_id = message.from_user.id
    chat_id = message.chat.id
    file_id = _attachment_file_id(message)

    text = message.text if message.text is not None else message.caption
    if text and text.startswith("/"):
        name, args = _parse_command(text)
        return Command(
            sender_id=sender_id,
            chat_id=chat_id,
            name=name,
            args=args,
            photo_file_id=file_id,
        )
    if message.text is not None and message.text in MENU_BUTTON_LABELS:
        return MenuButton(sender_id=sender_id, chat_id=chat_id, label=message.text)
    if file_id is not None:
        return PhotoAttachment(sender_id=sender_id, chat_id=chat_id, file_id=file_id)
    if message.text:
        return FreeText(sender_id=sender_id, chat_id=chat_id, text=message.text)
    return None


def _parse_command(text: str) -> tuple[str, str]:
    """Split "/name@bot args" into a lower-cased name and the raw arguments."""
    parts = text[1:].split(maxsplit=1)
    if not parts:
        return "", ""
    head, *rest = parts
    name = head.split("@", maxsplit=1)[0].lower()
    return name, rest[0] if rest else ""


def _attachment_file_id(message: TelegramMessage) -> str | None:
    if message.photo:
        return _select_largest_photo(message.photo).file_id
    if message.document and message.document.is_image:
        return message.document.file_id
    return None


def _select_largest_photo(photos: list[TelegramPhotoSize]) -> TelegramPhotoSize:
    """Select the largest photo size from the Telegram payload."""
    return max(photos, key=lambda photo: (photo.width * photo.height))
