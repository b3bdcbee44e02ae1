"""Telegram bot command configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TelegramCommand:
    """Declarative bot command definition."""

    command: str
    description: str


class BotCommand(Enum):
    """Enum of bot commands (single source of truth)."""

    START = TelegramCommand("start", "Show the main menu")
    HELP = TelegramCommand("help", "How to use the bot")
    LYRICS = TelegramCommand("lyrics", "Get lyrics for a song title")
    ADD_SONG = TelegramCommand("addsong", "Add a song: title|lyrics|image URL")
    UPLOAD_IMAGE = TelegramCommand("uploadimage", "Upload an image to get a link")
    CANCEL = TelegramCommand("cancel", "Cancel the current operation")

    @classmethod
    def from_name(cls, name: str) -> "BotCommand | None":
        for entry in cls:
            if entry.value.command == name:
                return entry
        return None


def telegram_commands() -> list[dict[str, str]]:
    """Return commands formatted for Telegram API."""
    return [
        {"command": entry.value.command, "description": entry.value.description}
        for entry in BotCommand
    ]


CHAT_MENU_BUTTON: dict[str, object] = {"type": "commands"}
