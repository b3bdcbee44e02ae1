"""Classified inbound events."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """A slash command, from message text or a photo caption."""

    sender_id: int
    chat_id: int
    name: str
    args: str = ""
    photo_file_id: str | None = None


@dataclass(frozen=True)
class MenuButton:
    """A reply-keyboard button press, matched by its exact label."""

    sender_id: int
    chat_id: int
    label: str


@dataclass(frozen=True)
class FreeText:
    """Any other text message."""

    sender_id: int
    chat_id: int
    text: str


@dataclass(frozen=True)
class PhotoAttachment:
    """An image sent as a photo or as an image document."""

    sender_id: int
    chat_id: int
    file_id: str


@dataclass(frozen=True)
class InlineCallback:
    """An inline keyboard button press."""

    sender_id: int
    chat_id: int | None
    callback_id: str
    data: str


InboundEvent = Command | MenuButton | FreeText | PhotoAttachment | InlineCallback


@dataclass(frozen=True)
class RawMedia:
    """Image input that still has to be fetched and rehosted."""

    file_id: str


@dataclass(frozen=True)
class DirectUrl:
    """Image input given as a ready-to-use URL."""

    url: str


ImageInput = RawMedia | DirectUrl
