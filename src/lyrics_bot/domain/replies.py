"""Outbound reply models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Reply:
    """A message to send back to the chat the event came from.

    When ``photo_url`` is set the reply is sent as a photo and ``text`` is
    used as its caption.
    """

    text: str = ""
    reply_markup: dict | None = None
    photo_url: str | None = None
