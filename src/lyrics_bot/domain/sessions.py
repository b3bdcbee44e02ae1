"""Domain models for admin dialog sessions."""

from dataclasses import dataclass
from enum import Enum

from lyrics_bot.domain.catalog import EditableField


class Stage(Enum):
    """Step of an active dialog. Idle is the absence of a session."""

    AWAITING_TITLE = "awaiting_title"
    AWAITING_CATEGORY = "awaiting_category"
    AWAITING_LYRICS = "awaiting_lyrics"
    AWAITING_IMAGE = "awaiting_image"
    EDIT_SELECT_SONG = "edit_select_song"
    EDIT_SELECT_FIELD = "edit_select_field"
    EDIT_ENTER_VALUE = "edit_enter_value"
    AWAITING_UPLOAD = "awaiting_upload"


@dataclass(frozen=True)
class Session:
    """Ephemeral per-user dialog state.

    Sessions are immutable; each step stores a new one built with
    ``dataclasses.replace`` from the previous state.
    """

    owner: int
    stage: Stage
    title: str = ""
    lyrics: str = ""
    category: str = ""
    edit_field: EditableField | None = None
