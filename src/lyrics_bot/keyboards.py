"""Telegram keyboard payloads and button labels."""

from lyrics_bot.domain.catalog import Category, EditableField

SEARCH_LYRICS = "🎵 Search Lyrics"
VIEW_ALL_SONGS = "📝 View All Songs"
CHOIR_SONGS = "👥 Choir Songs"
NON_CHOIR_SONGS = "🎵 Non-Choir Songs"
RANDOM_SONG = "🎲 Random Song"
UPLOAD_IMAGE = "⬆️ Upload Image"
ADD_SONG = "➕ Add Song"
EDIT_SONG = "✏️ Edit Song"
HELP = "❓ Help"
CANCEL = "Cancel"

MENU_BUTTON_LABELS = frozenset(
    {
        SEARCH_LYRICS,
        VIEW_ALL_SONGS,
        CHOIR_SONGS,
        NON_CHOIR_SONGS,
        RANDOM_SONG,
        UPLOAD_IMAGE,
        ADD_SONG,
        EDIT_SONG,
        HELP,
        CANCEL,
    }
)

# Telegram rejects callback_data longer than 64 bytes.
CALLBACK_DATA_LIMIT = 64


def main_menu_keyboard() -> dict:
    return _reply_keyboard(
        [
            [SEARCH_LYRICS, VIEW_ALL_SONGS],
            [CHOIR_SONGS, NON_CHOIR_SONGS],
            [RANDOM_SONG],
            [UPLOAD_IMAGE, ADD_SONG],
            [EDIT_SONG],
            [HELP],
        ]
    )


def category_keyboard() -> dict:
    return _reply_keyboard([[category.value for category in Category]])


def edit_field_keyboard() -> dict:
    fields = [field.button_label for field in EditableField]
    return _reply_keyboard([fields[:2], fields[2:], [CANCEL]])


def remove_keyboard() -> dict:
    return {"remove_keyboard": True}


def song_list_keyboard(titles: list[str]) -> dict:
    """Build an inline keyboard with one button per song title."""
    return {
        "inline_keyboard": [
            [{"text": title, "callback_data": callback_data_for(title)}]
            for title in titles
        ]
    }


def callback_data_for(title: str) -> str:
    """Use the title as callback data, truncated to Telegram's byte limit."""
    encoded = title.encode("utf-8")
    if len(encoded) <= CALLBACK_DATA_LIMIT:
        return title
    return encoded[:CALLBACK_DATA_LIMIT].decode("utf-8", errors="ignore")


def _reply_keyboard(rows: list[list[str]]) -> dict:
    return {
        "keyboard": [[{"text": label} for label in row] for row in rows],
        "resize_keyboard": True,
    }
