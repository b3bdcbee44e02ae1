"""Stateless catalog browsing handlers."""

import string
from dataclasses import dataclass

from lyrics_bot.domain.catalog import CatalogEntry, Category
from lyrics_bot.domain.replies import Reply
from lyrics_bot.keyboards import main_menu_keyboard, song_list_keyboard
from lyrics_bot.services.catalog import CatalogService

COMING_SOON_TOKENS = frozenset(
    {
        "popular_series",
        "new_series",
        "popular_movies",
        "new_movies",
        "popular_anime",
        "new_anime",
    }
)

WELCOME_TEXT = "Welcome to Our Maranatha Choir Lyrics Bot! Please select an option:"

HELP_TEXT = (
    "Here's how to use the bot:\n\n"
    "🎵 Search Lyrics - Search for song lyrics\n"
    "📝 View All Songs - Browse songs by letter\n"
    "👥 Choir Songs / 🎵 Non-Choir Songs - Browse by category\n"
    "🎲 Random Song - Get a random song\n"
    "⬆️ Upload Image - Upload song images (Admin only)\n"
    "➕ Add Song - Add new songs (Admin only)\n"
    "✏️ Edit Song - Edit existing songs (Admin only)\n\n"
    "Commands:\n"
    "/lyrics <song title> - Get lyrics for a specific song\n"
    "/start - Show main menu\n"
    "/help - Show this help message\n"
    "/cancel - Cancel the current operation"
)

NOT_FOUND_TEXT = "Sorry, I couldn't find the lyrics for that song."


@dataclass
class BrowsingService:
    """Read-only handlers that never touch dialog sessions."""

    catalog_service: CatalogService

    def main_menu(self) -> list[Reply]:
        return [Reply(text=WELCOME_TEXT, reply_markup=main_menu_keyboard())]

    def help(self) -> list[Reply]:
        return [Reply(text=HELP_TEXT)]

    def search_prompt(self) -> list[Reply]:
        return [
            Reply(
                text=(
                    "Please enter a letter (A-Z) to see available songs, "
                    "or use /lyrics <song title> to search directly."
                )
            )
        ]

    def letters_prompt(self) -> list[Reply]:
        return [
            Reply(
                text=(
                    "Please select a letter (A-Z) "
                    "to see songs starting with that letter:"
                )
            )
        ]

    def lyrics(self, title: str) -> list[Reply]:
        """Send the song image, if any, followed by its lyrics."""
        entry = self.catalog_service.find(title)
        if entry is None:
            return [Reply(text=NOT_FOUND_TEXT)]
        return _song_replies(entry)

    def category(self, category: Category) -> list[Reply]:
        titles = self.catalog_service.titles_in(category)
        if not titles:
            return [Reply(text=f"No {category.value} songs found.")]
        return [
            Reply(
                text=f"Select a {category.value} song:",
                reply_markup=song_list_keyboard(titles),
            )
        ]

    def random_song(self) -> list[Reply]:
        entry = self.catalog_service.random_entry()
        if entry is None:
            return [Reply(text="The catalog is empty for now.")]
        return _song_replies(entry)

    def handle_text(self, text: str) -> list[Reply]:
        """Handle free text outside any dialog.

        A single character is a browse letter. Longer text is matched as an
        exact title first, then used for prefix suggestions.
        """
        cleaned = text.strip()
        if len(cleaned) == 1:
            return self._by_letter(cleaned)
        entry = self.catalog_service.find(cleaned)
        if entry is not None:
            return _song_replies(entry)
        suggestions = self.catalog_service.suggest(cleaned)
        if suggestions:
            return [
                Reply(
                    text="Did you mean:",
                    reply_markup=song_list_keyboard(suggestions),
                )
            ]
        return [
            Reply(
                text=(
                    f'No songs found matching "{cleaned}". '
                    "Send a letter (A-Z) to browse or use /lyrics <song title>."
                )
            )
        ]

    def handle_photo(self) -> list[Reply]:
        return [
            Reply(
                text=(
                    "I can't search by image. "
                    "Send a song title or a letter (A-Z) to browse."
                )
            )
        ]

    def handle_callback(self, data: str) -> list[Reply]:
        """Resolve an inline button press to a song."""
        if data in COMING_SOON_TOKENS:
            return [Reply(text=f"You selected: {data}\nThis feature is coming soon!")]
        entry = self.catalog_service.find(data)
        if entry is None:
            entry = self._find_truncated(data)
        if entry is None:
            return [Reply(text=NOT_FOUND_TEXT)]
        return _song_replies(entry)

    def _by_letter(self, letter: str) -> list[Reply]:
        upper = letter.upper()
        if upper not in string.ascii_uppercase:
            return [Reply(text="Please select a valid letter (A-Z).")]
        titles = self.catalog_service.titles_starting_with(upper)
        if not titles:
            return [Reply(text=f"No songs found starting with {upper}.")]
        return [
            Reply(
                text="Select a song to get the lyrics:",
                reply_markup=song_list_keyboard(titles),
            )
        ]

    def _find_truncated(self, data: str) -> CatalogEntry | None:
        # Long titles are cut to fit callback data; resolve unambiguous prefixes.
        matches = self.catalog_service.suggest(data)
        if len(matches) != 1:
            return None
        return self.catalog_service.find(matches[0])


def _song_replies(entry: CatalogEntry) -> list[Reply]:
    replies = []
    if entry.image_url:
        replies.append(Reply(photo_url=entry.image_url))
    replies.append(Reply(text=entry.lyrics or f"No lyrics stored for {entry.title}."))
    return replies
