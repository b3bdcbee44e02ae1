"""Services for reading and writing the song catalog."""

from dataclasses import dataclass
from typing import Protocol

from lyrics_bot.domain.catalog import CatalogEntry, Category, EditableField


class CatalogRepository(Protocol):
    """Persistence interface for catalog entries."""

    def find_by_title(self, title: str) -> CatalogEntry | None:
        """Return the entry with an exactly matching title, if present."""

    def search_by_prefix(self, prefix: str, limit: int) -> list[str]:
        """Return titles starting with the prefix, case-insensitively."""

    def find_by_category(self, category: Category) -> list[str]:
        """Return titles in a category."""

    def random_one(self) -> CatalogEntry | None:
        """Return a random entry, or None when the catalog is empty."""

    def insert(self, entry: CatalogEntry) -> None:
        """Insert a new entry."""

    def update_field(self, title: str, field: EditableField, value: str) -> None:
        """Set one field on the entry identified by title."""


@dataclass
class CatalogService:
    """Application service for catalog operations."""

    repository: CatalogRepository
    suggestion_limit: int = 10

    def find(self, title: str) -> CatalogEntry | None:
        """Look up a song by its exact title."""
        cleaned = title.strip()
        if not cleaned:
            return None
        return self.repository.find_by_title(cleaned)

    def suggest(self, text: str) -> list[str]:
        """Return titles that start with the given text."""
        cleaned = text.strip()
        if not cleaned:
            return []
        return self.repository.search_by_prefix(cleaned, self.suggestion_limit)

    def titles_starting_with(self, letter: str) -> list[str]:
        """Return every title starting with a letter."""
        return sorted(self.repository.search_by_prefix(letter, limit=0))

    def titles_in(self, category: Category) -> list[str]:
        return sorted(self.repository.find_by_category(category))

    def random_entry(self) -> CatalogEntry | None:
        return self.repository.random_one()

    def add(self, entry: CatalogEntry) -> None:
        """Insert an entry with fully resolved values."""
        if not entry.title.strip():
            raise ValueError("Catalog entries need a title")
        self.repository.insert(entry)

    def update_field(self, title: str, field: EditableField, value: str) -> None:
        """Update one field of the entry currently titled ``title``."""
        self.repository.update_field(title, field, value)
