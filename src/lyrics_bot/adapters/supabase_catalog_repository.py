"""Supabase implementation for the song catalog."""

import random
from dataclasses import dataclass

from supabase import Client

from lyrics_bot.domain.catalog import CatalogEntry, Category, EditableField
from lyrics_bot.services.catalog import CatalogRepository

_COLUMNS = "title, lyrics, category, image"
_FIELD_COLUMNS = {
    EditableField.TITLE: "title",
    EditableField.LYRICS: "lyrics",
    EditableField.CATEGORY: "category",
    EditableField.IMAGE: "image",
}


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed repository for catalog entries."""

    client: Client
    table: str = "lyrics"

    def find_by_title(self, title: str) -> CatalogEntry | None:
        """Return the entry with an exactly matching title, if present."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .eq("title", title)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def search_by_prefix(self, prefix: str, limit: int) -> list[str]:
        """Return titles starting with the prefix; a zero limit returns all.

        PostgREST reads ``*`` as a wildcard in ``ilike`` and has no escape for
        it, so only the part before the first ``*`` goes to the server and the
        rest is matched here.
        """
        server_prefix, star, _ = prefix.partition("*")
        query = (
            self.client.table(self.table)
            .select("title")
            .ilike("title", f"{_escape_like(server_prefix)}%")
            .order("title")
        )
        if limit > 0 and not star:
            query = query.limit(limit)
        response = query.execute()
        titles = [str(row["title"]) for row in response.data or []]
        if star:
            lowered = prefix.lower()
            titles = [title for title in titles if title.lower().startswith(lowered)]
            if limit > 0:
                titles = titles[:limit]
        return titles

    def find_by_category(self, category: Category) -> list[str]:
        """Return titles stored under a category."""
        response = (
            self.client.table(self.table)
            .select("title")
            .eq("category", category.value)
            .order("title")
            .execute()
        )
        return [str(row["title"]) for row in response.data or []]

    def random_one(self) -> CatalogEntry | None:
        """Pick a random title and load its entry."""
        response = self.client.table(self.table).select("title").execute()
        titles = [str(row["title"]) for row in response.data or []]
        if not titles:
            return None
        return self.find_by_title(random.choice(titles))  # noqa: S311

    def insert(self, entry: CatalogEntry) -> None:
        """Insert a new entry."""
        response = (
            self.client.table(self.table)
            .insert(
                {
                    "title": entry.title,
                    "lyrics": entry.lyrics,
                    "category": entry.category.value if entry.category else None,
                    "image": entry.image_url,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to insert song {entry.title!r}")

    def update_field(self, title: str, field: EditableField, value: str) -> None:
        """Set one column on the entry identified by its current title."""
        response = (
            self.client.table(self.table)
            .update({_FIELD_COLUMNS[field]: value})
            .eq("title", title)
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update song {title!r}")


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_entry(row: dict[str, object]) -> CatalogEntry:
    """Parse a catalog row into a domain model."""
    category = row.get("category")
    return CatalogEntry(
        title=str(row.get("title", "")),
        lyrics=str(row.get("lyrics") or ""),
        category=Category.from_label(category) if isinstance(category, str) else None,
        image_url=str(row.get("image") or ""),
    )
