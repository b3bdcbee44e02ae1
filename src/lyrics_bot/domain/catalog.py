"""Domain models for the song catalog."""

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    """Song categories, valued by their stored and displayed label."""

    CHOIR = "Choir"
    NON_CHOIR = "Non-Choir"

    @classmethod
    def from_label(cls, label: str) -> "Category | None":
        """Return the category with an exactly matching label, if any."""
        for category in cls:
            if category.value == label:
                return category
        return None


class EditableField(Enum):
    """Catalog entry fields that can be changed through the edit dialog."""

    TITLE = "title"
    LYRICS = "lyrics"
    CATEGORY = "category"
    IMAGE = "image"

    @property
    def button_label(self) -> str:
        return f"Edit {self.value.capitalize()}"

    @classmethod
    def from_button_label(cls, label: str) -> "EditableField | None":
        """Normalize a button label to a field: lower-cased second word."""
        words = label.split()
        if len(words) != 2 or words[0] != "Edit":  # noqa: PLR2004
            return None
        try:
            return cls(words[1].lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class CatalogEntry:
    """A browsable song in the catalog."""

    title: str
    lyrics: str = ""
    category: Category | None = None
    image_url: str = ""
