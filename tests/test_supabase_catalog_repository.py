"""Tests for the Supabase catalog repository."""

from dataclasses import dataclass, field

import pytest

from lyrics_bot.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from lyrics_bot.domain.catalog import CatalogEntry, Category, EditableField


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_limit: int | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def ilike(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


@pytest.fixture
def client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def repository(client: FakeClient) -> SupabaseCatalogRepository:
    return SupabaseCatalogRepository(client=client)  # type: ignore[arg-type]


def test_find_by_title_parses_row(
    client: FakeClient, repository: SupabaseCatalogRepository
) -> None:
    client.table("lyrics").queue(
        "select",
        [
            {
                "title": "Amazing Grace",
                "lyrics": "Amazing grace",
                "category": "Choir",
                "image": "https://i.imgur.com/grace.jpg",
            }
        ],
    )

    entry = repository.find_by_title("Amazing Grace")

    assert entry == CatalogEntry(
        title="Amazing Grace",
        lyrics="Amazing grace",
        category=Category.CHOIR,
        image_url="https://i.imgur.com/grace.jpg",
    )
    assert client.tables["lyrics"].last_filters == [("title", "Amazing Grace")]


def test_find_by_title_tolerates_legacy_rows(
    client: FakeClient, repository: SupabaseCatalogRepository
) -> None:
    client.table("lyrics").queue(
        "select", [{"title": "Old Hymn", "lyrics": None, "category": "Gospel"}]
    )

    entry = repository.find_by_title("Old Hymn")

    assert entry == CatalogEntry(title="Old Hymn")


def test_find_by_title_missing(repository: SupabaseCatalogRepository) -> None:
    assert repository.find_by_title("Nope") is None


def test_search_by_prefix_escapes_wildcards(
    client: FakeClient, repository: SupabaseCatalogRepository
) -> None:
    client.table("lyrics").queue("select", [{"title": "100% Love"}])

    titles = repository.search_by_prefix("100%", limit=10)

    table = client.tables["lyrics"]
    assert titles == ["100% Love"]
    assert table.last_filters == [("title", "100\\%%")]
    assert table.last_limit == 10


def test_search_by_prefix_without_limit(
    client: FakeClient, repository: SupabaseCatalogRepository
) -> None:
    repository.search_by_prefix("A", limit=0)

    assert client.tables["lyrics"].last_limit is None


def test_find_by_category(
    client: FakeClient, repository: SupabaseCatalogRepository
) -> None:
    client.table("lyrics").queue("select", [{"title": "Abide With Me"}])

    titles = repository.find_by_category(Category.NON_CHOIR)

    assert titles == ["Abide With Me"]
    assert client.tables["lyrics"].last_filters == [("category", "Non-Choir")]


def test_random_one_on_empty_catalog(repository: SupabaseCatalogRepository) -> None:
    assert repository.random_one() is None


def test_random_one_loads_entry(
    client: FakeClient, repository: SupabaseCatalogRepository
) -> None:
    table = client.table("lyrics")
    table.queue("select", [{"title": "Abide With Me"}])
    table.queue("select", [{"title": "Abide With Me", "lyrics": "Abide with me"}])

    entry = repository.random_one()

    assert entry == CatalogEntry(title="Abide With Me", lyrics="Abide with me")


def test_insert_payload(
    client: FakeClient, repository: SupabaseCatalogRepository
) -> None:
    client.table("lyrics").queue("insert", [{"title": "Night Song"}])

    repository.insert(
        CatalogEntry(
            title="Night Song",
            lyrics="La la la",
            category=Category.CHOIR,
            image_url="https://example.com/night.png",
        )
    )

    assert client.tables["lyrics"].last_payload == {
        "title": "Night Song",
        "lyrics": "La la la",
        "category": "Choir",
        "image": "https://example.com/night.png",
    }


def test_insert_without_returned_row_raises(
    repository: SupabaseCatalogRepository,
) -> None:
    with pytest.raises(RuntimeError):
        repository.insert(CatalogEntry(title="Night Song"))


def test_update_field_targets_current_title(
    client: FakeClient, repository: SupabaseCatalogRepository
) -> None:
    client.table("lyrics").queue("update", [{"title": "New Title"}])

    repository.update_field("Old Title", EditableField.TITLE, "New Title")

    table = client.tables["lyrics"]
    assert table.last_payload == {"title": "New Title"}
    assert table.last_filters == [("title", "Old Title")]


def test_update_image_uses_image_column(
    client: FakeClient, repository: SupabaseCatalogRepository
) -> None:
    client.table("lyrics").queue("update", [{"title": "Night Song"}])

    repository.update_field("Night Song", EditableField.IMAGE, "https://x.test/a.png")

    assert client.tables["lyrics"].last_payload == {"image": "https://x.test/a.png"}


def test_update_missing_song_raises(repository: SupabaseCatalogRepository) -> None:
    with pytest.raises(RuntimeError):
        repository.update_field("Nope", EditableField.LYRICS, "text")


def test_custom_table_name(client: FakeClient) -> None:
    repository = SupabaseCatalogRepository(
        client=client,  # type: ignore[arg-type]
        table="songs",
    )

    repository.find_by_title("Amazing Grace")

    assert "songs" in client.tables


def test_search_by_prefix_treats_star_literally(
    client: FakeClient, repository: SupabaseCatalogRepository
) -> None:
    client.table("lyrics").queue(
        "select",
        [{"title": "A*B Song"}, {"title": "AXB Song"}, {"title": "a*b again"}],
    )

    titles = repository.search_by_prefix("A*B", limit=1)

    table = client.tables["lyrics"]
    assert titles == ["A*B Song"]
    assert table.last_filters == [("title", "A%")]
    assert table.last_limit is None
