from __future__ import annotations

import json
from pathlib import Path

import pytest

from teletext.runtime.favorites import (
    FAVORITE_SLOTS,
    FavoritesError,
    FavoritesTable,
    load_favorites,
    save_favorites,
)


def test_table_starts_with_empty_slots() -> None:
    table = FavoritesTable()

    assert table.as_list() == [""] * FAVORITE_SLOTS
    assert table.get(0) is None


def test_set_get_and_clear() -> None:
    table = FavoritesTable()
    table.set(3, "301")

    assert table.get(3) == "301"
    table.clear(3)
    assert table.get(3) is None


def test_table_validates_slots_and_ids() -> None:
    table = FavoritesTable()

    with pytest.raises(FavoritesError, match="outside range"):
        table.get(10)
    with pytest.raises(FavoritesError, match="valid page id"):
        table.set(0, "99")


def test_load_favorites_returns_empty_for_missing_path(tmp_path: Path) -> None:
    assert load_favorites(tmp_path / "missing.json").as_list() == [""] * FAVORITE_SLOTS


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    table = FavoritesTable.from_iterable(["201", "", "450"])
    path = tmp_path / "state" / "favorites.json"

    save_favorites(table, path)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["version"] == 1
    assert payload["favorites"][:3] == ["201", "", "450"]
    assert load_favorites(path).as_list() == table.as_list()
    assert list(path.parent.iterdir()) == [path]


def test_load_favorites_rejects_unknown_versions(tmp_path: Path) -> None:
    path = tmp_path / "favorites.json"
    path.write_text(json.dumps({"version": 2, "favorites": []}), encoding="utf-8")

    with pytest.raises(FavoritesError, match="unsupported favourites version"):
        load_favorites(path)


def test_load_favorites_rejects_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "favorites.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(FavoritesError, match="not valid JSON"):
        load_favorites(path)


def test_from_iterable_rejects_too_many_slots() -> None:
    with pytest.raises(FavoritesError, match="at most 10"):
        FavoritesTable.from_iterable(["201"] * 11)
