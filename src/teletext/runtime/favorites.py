"""Favourite page slots and their JSON persistence.

The persisted payload is versioned; only version ``1`` is understood::

    {"favorites": ["201", "", ...], "version": 1}
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ..page_ids import is_valid_page_id


FAVORITE_SLOTS = 10


class FavoritesError(ValueError):
    """Raised for invalid favourite slots or malformed favourite files."""


@dataclass(slots=True)
class FavoritesTable:
    """Ten ordered slots; an empty string marks an unset slot."""

    _slots: list[str] = field(
        init=False, default_factory=lambda: [""] * FAVORITE_SLOTS
    )

    @classmethod
    def from_iterable(cls, values: Iterable[str]) -> "FavoritesTable":
        table = cls()
        for index, value in enumerate(values):
            if index >= FAVORITE_SLOTS:
                raise FavoritesError(f"at most {FAVORITE_SLOTS} favourites supported")
            if value:
                table.set(index, value)
        return table

    def get(self, index: int) -> str | None:
        """Return the page id in slot ``index`` or ``None`` when unset."""

        self._check_index(index)
        return self._slots[index] or None

    def set(self, index: int, page_id: str) -> None:
        self._check_index(index)
        if not is_valid_page_id(page_id):
            raise FavoritesError(f"favourite slot {index} needs a valid page id")
        self._slots[index] = page_id

    def clear(self, index: int) -> None:
        self._check_index(index)
        self._slots[index] = ""

    def as_list(self) -> list[str]:
        return list(self._slots)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < FAVORITE_SLOTS:
            raise FavoritesError(
                f"favourite slot {index} outside range 0-{FAVORITE_SLOTS - 1}"
            )


def load_favorites(path: Path) -> FavoritesTable:
    """Return the table stored at ``path``, or an empty table if absent."""

    if not path.exists():
        return FavoritesTable()
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return FavoritesTable()

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FavoritesError(f"favourites file is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise FavoritesError("favourites payload must be a mapping")
    version = payload.get("version")
    if not isinstance(version, int) or isinstance(version, bool):
        raise FavoritesError("favourites version must be an integer")
    if version != 1:
        raise FavoritesError(f"unsupported favourites version: {version}")
    slots = payload.get("favorites", [])
    if not isinstance(slots, list) or not all(isinstance(item, str) for item in slots):
        raise FavoritesError("favourites must be a list of page ids")
    return FavoritesTable.from_iterable(slots)


def save_favorites(table: FavoritesTable, path: Path) -> None:
    """Persist ``table`` to ``path`` atomically."""

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"version": 1, "favorites": table.as_list()}
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            dir=str(path.parent),
            prefix=path.name,
            suffix=".tmp",
            encoding="utf-8",
            delete=False,
        ) as stream:
            temp_path = Path(stream.name)
            json.dump(payload, stream, sort_keys=True, separators=(",", ":"))
            stream.write("\n")
            stream.flush()
            os.fsync(stream.fileno())
        os.replace(temp_path, path)
    except Exception:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
        raise


__all__ = [
    "FAVORITE_SLOTS",
    "FavoritesError",
    "FavoritesTable",
    "load_favorites",
    "save_favorites",
]
