"""Immutable page records shared by the paginator, layout and controller."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Iterable

from .page_ids import (
    FASTEXT_COLOURS,
    Colour,
    ContentType,
    PageCategory,
    content_type_for,
    page_category_for,
)


MAX_TITLE_LENGTH = 40


class InputMode(Enum):
    """Number of digits a page expects before navigation is dispatched."""

    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"

    @property
    def max_length(self) -> int:
        return _INPUT_LENGTHS[self]

    @classmethod
    def coerce(cls, value: "InputMode | str | None") -> "InputMode":
        if value is None:
            return cls.TRIPLE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"unknown input mode: {value!r}") from exc


_INPUT_LENGTHS = {
    InputMode.SINGLE: 1,
    InputMode.DOUBLE: 2,
    InputMode.TRIPLE: 3,
}


@dataclass(frozen=True, slots=True)
class PageLink:
    """Labelled navigation target, optionally bound to a fastext colour."""

    label: str
    target_page: str
    colour: Colour | None = None

    def __post_init__(self) -> None:
        if self.colour is not None:
            colour = Colour.coerce(self.colour)
            if colour not in FASTEXT_COLOURS:
                raise ValueError(f"link colour must be a fastext colour: {colour}")
            object.__setattr__(self, "colour", colour)


@dataclass(frozen=True, slots=True)
class Continuation:
    """Position of a page within a multi-page chain."""

    current_page: str
    total_pages: int
    current_index: int
    previous_page: str | None = None
    next_page: str | None = None

    def __post_init__(self) -> None:
        if self.total_pages < 1:
            raise ValueError("continuation chains contain at least one page")
        if not 0 <= self.current_index < self.total_pages:
            raise ValueError(
                f"continuation index {self.current_index} outside chain of "
                f"{self.total_pages}"
            )
        if (self.previous_page is not None) != (self.current_index > 0):
            raise ValueError("previous_page must be set exactly when index > 0")
        if (self.next_page is not None) != (
            self.current_index < self.total_pages - 1
        ):
            raise ValueError("next_page must be set exactly when a later page exists")

    @property
    def has_previous(self) -> bool:
        return self.previous_page is not None

    @property
    def has_next(self) -> bool:
        return self.next_page is not None

    @property
    def position(self) -> int:
        """Return the 1-based position shown to the viewer."""

        return self.current_index + 1


@dataclass(frozen=True)
class PageMeta:
    """Metadata that travels with a page from the fetcher to the renderer."""

    source: str | None = None
    last_updated: datetime | None = None
    cache_status: str | None = None
    continuation: Continuation | None = None
    ai_context_id: str | None = None
    input_mode: InputMode = InputMode.TRIPLE
    input_options: tuple[str, ...] = ()
    single_digit_shortcuts: tuple[str, ...] = ()
    machine_generated: bool = False
    custom_hints: tuple[str, ...] = ()
    offline: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "input_mode", InputMode.coerce(self.input_mode))
        object.__setattr__(self, "input_options", tuple(self.input_options))
        object.__setattr__(
            self, "single_digit_shortcuts", tuple(self.single_digit_shortcuts)
        )
        object.__setattr__(self, "custom_hints", tuple(self.custom_hints))
        if self.last_updated is not None and self.last_updated.tzinfo is None:
            raise ValueError("last_updated must be timezone-aware")

    def lists_single_digit(self, digit: str) -> bool:
        """Return ``True`` when ``digit`` is a declared single-key option."""

        return digit in self.input_options or digit in self.single_digit_shortcuts


@dataclass(frozen=True, slots=True)
class Page:
    """A titled block of rows plus its links and metadata."""

    page_id: str
    title: str
    rows: tuple[str, ...] = ()
    links: tuple[PageLink, ...] = ()
    meta: PageMeta = field(default_factory=PageMeta)
    category: PageCategory = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("page title must not be empty")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise ValueError(
                f"page title exceeds {MAX_TITLE_LENGTH} characters: {self.title!r}"
            )
        object.__setattr__(self, "rows", tuple(self.rows))
        object.__setattr__(self, "links", tuple(self.links))
        object.__setattr__(self, "category", page_category_for(self.page_id))

    @property
    def content_type(self) -> ContentType | None:
        return content_type_for(self.page_id)

    @property
    def continuation(self) -> Continuation | None:
        return self.meta.continuation

    def link_for_colour(self, colour: Colour | str) -> PageLink | None:
        """Return the first link bound to ``colour``."""

        wanted = Colour.coerce(colour)
        for link in self.links:
            if link.colour is wanted:
                return link
        return None

    def link_for_label(self, label: str) -> PageLink | None:
        """Return the first link whose label equals ``label``."""

        for link in self.links:
            if link.label == label:
                return link
        return None

    def coloured_links(self) -> list[PageLink]:
        return [link for link in self.links if link.colour is not None]

    def with_rows(self, rows: Iterable[str]) -> "Page":
        return replace(self, rows=tuple(rows))


__all__ = [
    "Continuation",
    "InputMode",
    "MAX_TITLE_LENGTH",
    "Page",
    "PageLink",
    "PageMeta",
]
