"""Page identifier grammar and page-number range classification."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


INDEX_PAGE_ID = "100"
VALID_PAGE_RANGE = range(100, 900)
VALID_SUB_INDEX_RANGE = range(1, 100)
VALID_ARTICLE_PAGE_RANGE = range(2, 100)

_BASE_PATTERN = re.compile(r"([0-9]{3})")
_SUB_PAGE_PATTERN = re.compile(r"([0-9]{3})-([0-9]{1,2})")
_ARTICLE_PATTERN = re.compile(r"([0-9]{3})-([0-9]{1,2})-([0-9]{1,2})")
_LEADING_NUMBER = re.compile(r"([0-9]{3})(?:-|\Z)")


class PageIdError(ValueError):
    """Raised when a page identifier does not follow the page-id grammar."""


class PageIdKind(Enum):
    """Shapes accepted by the page-id grammar."""

    BASE = "base"
    SUB_PAGE = "sub-page"
    ARTICLE = "article"


@dataclass(frozen=True, slots=True)
class PageId:
    """Parsed page identifier."""

    text: str
    number: int
    sub_index: int | None = None
    page_index: int | None = None

    @property
    def kind(self) -> PageIdKind:
        if self.page_index is not None:
            return PageIdKind.ARTICLE
        if self.sub_index is not None:
            return PageIdKind.SUB_PAGE
        return PageIdKind.BASE

    @property
    def base(self) -> str:
        return f"{self.number:03d}"

    def __str__(self) -> str:
        return self.text


def parse_page_id(text: str) -> PageId:
    """Return the :class:`PageId` for ``text`` or raise :class:`PageIdError`."""

    if not isinstance(text, str):
        raise PageIdError(f"page id must be text, received {type(text)!r}")

    match = _BASE_PATTERN.fullmatch(text)
    if match is not None:
        number = _checked_number(text, match.group(1))
        return PageId(text=text, number=number)

    match = _SUB_PAGE_PATTERN.fullmatch(text)
    if match is not None:
        number = _checked_number(text, match.group(1))
        sub_index = int(match.group(2))
        if sub_index not in VALID_SUB_INDEX_RANGE:
            raise PageIdError(f"sub-page index out of range in {text!r}")
        return PageId(text=text, number=number, sub_index=sub_index)

    match = _ARTICLE_PATTERN.fullmatch(text)
    if match is not None:
        number = _checked_number(text, match.group(1))
        sub_index = int(match.group(2))
        page_index = int(match.group(3))
        if sub_index not in VALID_SUB_INDEX_RANGE:
            raise PageIdError(f"article index out of range in {text!r}")
        if page_index not in VALID_ARTICLE_PAGE_RANGE:
            raise PageIdError(f"article page index out of range in {text!r}")
        return PageId(
            text=text, number=number, sub_index=sub_index, page_index=page_index
        )

    raise PageIdError(f"malformed page id: {text!r}")


def is_valid_page_id(text: object) -> bool:
    """Return ``True`` when ``text`` satisfies the page-id grammar."""

    try:
        parse_page_id(text)  # type: ignore[arg-type]
    except PageIdError:
        return False
    return True


def page_number(page_id: str) -> int | None:
    """Return the leading three-digit page number of ``page_id`` if present."""

    match = _LEADING_NUMBER.match(page_id or "")
    if match is None:
        return None
    return int(match.group(1))


def _checked_number(text: str, digits: str) -> int:
    number = int(digits)
    if number not in VALID_PAGE_RANGE:
        raise PageIdError(
            f"page number {number} in {text!r} outside supported range "
            f"{VALID_PAGE_RANGE.start}-{VALID_PAGE_RANGE.stop - 1}"
        )
    return number


class Colour(Enum):
    """Teletext colour names used for fastext buttons and type badges."""

    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"

    @classmethod
    def coerce(cls, value: "Colour | str") -> "Colour":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"unknown colour: {value!r}") from exc


FASTEXT_COLOURS: tuple[Colour, ...] = (
    Colour.RED,
    Colour.GREEN,
    Colour.YELLOW,
    Colour.BLUE,
)


class ContentType(Enum):
    """Content families derived from the page-number range."""

    NEWS = "NEWS"
    SPORT = "SPORT"
    MARKETS = "MARKETS"
    AI = "AI"
    GAMES = "GAMES"
    WEATHER = "WEATHER"
    SETTINGS = "SETTINGS"
    DEV = "DEV"

    @property
    def icon(self) -> str:
        return _CONTENT_TYPE_BADGES[self][0]

    @property
    def colour(self) -> Colour:
        return _CONTENT_TYPE_BADGES[self][1]

    @classmethod
    def coerce(cls, value: "ContentType | str | None") -> "ContentType | None":
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


_CONTENT_TYPE_BADGES: Mapping[ContentType, tuple[str, Colour]] = MappingProxyType(
    {
        ContentType.NEWS: ("📰", Colour.RED),
        ContentType.SPORT: ("⚽", Colour.GREEN),
        ContentType.MARKETS: ("📈", Colour.YELLOW),
        ContentType.AI: ("🤖", Colour.CYAN),
        ContentType.GAMES: ("🎮", Colour.MAGENTA),
        ContentType.WEATHER: ("🌤", Colour.BLUE),
        ContentType.SETTINGS: ("⚙", Colour.WHITE),
        ContentType.DEV: ("🔧", Colour.YELLOW),
    }
)

# Order matters: the weather band sits inside the markets band.
_CONTENT_TYPE_RANGES: tuple[tuple[range, ContentType], ...] = (
    (range(200, 300), ContentType.NEWS),
    (range(300, 400), ContentType.SPORT),
    (range(450, 460), ContentType.WEATHER),
    (range(400, 500), ContentType.MARKETS),
    (range(500, 600), ContentType.AI),
    (range(600, 700), ContentType.GAMES),
    (range(700, 800), ContentType.SETTINGS),
    (range(800, 900), ContentType.DEV),
)


def content_type_for(page_id: str) -> ContentType | None:
    """Return the :class:`ContentType` for ``page_id`` or ``None``."""

    number = page_number(page_id)
    if number is None:
        return None
    for band, content_type in _CONTENT_TYPE_RANGES:
        if number in band:
            return content_type
    return None


class PageCategory(Enum):
    """Page categories that drive contextual help and input handling."""

    INDEX = "index"
    CONTENT = "content"
    AI_MENU = "ai-menu"
    QUIZ = "quiz"
    SETTINGS = "settings"
    NEWS = "news"
    SPORT = "sport"
    MARKETS = "markets"
    WEATHER = "weather"
    GAMES = "games"


_CATEGORY_BY_CONTENT_TYPE: Mapping[ContentType, PageCategory] = MappingProxyType(
    {
        ContentType.NEWS: PageCategory.NEWS,
        ContentType.SPORT: PageCategory.SPORT,
        ContentType.WEATHER: PageCategory.WEATHER,
        ContentType.MARKETS: PageCategory.MARKETS,
        ContentType.AI: PageCategory.AI_MENU,
        ContentType.GAMES: PageCategory.GAMES,
        ContentType.SETTINGS: PageCategory.SETTINGS,
    }
)


def page_category_for(page_id: str) -> PageCategory:
    """Classify ``page_id`` into a :class:`PageCategory`."""

    if page_id == INDEX_PAGE_ID:
        return PageCategory.INDEX
    content_type = content_type_for(page_id)
    if content_type is None:
        return PageCategory.CONTENT
    return _CATEGORY_BY_CONTENT_TYPE.get(content_type, PageCategory.CONTENT)


__all__ = [
    "FASTEXT_COLOURS",
    "INDEX_PAGE_ID",
    "Colour",
    "ContentType",
    "PageCategory",
    "PageId",
    "PageIdError",
    "PageIdKind",
    "content_type_for",
    "is_valid_page_id",
    "page_category_for",
    "page_number",
    "parse_page_id",
]
