"""Header, footer and hint rows that decorate every teletext screen."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from .cache_status import format_timestamp_with_status, should_display_timestamp
from .page import Continuation, InputMode, PageLink
from .page_ids import INDEX_PAGE_ID, Colour, PageCategory, content_type_for
from .text_layout import (
    DOUBLE_RULE,
    SCREEN_WIDTH,
    SINGLE_RULE,
    pad_text,
    right_align_text,
    truncate_text,
)


TITLE_WIDTH = 28
PAGE_NUMBER_WIDTH = SCREEN_WIDTH - TITLE_WIDTH
BREADCRUMB_DEPTH = 3
BUTTON_LABEL_LENGTH = 8
HINT_SEPARATOR = "  "

BUTTON_EMOJI: Mapping[Colour, str] = MappingProxyType(
    {
        Colour.RED: "🔴",
        Colour.GREEN: "🟢",
        Colour.YELLOW: "🟡",
        Colour.BLUE: "🔵",
    }
)

_INPUT_HINTS: Mapping[InputMode, str] = MappingProxyType(
    {
        InputMode.SINGLE: "Enter digit",
        InputMode.DOUBLE: "Enter 2 digits",
        InputMode.TRIPLE: "Enter 3-digit page",
    }
)
_KEYPAD_HINTS: Mapping[InputMode, str] = MappingProxyType(
    {
        InputMode.SINGLE: "Enter 1-digit option",
        InputMode.DOUBLE: "Enter 2-digit page",
        InputMode.TRIPLE: "Enter 3-digit page",
    }
)


def _scroll_help(scroll: str, plain: str) -> Callable[[bool, bool], list[str]]:
    return lambda arrows, _buttons: [scroll if arrows else plain]


def _fixed_help(text: str) -> Callable[[bool, bool], list[str]]:
    return lambda _arrows, _buttons: [text]


_CONTEXTUAL_HELP: Mapping[PageCategory, Callable[[bool, bool], list[str]]] = (
    MappingProxyType(
        {
            PageCategory.INDEX: lambda _arrows, buttons: [
                "Enter page number"
                if buttons
                else "Enter page number or use colored buttons"
            ],
            PageCategory.CONTENT: _scroll_help(
                "100=INDEX  ↑↓=SCROLL  BACK=PREVIOUS", "100=INDEX  BACK=PREVIOUS"
            ),
            PageCategory.AI_MENU: _fixed_help("Enter number to select option"),
            PageCategory.QUIZ: _fixed_help("Enter 1-4 to answer"),
            PageCategory.SETTINGS: _fixed_help("Enter number to change setting"),
            PageCategory.NEWS: _scroll_help("100=INDEX  ↑↓=SCROLL", "100=INDEX"),
            PageCategory.SPORT: _scroll_help("100=INDEX  ↑↓=SCROLL", "100=INDEX"),
            PageCategory.MARKETS: _scroll_help("100=INDEX  ↑↓=SCROLL", "100=INDEX"),
            PageCategory.WEATHER: _fixed_help("100=INDEX  Enter location code"),
            PageCategory.GAMES: _fixed_help("Enter number to select game"),
        }
    )
)
_DEFAULT_HELP = "Press 100 for INDEX"


@dataclass(frozen=True, slots=True)
class FooterNavigation:
    """Inputs that decide which hints the footer advertises."""

    back_to_index: bool = True
    has_previous: bool = False
    has_next: bool = False
    custom_hints: tuple[str, ...] = ()
    buttons: tuple[PageLink, ...] = ()


class NavigationIndicatorRenderer:
    """Builds breadcrumb, position, arrow and hint text for the page chrome."""

    # Public API ---------------------------------------------------------

    def breadcrumbs(self, history: Sequence[str], highlight: bool = False) -> str:
        """Return the trail text; ``highlight`` brackets the current crumb."""

        if not history or list(history) == [INDEX_PAGE_ID]:
            return "INDEX"
        crumbs = list(history[-BREADCRUMB_DEPTH:])
        if highlight:
            crumbs[-1] = f"[{crumbs[-1]}]"
        trail = " > ".join(crumbs)
        if len(history) > BREADCRUMB_DEPTH:
            return "... > " + trail
        return trail

    def page_position(self, current: int, total: int) -> str:
        return f"Page {current}/{total}"

    def arrow_indicators(self, has_up: bool, has_down: bool) -> list[str]:
        lines: list[str] = []
        if has_up:
            lines.append("▲ Press ↑ for previous")
        if has_down:
            lines.append("▼ Press ↓ for more")
        if not lines:
            lines.append("END OF CONTENT")
        return lines

    def contextual_help(
        self,
        page_type: PageCategory | str | None,
        has_arrow_nav: bool = False,
        has_coloured_buttons: bool = False,
    ) -> list[str]:
        """Return the help line(s) for ``page_type``."""

        category = _coerce_category(page_type)
        builder = _CONTEXTUAL_HELP.get(category) if category is not None else None
        if builder is None:
            return [_DEFAULT_HELP]
        return builder(has_arrow_nav, has_coloured_buttons)

    def format_page_number(self, page_id: str) -> str:
        return f"P{page_id}"

    def header(
        self,
        title: str,
        page_id: str,
        *,
        breadcrumbs: Sequence[str] = (),
        highlight_breadcrumb: bool = False,
        continuation: Continuation | None = None,
        last_updated: datetime | None = None,
        now: datetime | None = None,
    ) -> list[str]:
        """Return the two header rows for ``page_id``.

        The second row shows exactly one of: breadcrumbs, page position,
        timestamp badge, or a plain double rule, in that priority.
        """

        content_type = content_type_for(page_id)
        prefix = f"{content_type.icon} " if content_type is not None else ""
        label = truncate_text(prefix + title.upper(), TITLE_WIDTH)
        first = pad_text(label, TITLE_WIDTH) + right_align_text(
            self.format_page_number(page_id), PAGE_NUMBER_WIDTH
        )

        if breadcrumbs and page_id != INDEX_PAGE_ID:
            second = pad_text(self.breadcrumbs(breadcrumbs, highlight_breadcrumb))
        elif continuation is not None:
            second = _ruled(
                self.page_position(continuation.position, continuation.total_pages)
            )
        elif last_updated is not None and should_display_timestamp(content_type):
            second = _ruled(
                format_timestamp_with_status(last_updated, content_type, now=now)
            )
        else:
            second = DOUBLE_RULE * SCREEN_WIDTH
        return [first, second]

    def footer(self, navigation: FooterNavigation) -> list[str]:
        """Return the rule and hint rows for the bottom of the screen."""

        hints: list[str] = []
        if navigation.back_to_index:
            hints.append("100=INDEX")
        arrow = _arrow_hint(navigation.has_previous, navigation.has_next)
        if arrow:
            hints.append(arrow)
        hints.extend(navigation.custom_hints)

        line = HINT_SEPARATOR.join(hints)
        buttons = " ".join(
            f"{BUTTON_EMOJI[link.colour]}{link.label.upper()[:BUTTON_LABEL_LENGTH]}"
            for link in navigation.buttons
            if link.colour is not None
        )
        if buttons:
            line = f"{line}{HINT_SEPARATOR}{buttons}" if line else buttons
        return [
            SINGLE_RULE * SCREEN_WIDTH,
            pad_text(truncate_text(line, SCREEN_WIDTH, ellipsis=False)),
        ]

    def input_buffer(self, digits: str, mode: InputMode | str) -> str:
        """Return ``"[12_]"`` style feedback or the hint for an empty buffer.

        Single mode dispatches on the first key, so it never shows a buffer.
        """

        mode = InputMode.coerce(mode)
        if not digits:
            return _INPUT_HINTS[mode]
        if mode is InputMode.SINGLE:
            return ""
        return "[" + digits.ljust(mode.max_length, "_") + "]"

    def keypad_hint(self, mode: InputMode | str) -> str:
        """Return the keypad prompt for ``mode``, e.g. ``"Enter 2-digit page"``."""

        return _KEYPAD_HINTS[InputMode.coerce(mode)]

    def format_navigation_options(
        self, options: Sequence[PageLink | tuple[str, str]]
    ) -> list[str]:
        """Return ``"NNN. Label"`` rows for ``(target, label)`` pairs or links."""

        lines: list[str] = []
        for option in options:
            if isinstance(option, PageLink):
                target, label = option.target_page, option.label
            else:
                target, label = option
            lines.append(truncate_text(f"{target}. {label}", SCREEN_WIDTH))
        return lines


# Internal helpers -------------------------------------------------------


def _ruled(text: str) -> str:
    text = text[: SCREEN_WIDTH - 1]
    return DOUBLE_RULE * (SCREEN_WIDTH - len(text) - 1) + " " + text


def _arrow_hint(has_previous: bool, has_next: bool) -> str:
    if has_previous and has_next:
        return "↑↓=SCROLL"
    if has_next:
        return "↓=MORE"
    if has_previous:
        return "↑=BACK"
    return ""


def _coerce_category(value: PageCategory | str | None) -> PageCategory | None:
    if value is None or isinstance(value, PageCategory):
        return value
    try:
        return PageCategory(str(value).strip().lower())
    except ValueError:
        return None


__all__ = [
    "BUTTON_EMOJI",
    "FooterNavigation",
    "NavigationIndicatorRenderer",
]
