"""Navigation state machine that turns key presses into page fetches."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Callable

from ..cache_status import utc_now
from ..page import InputMode, Page
from ..page_ids import INDEX_PAGE_ID, Colour, is_valid_page_id
from ..page_layout import LayoutOptions, PageLayoutProcessor
from ..system_pages import offline_page
from ..text_layout import Alignment
from .favorites import FavoritesTable
from .fetcher import PageFetcher
from .history import DEFAULT_HISTORY_SIZE, NavigationHistory
from .input_buffer import InputBuffer


logger = logging.getLogger(__name__)


class ControllerState(Enum):
    """Lifecycle states of the navigation controller."""

    IDLE = auto()
    LOADING = auto()
    ERROR = auto()


class NavigationDirection(Enum):
    BACK = "back"
    FORWARD = "forward"
    UP = "up"
    DOWN = "down"

    @classmethod
    def coerce(cls, value: "NavigationDirection | str") -> "NavigationDirection":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"unknown navigation direction: {value!r}") from exc


class _CommitMode(Enum):
    PUSH = auto()
    REVISIT = auto()


@dataclass(slots=True)
class _PendingRequest:
    generation: int
    page_id: str
    mode: _CommitMode
    task: asyncio.Task[None]
    cursor: int | None = None


@dataclass(slots=True)
class NavigationController:
    """Owns history, input buffer, favourites and the page on screen.

    Requests run as asyncio tasks on the caller's loop. Only the most recent
    request may commit: earlier tasks are cancelled, and a response that
    arrives for a superseded generation is discarded.
    """

    fetcher: PageFetcher
    processor: PageLayoutProcessor = field(default_factory=PageLayoutProcessor)
    favorites: FavoritesTable = field(default_factory=FavoritesTable)
    initial_page: Page | None = None
    session_id: str | None = None
    alignment: Alignment = Alignment.LEFT
    full_screen: bool = True
    history_size: int = DEFAULT_HISTORY_SIZE
    on_page: Callable[[Page], None] | None = None
    on_state_change: Callable[[ControllerState], None] | None = None
    clock: Callable[[], datetime] = utc_now

    state: ControllerState = field(init=False, default=ControllerState.IDLE)
    current_page: Page | None = field(init=False, default=None)
    raw_page: Page | None = field(init=False, default=None)
    history: NavigationHistory = field(init=False)
    input_buffer: InputBuffer = field(init=False, default_factory=InputBuffer)
    breadcrumbs: tuple[str, ...] = field(init=False, default=())
    highlight_breadcrumb: bool = field(init=False, default=False)
    _generation: int = field(init=False, default=0)
    _pending: _PendingRequest | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.alignment = Alignment.coerce(self.alignment)
        self.history = NavigationHistory(max_size=self.history_size)
        if self.initial_page is not None:
            self.history.visit(self.initial_page.page_id)
            self._show(self.initial_page)

    # Public API ---------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self._pending is not None and not self._pending.task.done()

    @property
    def input_mode(self) -> InputMode:
        if self.current_page is None:
            return InputMode.TRIPLE
        return self.current_page.meta.input_mode

    def navigate_to_page(self, page_id: str) -> asyncio.Task[None] | None:
        """Start loading ``page_id`` and return the task doing the work.

        Invalid ids are logged and ignored.
        """

        return self._request(page_id, _CommitMode.PUSH)

    def handle_digit_press(self, digit: int | str) -> asyncio.Task[None] | None:
        text = str(digit)
        page = self.current_page
        if (
            page is not None
            and self.input_mode is InputMode.SINGLE
            and page.meta.lists_single_digit(text)
        ):
            link = page.link_for_label(text)
            target = link.target_page if link is not None else f"{page.page_id}-{text}"
            self.input_buffer.clear()
            return self.navigate_to_page(target)

        self.input_buffer.set_mode(self.input_mode)
        if not self.input_buffer.push(text):
            return None
        target = self.input_buffer.digits
        self.input_buffer.clear()
        return self.navigate_to_page(target)

    def handle_enter(self) -> asyncio.Task[None] | None:
        """Submit a complete three digit entry; anything shorter is discarded."""

        digits = self.input_buffer.digits
        self.input_buffer.clear()
        if len(digits) != InputMode.TRIPLE.max_length:
            return None
        return self.navigate_to_page(digits)

    def handle_backspace(self) -> asyncio.Task[None] | None:
        if self.input_buffer.pop() is not None:
            return None
        return self.handle_navigate(NavigationDirection.BACK)

    def handle_cancel(self) -> None:
        self.input_buffer.clear()

    def handle_navigate(
        self, direction: NavigationDirection | str
    ) -> asyncio.Task[None] | None:
        direction = NavigationDirection.coerce(direction)
        if direction is NavigationDirection.BACK:
            return self._go_back()
        if direction is NavigationDirection.FORWARD:
            cursor = self._revisit_base() + 1
            target = self.history.entry_at(cursor)
            if target is None:
                return None
            return self._request(target, _CommitMode.REVISIT, cursor=cursor)

        continuation = self.current_page.meta.continuation if self.current_page else None
        if continuation is None:
            return None
        if direction is NavigationDirection.UP:
            target = continuation.previous_page
        else:
            target = continuation.next_page
        if target is None:
            return None
        return self.navigate_to_page(target)

    def handle_colour_button(self, colour: Colour | str) -> asyncio.Task[None] | None:
        if self.current_page is None:
            return None
        link = self.current_page.link_for_colour(colour)
        if link is None:
            return None
        return self.navigate_to_page(link.target_page)

    def handle_favorite_key(self, index: int) -> asyncio.Task[None] | None:
        target = self.favorites.get(index)
        if target is None:
            return None
        return self.navigate_to_page(target)

    def cancel_pending(self) -> None:
        """Abandon the in-flight request without touching the current page."""

        pending = self._pending
        self._pending = None
        if pending is None or pending.task.done():
            return
        self._generation += 1
        pending.task.cancel()
        self._set_state(ControllerState.IDLE)

    async def wait_idle(self) -> None:
        """Return once no request is in flight."""

        while self._pending is not None and not self._pending.task.done():
            await asyncio.wait({self._pending.task})

    def input_feedback(self) -> str:
        """Return the keypad prompt, or the bracketed buffer once typing starts."""

        indicators = self.processor.indicators
        if self.input_buffer.is_empty():
            return indicators.keypad_hint(self.input_mode)
        return indicators.input_buffer(self.input_buffer.digits, self.input_mode)

    # Internal helpers ---------------------------------------------------

    def _revisit_base(self) -> int:
        pending = self._pending
        if pending is None or pending.cursor is None or pending.task.done():
            return self.history.cursor
        return pending.cursor

    def _go_back(self) -> asyncio.Task[None] | None:
        cursor = self._revisit_base() - 1
        target = self.history.entry_at(cursor)
        if target is not None:
            return self._request(
                target, _CommitMode.REVISIT, cursor=cursor, highlight=True
            )
        if self.history.current == INDEX_PAGE_ID:
            return None
        return self.navigate_to_page(INDEX_PAGE_ID)

    def _request(
        self,
        page_id: str,
        mode: _CommitMode,
        *,
        cursor: int | None = None,
        highlight: bool = False,
    ) -> asyncio.Task[None] | None:
        if not is_valid_page_id(page_id):
            logger.warning("ignoring navigation to invalid page id %r", page_id)
            return None

        pending = self._pending
        if pending is not None and not pending.task.done():
            if (
                pending.page_id == page_id
                and pending.mode is mode
                and pending.cursor == cursor
            ):
                return pending.task
            pending.task.cancel()

        self._generation += 1
        generation = self._generation
        task = asyncio.get_running_loop().create_task(
            self._fetch_and_commit(page_id, mode, generation, cursor, highlight),
            name=f"teletext-fetch-{page_id}",
        )
        self._pending = _PendingRequest(generation, page_id, mode, task, cursor)
        self._set_state(ControllerState.LOADING)
        return task

    async def _fetch_and_commit(
        self,
        page_id: str,
        mode: _CommitMode,
        generation: int,
        cursor: int | None,
        highlight: bool,
    ) -> None:
        try:
            page = await self.fetcher.fetch(page_id, session_id=self.session_id)
        except asyncio.CancelledError:
            logger.debug("fetch for page %s cancelled", page_id)
            return
        except Exception as exc:
            logger.warning("fetch for page %s failed: %s", page_id, exc)
            page = None

        # Why: a fetcher may keep running after cancellation; only the newest
        # generation is allowed to commit.
        if generation != self._generation:
            logger.debug("discarding stale response for page %s", page_id)
            return

        if page is None:
            self._set_state(ControllerState.ERROR)
            page = offline_page(page_id, now=self.clock())

        # Why: history moves only on commit so an abandoned request leaves the
        # cursor on the page still on screen.
        if mode is _CommitMode.PUSH:
            self.history.visit(page_id)
        elif cursor is not None:
            self.history.move_to(cursor)
        self.highlight_breadcrumb = highlight
        self._pending = None
        self._show(page)

    def _show(self, page: Page) -> None:
        self.breadcrumbs = self.history.trail()
        options = LayoutOptions(
            breadcrumbs=self.breadcrumbs,
            alignment=self.alignment,
            full_screen=self.full_screen,
            highlight_breadcrumb=self.highlight_breadcrumb,
            now=self.clock(),
        )
        rendered = self.processor.process(page, options)
        self.raw_page = page
        self.current_page = rendered
        self.input_buffer.set_mode(page.meta.input_mode)
        self._set_state(ControllerState.IDLE)
        if self.on_page is not None:
            self.on_page(rendered)

    def _set_state(self, state: ControllerState) -> None:
        if state is self.state:
            return
        self.state = state
        if self.on_state_change is not None:
            self.on_state_change(state)


__all__ = [
    "ControllerState",
    "NavigationController",
    "NavigationDirection",
]
