"""Browser-style page history with a movable cursor."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..page_ids import INDEX_PAGE_ID


DEFAULT_HISTORY_SIZE = 50


@dataclass(slots=True)
class NavigationHistory:
    """Visited page ids plus the position of the page on screen.

    Visiting the index page always resets the history to ``["100"]``.
    """

    max_size: int = DEFAULT_HISTORY_SIZE
    _entries: list[str] = field(init=False, default_factory=list)
    _cursor: int = field(init=False, default=-1)

    def __post_init__(self) -> None:
        if self.max_size < 1:
            raise ValueError("history must hold at least one entry")

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> str | None:
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    def can_go_back(self) -> bool:
        return self._cursor > 0

    def can_go_forward(self) -> bool:
        return 0 <= self._cursor < len(self._entries) - 1

    def visit(self, page_id: str) -> None:
        """Record ``page_id`` as the newest entry after the cursor."""

        if page_id == INDEX_PAGE_ID:
            self.reset()
            return
        del self._entries[self._cursor + 1 :]
        if self.current == page_id:
            return
        self._entries.append(page_id)
        self._cursor = len(self._entries) - 1
        overflow = len(self._entries) - self.max_size
        if overflow > 0:
            del self._entries[:overflow]
            self._cursor -= overflow

    def reset(self, page_id: str = INDEX_PAGE_ID) -> None:
        self._entries = [page_id]
        self._cursor = 0

    def entry_at(self, index: int) -> str | None:
        if not 0 <= index < len(self._entries):
            return None
        return self._entries[index]

    def move_to(self, index: int) -> str:
        """Place the cursor on ``index`` without altering the entries."""

        if not 0 <= index < len(self._entries):
            raise IndexError(f"history position {index} out of range")
        self._cursor = index
        return self._entries[index]

    def trail(self) -> tuple[str, ...]:
        """Return the entries up to and including the cursor."""

        return tuple(self._entries[: self._cursor + 1])


__all__ = ["DEFAULT_HISTORY_SIZE", "NavigationHistory"]
