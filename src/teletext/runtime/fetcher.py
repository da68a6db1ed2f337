"""Page fetch contract and an in-memory implementation."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Protocol

from ..page import Page
from ..system_pages import not_found_page


class FetchError(RuntimeError):
    """Raised by fetchers when a page cannot be retrieved."""


class PageFetcher(Protocol):
    """Asynchronous source of raw pages keyed by page id.

    Returning ``None`` and raising are treated identically by the controller.
    """

    async def fetch(
        self, page_id: str, session_id: str | None = None
    ) -> Page | None:  # pragma: no cover - protocol definition
        ...


@dataclass(slots=True)
class StaticPageFetcher:
    """Serve pages from a mapping, optionally after a simulated delay.

    Ids listed in ``unavailable`` raise :class:`FetchError`. Unknown ids
    resolve to ``None`` unless ``not_found`` asks for a not-found page.
    """

    pages: dict[str, Page] = field(default_factory=dict)
    latency: float = 0.0
    not_found: bool = False
    unavailable: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.pages = dict(self.pages)

    @classmethod
    def from_pages(cls, pages: Iterable[Page], **kwargs: object) -> "StaticPageFetcher":
        return cls(pages={page.page_id: page for page in pages}, **kwargs)  # type: ignore[arg-type]

    def add(self, pages: Iterable[Page]) -> None:
        for page in pages:
            self.pages[page.page_id] = page

    def update(self, pages: Mapping[str, Page]) -> None:
        self.pages.update(pages)

    async def fetch(self, page_id: str, session_id: str | None = None) -> Page | None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        if page_id in self.unavailable:
            raise FetchError(f"page {page_id} is unavailable")
        page = self.pages.get(page_id)
        if page is None and self.not_found:
            return not_found_page(page_id)
        return page


__all__ = ["FetchError", "PageFetcher", "StaticPageFetcher"]
