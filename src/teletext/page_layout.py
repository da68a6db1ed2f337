"""Compose raw pages into full 24x40 screens."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from .cache_status import utc_now
from .grid_layout import GridLayoutEngine
from .indicators import FooterNavigation, NavigationIndicatorRenderer
from .page import Page
from .page_ids import INDEX_PAGE_ID
from .text_layout import Alignment


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutOptions:
    """Per-render inputs supplied by the navigation controller."""

    breadcrumbs: tuple[str, ...] = ()
    alignment: Alignment = Alignment.LEFT
    full_screen: bool = True
    highlight_breadcrumb: bool = False
    now: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "breadcrumbs", tuple(self.breadcrumbs))
        object.__setattr__(self, "alignment", Alignment.coerce(self.alignment))


@dataclass(slots=True)
class PageLayoutProcessor:
    """Adds header and footer chrome and fits content to the grid.

    With ``strict`` set a malformed composition raises
    :class:`~teletext.grid_layout.LayoutInvariantError`; otherwise the rows are
    normalised and a warning is logged.
    """

    engine: GridLayoutEngine = field(default_factory=GridLayoutEngine)
    indicators: NavigationIndicatorRenderer = field(
        default_factory=NavigationIndicatorRenderer
    )
    strict: bool = False

    def process(self, page: Page, options: LayoutOptions | None = None) -> Page:
        options = options or LayoutOptions()
        if not options.full_screen:
            return page

        continuation = page.meta.continuation
        breadcrumbs: Sequence[str] = (
            options.breadcrumbs if page.page_id != INDEX_PAGE_ID else ()
        )
        header = self.indicators.header(
            page.title,
            page.page_id,
            breadcrumbs=breadcrumbs,
            highlight_breadcrumb=options.highlight_breadcrumb,
            continuation=continuation,
            last_updated=page.meta.last_updated,
            now=options.now or utc_now(),
        )
        footer = self.indicators.footer(
            FooterNavigation(
                back_to_index=page.page_id != INDEX_PAGE_ID,
                has_previous=continuation is not None and continuation.has_previous,
                has_next=continuation is not None and continuation.has_next,
                custom_hints=page.meta.custom_hints,
                buttons=tuple(page.coloured_links()),
            )
        )
        layout = self.engine.calculate(header, page.rows, footer, options.alignment)
        rows = list(layout.rows)

        if not self.engine.validate(rows):
            if self.strict:
                self.engine.check(rows)
            logger.warning(
                "page %s composed to a malformed grid: %s",
                page.page_id,
                "; ".join(self.engine.violations(rows)),
            )
            rows = self.engine.normalize(rows)
        return page.with_rows(rows)


__all__ = [
    "LayoutOptions",
    "PageLayoutProcessor",
]
