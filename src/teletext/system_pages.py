"""Placeholder pages served when real content cannot be shown."""

from __future__ import annotations

from datetime import datetime

from .cache_status import utc_now
from .page import Page, PageLink, PageMeta
from .page_ids import INDEX_PAGE_ID, Colour


SYSTEM_SOURCE = "System"

_OFFLINE_BODY = (
    "",
    "NO NETWORK CONNECTION",
    "",
    "This page is not available offline.",
    "",
    "The page has not been cached or the",
    "cache has expired.",
    "",
    "Please check your connection and",
    "try again.",
    "",
    "Press 100 to return to index",
)


def _index_link() -> PageLink:
    return PageLink("INDEX", INDEX_PAGE_ID, Colour.RED)


def offline_page(page_id: str, *, now: datetime | None = None) -> Page:
    """Return the placeholder committed when ``page_id`` could not be fetched."""

    return Page(
        page_id=page_id,
        title="OFFLINE",
        rows=_OFFLINE_BODY,
        links=(_index_link(),),
        meta=PageMeta(
            source=SYSTEM_SOURCE,
            last_updated=now or utc_now(),
            cache_status="stale",
            offline=True,
        ),
    )


def not_found_page(page_id: str, *, now: datetime | None = None) -> Page:
    return Page(
        page_id=page_id,
        title="PAGE NOT FOUND",
        rows=(
            "",
            f"Page {page_id} does not exist.",
            "",
            "Press 100 to return to index",
        ),
        links=(_index_link(),),
        meta=PageMeta(source=SYSTEM_SOURCE, last_updated=now or utc_now()),
    )


__all__ = ["SYSTEM_SOURCE", "not_found_page", "offline_page"]
