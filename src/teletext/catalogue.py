"""JSON page catalogues expanded into paginated page chains."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .cache_status import parse_timestamp
from .page import MAX_TITLE_LENGTH, InputMode, Page, PageLink, PageMeta
from .page_ids import PageIdError, parse_page_id
from .paginator import (
    DEFAULT_FOOTER_ROWS,
    DEFAULT_HEADER_ROWS,
    paginate,
    split_long_text,
    wrap_paragraphs,
)


class CatalogueError(ValueError):
    """Raised when a page catalogue entry cannot be turned into pages."""


def load_catalogue(path: Path) -> dict[str, Page]:
    """Return every page described by the JSON catalogue at ``path``."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogueError(f"page catalogue {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise CatalogueError("page catalogue must be a JSON object")
    return pages_from_mapping(payload)


def pages_from_mapping(entries: Mapping[str, Any]) -> dict[str, Page]:
    pages: dict[str, Page] = {}
    for page_id, entry in entries.items():
        for page in pages_from_entry(page_id, entry):
            if page.page_id in pages:
                raise CatalogueError(f"page {page.page_id} defined multiple times")
            pages[page.page_id] = page
    return pages


def pages_from_entry(page_id: str, entry: Any) -> list[Page]:
    """Expand one catalogue ``entry`` into its page chain."""

    try:
        parse_page_id(page_id)
    except PageIdError as exc:
        raise CatalogueError(str(exc)) from exc
    if not isinstance(entry, Mapping):
        raise CatalogueError(f"catalogue entry {page_id} must be an object")

    title = entry.get("title")
    if not isinstance(title, str) or not title:
        raise CatalogueError(f"catalogue entry {page_id} requires a title")
    if len(title) > MAX_TITLE_LENGTH:
        raise CatalogueError(
            f"catalogue entry {page_id} title exceeds {MAX_TITLE_LENGTH} characters"
        )
    links = _parse_links(page_id, entry.get("links", []))
    meta = _parse_meta(page_id, entry.get("meta", {}))

    text = entry.get("text")
    rows = entry.get("rows")
    if text is not None and rows is not None:
        raise CatalogueError(f"catalogue entry {page_id} sets both text and rows")
    if text is not None and not isinstance(text, str):
        raise CatalogueError(f"catalogue entry {page_id} text must be a string")
    if rows is not None and (
        not isinstance(rows, list) or not all(isinstance(row, str) for row in rows)
    ):
        raise CatalogueError(f"catalogue entry {page_id} rows must be strings")

    try:
        if text is not None and entry.get("machine_generated", False):
            return split_long_text(page_id, title, text, links, meta)
        if text is not None:
            rows = wrap_paragraphs(text)
        return paginate(
            page_id,
            title,
            rows or [],
            DEFAULT_HEADER_ROWS,
            DEFAULT_FOOTER_ROWS,
            links,
            meta,
        )
    except ValueError as exc:
        raise CatalogueError(f"catalogue entry {page_id}: {exc}") from exc


def _parse_links(page_id: str, raw: Any) -> tuple[PageLink, ...]:
    if not isinstance(raw, Iterable) or isinstance(raw, (str, bytes, Mapping)):
        raise CatalogueError(f"catalogue entry {page_id} links must be a list")
    links: list[PageLink] = []
    for index, item in enumerate(raw, start=1):
        if not isinstance(item, Mapping):
            raise CatalogueError(f"link #{index} on page {page_id} must be an object")
        try:
            links.append(
                PageLink(
                    label=str(item["label"]),
                    target_page=str(item["target"]),
                    colour=item.get("colour"),
                )
            )
        except KeyError as exc:
            raise CatalogueError(
                f"link #{index} on page {page_id} is missing {exc.args[0]!r}"
            ) from exc
        except ValueError as exc:
            raise CatalogueError(f"link #{index} on page {page_id}: {exc}") from exc
    return tuple(links)


def _parse_meta(page_id: str, raw: Any) -> PageMeta:
    if not isinstance(raw, Mapping):
        raise CatalogueError(f"catalogue entry {page_id} meta must be an object")
    try:
        return PageMeta(
            source=raw.get("source"),
            last_updated=parse_timestamp(raw.get("last_updated")),
            cache_status=raw.get("cache_status"),
            ai_context_id=raw.get("ai_context_id"),
            input_mode=InputMode.coerce(raw.get("input_mode")),
            input_options=tuple(str(item) for item in raw.get("input_options", ())),
            single_digit_shortcuts=tuple(
                str(item) for item in raw.get("single_digit_shortcuts", ())
            ),
            custom_hints=tuple(str(item) for item in raw.get("custom_hints", ())),
        )
    except ValueError as exc:
        raise CatalogueError(f"catalogue entry {page_id} meta: {exc}") from exc


__all__ = [
    "CatalogueError",
    "load_catalogue",
    "pages_from_entry",
    "pages_from_mapping",
]
