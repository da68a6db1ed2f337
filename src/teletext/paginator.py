"""Split arbitrary-length content into chains of linked teletext pages."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from .page import Continuation, Page, PageLink, PageMeta
from .text_layout import SCREEN_HEIGHT, SCREEN_WIDTH, pad_text, sanitize_text, truncate_text


DEFAULT_HEADER_ROWS = 3
DEFAULT_FOOTER_ROWS = 2


def wrap(text: str, width: int = SCREEN_WIDTH) -> list[str]:
    """Greedily wrap ``text`` on whitespace into rows of at most ``width``.

    Words longer than ``width`` are cut into ``width`` sized chunks, each on its
    own row. Empty input yields a single empty row.
    """

    if width < 1:
        raise ValueError("wrap width must be positive")
    rows: list[str] = []
    current = ""
    for word in text.split():
        if len(word) > width:
            if current:
                rows.append(current)
                current = ""
            rows.extend(word[start : start + width] for start in range(0, len(word), width))
            continue
        if not current:
            current = word
        elif len(current) + 1 + len(word) <= width:
            current = f"{current} {word}"
        else:
            rows.append(current)
            current = word
    if current:
        rows.append(current)
    return rows or [""]


def wrap_paragraphs(text: str, width: int = SCREEN_WIDTH) -> list[str]:
    """Wrap each line of ``text`` separately so blank lines survive."""

    rows: list[str] = []
    for line in text.split("\n"):
        rows.extend(wrap(line, width))
    return rows


def chain_ids(page_id: str, total_pages: int) -> list[str]:
    """Return ``[page_id, page_id-2, ..., page_id-N]``."""

    return [page_id] + [f"{page_id}-{number}" for number in range(2, total_pages + 1)]


def paginate(
    page_id: str,
    title: str,
    content_rows: Sequence[str],
    header_row_count: int,
    footer_row_count: int,
    links: Iterable[PageLink] = (),
    meta: PageMeta | None = None,
) -> list[Page]:
    """Slice ``content_rows`` into as many pages as the body area requires."""

    rows_per_page = SCREEN_HEIGHT - header_row_count - footer_row_count
    if rows_per_page < 1:
        raise ValueError(
            f"header ({header_row_count}) and footer ({footer_row_count}) rows "
            f"leave no room for content"
        )

    base_meta = meta or PageMeta()
    shared_links = tuple(links)
    rows = [pad_text(row) for row in content_rows]
    groups = [
        rows[start : start + rows_per_page]
        for start in range(0, len(rows), rows_per_page)
    ] or [[]]

    if len(groups) == 1:
        return [
            Page(
                page_id=page_id,
                title=title,
                rows=groups[0],
                links=shared_links,
                meta=replace(base_meta, continuation=None),
            )
        ]

    total = len(groups)
    ids = chain_ids(page_id, total)
    pages: list[Page] = []
    for index, group in enumerate(groups):
        continuation = Continuation(
            current_page=ids[index],
            total_pages=total,
            current_index=index,
            previous_page=ids[index - 1] if index > 0 else None,
            next_page=ids[index + 1] if index < total - 1 else None,
        )
        pages.append(
            Page(
                page_id=ids[index],
                title=_chain_title(title, index + 1, total),
                rows=group,
                links=shared_links,
                meta=replace(base_meta, continuation=continuation),
            )
        )
    return pages


def split_long_text(
    page_id: str,
    title: str,
    raw_text: str,
    links: Iterable[PageLink] = (),
    meta: PageMeta | None = None,
) -> list[Page]:
    """Wrap generated prose and paginate it, flagging every page as generated."""

    rows = wrap(sanitize_text(raw_text), SCREEN_WIDTH)
    generated = replace(meta or PageMeta(), machine_generated=True)
    return paginate(
        page_id,
        title,
        rows,
        DEFAULT_HEADER_ROWS,
        DEFAULT_FOOTER_ROWS,
        links,
        generated,
    )


def _chain_title(title: str, number: int, total: int) -> str:
    if number == 1:
        return title
    suffix = f" ({number}/{total})"
    return truncate_text(title, SCREEN_WIDTH - len(suffix)) + suffix


__all__ = [
    "DEFAULT_FOOTER_ROWS",
    "DEFAULT_HEADER_ROWS",
    "chain_ids",
    "paginate",
    "split_long_text",
    "wrap",
    "wrap_paragraphs",
]
