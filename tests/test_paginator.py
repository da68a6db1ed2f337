from __future__ import annotations

import pytest

from teletext.page import PageLink, PageMeta
from teletext.page_ids import Colour
from teletext.paginator import chain_ids, paginate, split_long_text, wrap, wrap_paragraphs


def test_wrap_is_greedy_on_whitespace() -> None:
    assert wrap("the quick brown fox jumps", 10) == ["the quick", "brown fox", "jumps"]


def test_wrap_hard_splits_long_words() -> None:
    assert wrap("ab " + "x" * 25, 10) == ["ab", "x" * 10, "x" * 10, "x" * 5]


def test_wrap_empty_input_yields_one_empty_row() -> None:
    assert wrap("") == [""]
    assert wrap("   \n ") == [""]


def test_wrap_paragraphs_keeps_blank_lines() -> None:
    assert wrap_paragraphs("first\n\nsecond") == ["first", "", "second"]


def test_paginate_single_group_has_no_continuation() -> None:
    pages = paginate("201", "Headlines", ["one", "two"], 3, 2, [])

    assert len(pages) == 1
    assert pages[0].page_id == "201"
    assert pages[0].meta.continuation is None
    assert pages[0].rows == ("one".ljust(40), "two".ljust(40))


def test_paginate_empty_content_yields_one_page() -> None:
    pages = paginate("201", "Headlines", [], 3, 2)

    assert len(pages) == 1
    assert pages[0].rows == ()


def test_paginate_builds_linked_chain() -> None:
    links = (PageLink("INDEX", "100", Colour.RED),)
    rows = [f"row {index}" for index in range(60)]

    pages = paginate("201", "Headlines", rows, 3, 2, links)

    assert [page.page_id for page in pages] == ["201", "201-2", "201-3", "201-4"]
    assert [len(page.rows) for page in pages] == [19, 19, 19, 3]
    assert [page.title for page in pages] == [
        "Headlines",
        "Headlines (2/4)",
        "Headlines (3/4)",
        "Headlines (4/4)",
    ]

    first, second, _, last = (page.meta.continuation for page in pages)
    assert first.previous_page is None and first.next_page == "201-2"
    assert (second.previous_page, second.next_page) == ("201", "201-3")
    assert last.previous_page == "201-3" and last.next_page is None
    assert all(page.meta.continuation.total_pages == 4 for page in pages)
    assert all(page.links == links for page in pages)
    assert pages[1].rows[0].rstrip() == "row 19"


def test_paginate_is_deterministic() -> None:
    rows = [f"row {index}" for index in range(30)]

    assert paginate("301", "Scores", rows, 2, 2) == paginate("301", "Scores", rows, 2, 2)


def test_paginate_rejects_headers_that_leave_no_room() -> None:
    with pytest.raises(ValueError, match="no room"):
        paginate("201", "Headlines", ["x"], 20, 4)


def test_paginate_keeps_chain_titles_within_forty_columns() -> None:
    title = "T" * 40
    pages = paginate("201", title, ["x"] * 40, 3, 2)

    assert all(len(page.title) <= 40 for page in pages)
    assert pages[1].title.endswith(" (2/3)")


def test_split_long_text_marks_pages_generated() -> None:
    text = " ".join(f"word{index}" for index in range(200))
    meta = PageMeta(source="assistant", ai_context_id="ctx-1")

    pages = split_long_text("510", "Answer", text, [], meta)

    assert len(pages) > 1
    assert all(page.meta.machine_generated for page in pages)
    assert all(page.meta.ai_context_id == "ctx-1" for page in pages)
    assert all(len(page.rows) <= 19 for page in pages)
    assert all(len(row) == 40 for page in pages for row in page.rows)


def test_split_long_text_sanitises_typography() -> None:
    pages = split_long_text(
        "510", "Answer", "It\u2019s \u201cfine\u201d \u2014 really\u2026"
    )

    assert pages[0].rows[0].rstrip() == "It's \"fine\" - really..."


def test_chain_ids() -> None:
    assert chain_ids("201", 1) == ["201"]
    assert chain_ids("201", 3) == ["201", "201-2", "201-3"]
