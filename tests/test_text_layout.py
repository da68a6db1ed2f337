from __future__ import annotations

import pytest

from teletext.text_layout import (
    Alignment,
    center_text,
    justify_text,
    pad_text,
    right_align_text,
    sanitize_text,
    separator,
    title_row,
    truncate_text,
    two_column_row,
)


def test_pad_text_truncates_or_pads() -> None:
    assert pad_text("abc", 5) == "abc  "
    assert pad_text("abcdef", 4) == "abcd"
    assert len(pad_text("x")) == 40


def test_center_text_puts_odd_space_on_the_right() -> None:
    assert center_text("Hi", 10) == "    Hi    "
    assert center_text("Hey", 10) == "   Hey    "


def test_center_text_truncates_when_text_fills_width() -> None:
    assert center_text("abcdefghij", 5) == "abcde"
    assert center_text("abcde", 5) == "abcde"


def test_right_align_text() -> None:
    assert right_align_text("P100", 8) == "    P100"


def test_justify_text_spreads_spaces_with_extra_on_early_gaps() -> None:
    result = justify_text("a b c", 8)

    assert result == "a   b  c"
    assert len(result) == 8


def test_justify_text_single_word_is_left_aligned() -> None:
    assert justify_text("word", 8) == "word    "


def test_justify_text_handles_exact_fit() -> None:
    assert justify_text("ab cd", 5) == "ab cd"


def test_truncate_text_with_and_without_ellipsis() -> None:
    assert truncate_text("HELLO WORLD", 8) == "HELLO..."
    assert truncate_text("HELLO WORLD", 8, ellipsis=False) == "HELLO WO"
    assert truncate_text("SHORT", 8) == "SHORT"


def test_separator_and_title_row_fill_the_width() -> None:
    assert separator() == "═" * 40
    row = title_row("news")
    assert len(row) == 40
    assert " NEWS " in row


def test_two_column_row_places_text_at_both_edges() -> None:
    row = two_column_row("FTSE 100", "+1.2%")

    assert len(row) == 40
    assert row.startswith("FTSE 100")
    assert row.endswith("+1.2%")


def test_sanitize_text_normalises_typography() -> None:
    raw = "\u201cQuotes\u201d \u2013 it\u2019s\u2026\tdone\u200b\x07"

    assert sanitize_text(raw) == "\"Quotes\" - it's...    done"


def test_alignment_coerce_rejects_unknown_values() -> None:
    assert Alignment.coerce("CENTER") is Alignment.CENTER
    with pytest.raises(ValueError, match="unknown alignment"):
        Alignment.coerce("diagonal")
