"""Fixed-width text helpers for the 40 column teletext grid."""

from __future__ import annotations

import re
from enum import Enum


SCREEN_WIDTH = 40
SCREEN_HEIGHT = 24
ELLIPSIS = "..."

DOUBLE_RULE = "═"
SINGLE_RULE = "─"


class Alignment(Enum):
    """Horizontal alignment applied to content rows."""

    LEFT = "left"
    CENTER = "center"
    JUSTIFY = "justify"

    @classmethod
    def coerce(cls, value: "Alignment | str") -> "Alignment":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"unknown alignment: {value!r}") from exc


def pad_text(text: str, width: int = SCREEN_WIDTH, fill: str = " ") -> str:
    """Return ``text`` truncated or right-padded to exactly ``width``."""

    if len(text) >= width:
        return text[:width]
    return text + fill * (width - len(text))


def center_text(text: str, width: int = SCREEN_WIDTH) -> str:
    """Centre ``text`` in ``width`` columns with the odd space on the right.

    Text that already fills the width is truncated rather than centred.
    """

    if len(text) >= width:
        return text[:width]
    spare = width - len(text)
    left = spare // 2
    return " " * left + text + " " * (spare - left)


def right_align_text(text: str, width: int = SCREEN_WIDTH) -> str:
    if len(text) >= width:
        return text[:width]
    return " " * (width - len(text)) + text


def justify_text(text: str, width: int = SCREEN_WIDTH) -> str:
    """Spread the words of ``text`` so the row ends exactly at ``width``.

    A single word is left aligned. When the words leave no room for extra
    spacing they are joined with single spaces and padded. Otherwise the
    spare spaces are shared between the gaps, earlier gaps taking one more
    when the division is uneven.
    """

    if len(text) >= width:
        return text[:width]
    words = text.split()
    if len(words) <= 1:
        return pad_text(text.strip(), width)

    gaps = len(words) - 1
    letters = sum(len(word) for word in words)
    spaces = width - letters
    if spaces < gaps:
        return pad_text(" ".join(words), width)

    base, extra = divmod(spaces, gaps)
    pieces: list[str] = []
    for index, word in enumerate(words[:-1]):
        pieces.append(word)
        pieces.append(" " * (base + (1 if index < extra else 0)))
    pieces.append(words[-1])
    return "".join(pieces)


def truncate_text(text: str, max_length: int, ellipsis: bool = True) -> str:
    """Shorten ``text`` to ``max_length`` characters, optionally marking the cut."""

    if len(text) <= max_length:
        return text
    if ellipsis and max_length > len(ELLIPSIS):
        return text[: max_length - len(ELLIPSIS)] + ELLIPSIS
    return text[:max_length]


def separator(char: str = DOUBLE_RULE, width: int = SCREEN_WIDTH) -> str:
    return (char * width)[:width]


def title_row(title: str, width: int = SCREEN_WIDTH, fill: str = DOUBLE_RULE) -> str:
    """Return ``title`` centred inside a rule, e.g. ``"═══ NEWS ═══"``."""

    label = f" {truncate_text(title.upper(), width - 4)} "
    spare = width - len(label)
    left = spare // 2
    return fill * left + label + fill * (spare - left)


def two_column_row(left: str, right: str, width: int = SCREEN_WIDTH) -> str:
    """Place ``left`` and ``right`` at opposite edges of one row."""

    right = right[:width]
    room = width - len(right) - 1
    if room <= 0:
        return right_align_text(right, width)
    return pad_text(truncate_text(left, room), room) + " " + right


_SANITIZE_TABLE = str.maketrans(
    {
        "\u2018": "'",
        "\u2019": "'",
        "\u201a": "'",
        "\u201b": "'",
        "\u201c": '"',
        "\u201d": '"',
        "\u201e": '"',
        "\u2013": "-",
        "\u2014": "-",
        "\u2212": "-",
        "\u2026": ELLIPSIS,
        "\u00a0": " ",
        "\u200b": None,
        "\u200c": None,
        "\u200d": None,
        "\u2060": None,
        "\ufeff": None,
        "\t": "    ",
    }
)
_CONTROL_CHARACTERS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def sanitize_text(text: str) -> str:
    """Replace typographic punctuation and strip characters the grid cannot show."""

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return _CONTROL_CHARACTERS.sub("", text.translate(_SANITIZE_TABLE))


__all__ = [
    "Alignment",
    "DOUBLE_RULE",
    "ELLIPSIS",
    "SCREEN_HEIGHT",
    "SCREEN_WIDTH",
    "SINGLE_RULE",
    "center_text",
    "justify_text",
    "pad_text",
    "right_align_text",
    "sanitize_text",
    "separator",
    "title_row",
    "truncate_text",
    "two_column_row",
]
