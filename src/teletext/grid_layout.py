"""Grid composition and invariant checks for 40x24 teletext screens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .text_layout import (
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    Alignment,
    center_text,
    justify_text,
    pad_text,
)


class LayoutInvariantError(RuntimeError):
    """Raised when a composed grid is not exactly 24 rows of 40 characters."""

    def __init__(self, violations: Sequence[str]) -> None:
        self.violations = tuple(violations)
        super().__init__("; ".join(self.violations) or "grid invariant violated")


@dataclass(frozen=True, slots=True)
class LayoutResult:
    """Header, content and footer blocks produced for one screen."""

    header: tuple[str, ...]
    content: tuple[str, ...]
    footer: tuple[str, ...]

    @property
    def rows(self) -> tuple[str, ...]:
        return self.header + self.content + self.footer

    @property
    def total_rows(self) -> int:
        return len(self.header) + len(self.content) + len(self.footer)


@dataclass(frozen=True, slots=True)
class GridLayoutEngine:
    """Normalises rows to the fixed screen geometry."""

    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT

    # Public API ---------------------------------------------------------

    def align_row(self, row: str, alignment: Alignment | str = Alignment.LEFT) -> str:
        """Return ``row`` aligned and fitted to exactly ``width`` characters."""

        alignment = Alignment.coerce(alignment)
        if alignment is Alignment.CENTER:
            return center_text(row.strip(), self.width)
        if alignment is Alignment.JUSTIFY:
            return justify_text(row.rstrip(), self.width)
        return pad_text(row, self.width)

    def optimize_spacing(
        self,
        rows: Sequence[str],
        max_rows: int,
        alignment: Alignment | str = Alignment.LEFT,
    ) -> list[str]:
        """Return exactly ``max_rows`` aligned rows; extra input is dropped."""

        if max_rows <= 0:
            return []
        aligned = [self.align_row(row, alignment) for row in list(rows)[:max_rows]]
        blank = " " * self.width
        aligned.extend(blank for _ in range(max_rows - len(aligned)))
        return aligned

    def validate(self, rows: Sequence[str]) -> bool:
        """Return ``True`` when ``rows`` already satisfy the grid geometry."""

        return not self.violations(rows)

    def violations(self, rows: Sequence[str]) -> list[str]:
        problems: list[str] = []
        if len(rows) != self.height:
            problems.append(f"expected {self.height} rows, found {len(rows)}")
        for index, row in enumerate(rows):
            if len(row) != self.width:
                problems.append(
                    f"row {index} is {len(row)} characters, expected {self.width}"
                )
        return problems

    def check(self, rows: Sequence[str]) -> None:
        problems = self.violations(rows)
        if problems:
            raise LayoutInvariantError(problems)

    def normalize(self, rows: Iterable[str]) -> list[str]:
        """Pad or truncate ``rows`` to exactly ``height`` rows of ``width``."""

        fitted = [pad_text(row, self.width) for row in list(rows)[: self.height]]
        blank = " " * self.width
        fitted.extend(blank for _ in range(self.height - len(fitted)))
        return fitted

    def calculate(
        self,
        header: Sequence[str],
        content: Sequence[str],
        footer: Sequence[str],
        alignment: Alignment | str = Alignment.LEFT,
    ) -> LayoutResult:
        """Fit ``content`` between ``header`` and ``footer`` on one screen."""

        header_rows = tuple(pad_text(row, self.width) for row in header)
        footer_rows = tuple(pad_text(row, self.width) for row in footer)
        available = self.available_rows(len(header_rows), len(footer_rows))
        body = tuple(self.optimize_spacing(content, available, alignment))
        return LayoutResult(header=header_rows, content=body, footer=footer_rows)

    def available_rows(self, header_rows: int, footer_rows: int) -> int:
        return max(0, self.height - header_rows - footer_rows)


__all__ = [
    "GridLayoutEngine",
    "LayoutInvariantError",
    "LayoutResult",
]
