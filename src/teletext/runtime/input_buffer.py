"""Digit accumulation bounded by the active page's input mode."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..page import InputMode


@dataclass(slots=True)
class InputBuffer:
    mode: InputMode = InputMode.TRIPLE
    _digits: list[str] = field(init=False, default_factory=list)

    @property
    def digits(self) -> str:
        return "".join(self._digits)

    def __len__(self) -> int:
        return len(self._digits)

    def is_empty(self) -> bool:
        return not self._digits

    def is_full(self) -> bool:
        return len(self._digits) >= self.mode.max_length

    def push(self, digit: str) -> bool:
        """Append ``digit`` and return ``True`` once the mode length is reached."""

        if len(digit) != 1 or digit not in "0123456789":
            raise ValueError(f"expected a single decimal digit, received {digit!r}")
        if not self.is_full():
            self._digits.append(digit)
        return self.is_full()

    def pop(self) -> str | None:
        if not self._digits:
            return None
        return self._digits.pop()

    def clear(self) -> None:
        self._digits.clear()

    def set_mode(self, mode: InputMode | str) -> None:
        """Switch modes, discarding digits that no longer fit."""

        self.mode = InputMode.coerce(mode)
        del self._digits[self.mode.max_length :]


__all__ = ["InputBuffer"]
