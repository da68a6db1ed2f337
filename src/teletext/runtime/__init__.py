"""Runtime modules exposed by the teletext package."""
from __future__ import annotations

from typing import Any

from . import cli as _cli
from . import favorites as _favorites
from . import fetcher as _fetcher
from . import history as _history
from . import input_buffer as _input_buffer
from . import navigation_controller as _navigation_controller

_modules = [
    _cli,
    _favorites,
    _fetcher,
    _history,
    _input_buffer,
    _navigation_controller,
]

__all__: list[str] = []
_seen: set[str] = set()
for _module in _modules:
    for _name in _module.__all__:
        if _name not in _seen:
            _seen.add(_name)
            __all__.append(_name)
        globals()[_name] = getattr(_module, _name)


def __getattr__(name: str) -> Any:
    for _module in _modules:
        if hasattr(_module, name):
            return getattr(_module, name)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(__all__)
