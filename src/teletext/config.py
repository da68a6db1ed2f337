"""Service configuration loaded from a TOML ``[teletext]`` table."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import tomllib

from .text_layout import Alignment


DEFAULT_HISTORY_SIZE = 50
VALID_HISTORY_RANGE = range(1, 1001)


class ConfigError(ValueError):
    """Raised when a teletext configuration file fails validation."""


@dataclass(frozen=True)
class TeletextConfig:
    """Resolved runtime settings for a teletext session."""

    alignment: Alignment = Alignment.LEFT
    full_screen: bool = True
    history_size: int = DEFAULT_HISTORY_SIZE
    session_id: str | None = None
    favorites_path: Path | None = None
    strict_layout: bool = False


def load_config(config_path: Path) -> TeletextConfig:
    """Parse and validate the configuration at ``config_path``."""

    with config_path.open("rb") as stream:
        try:
            raw_data = tomllib.load(stream)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {config_path}: {exc}") from exc

    section = _parse_teletext_section(raw_data)
    return TeletextConfig(
        alignment=_coerce_alignment(section.get("alignment", "left")),
        full_screen=_coerce_bool(section, "full_screen", True),
        history_size=_coerce_history_size(
            section.get("history_size", DEFAULT_HISTORY_SIZE)
        ),
        session_id=_coerce_optional_text(section.get("session_id"), "session_id"),
        favorites_path=_normalise_path(
            section.get("favorites_path"), base=config_path.parent
        ),
        strict_layout=_coerce_bool(section, "strict_layout", False),
    )


def _parse_teletext_section(data: Mapping[str, Any]) -> Mapping[str, Any]:
    section = data.get("teletext")
    if section is None:
        raise ConfigError("configuration requires a [teletext] table")
    if not isinstance(section, Mapping):
        raise ConfigError("[teletext] section must be a mapping")
    return section


def _coerce_alignment(raw: Any) -> Alignment:
    try:
        return Alignment.coerce(raw)
    except ValueError as exc:
        choices = ", ".join(item.value for item in Alignment)
        raise ConfigError(f"alignment must be one of {choices}, got {raw!r}") from exc


def _coerce_bool(section: Mapping[str, Any], key: str, default: bool) -> bool:
    raw = section.get(key, default)
    if not isinstance(raw, bool):
        raise ConfigError(f"{key} must be a boolean")
    return raw


def _coerce_history_size(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigError("history_size must be an integer")
    if raw not in VALID_HISTORY_RANGE:
        raise ConfigError(
            f"history_size {raw} outside supported range {VALID_HISTORY_RANGE.start}-"
            f"{VALID_HISTORY_RANGE.stop - 1}"
        )
    return raw


def _coerce_optional_text(raw: Any, key: str) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ConfigError(f"{key} must be a string")
    text = raw.strip()
    return text or None


def _normalise_path(raw_path: Any, *, base: Path) -> Path | None:
    if raw_path is None:
        return None
    if not isinstance(raw_path, str):
        raise ConfigError("favorites_path must be a string")
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = base / path
    return path.resolve()


__all__ = [
    "ConfigError",
    "DEFAULT_HISTORY_SIZE",
    "TeletextConfig",
    "load_config",
]
