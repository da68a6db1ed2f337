"""Freshness classification and timestamp badges for time-sensitive pages."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .page_ids import ContentType


class CacheStatus(Enum):
    LIVE = "LIVE"
    CACHED = "CACHED"


DEFAULT_THRESHOLD = timedelta(minutes=10)

CACHE_THRESHOLDS: Mapping[ContentType, timedelta] = MappingProxyType(
    {
        ContentType.NEWS: timedelta(minutes=5),
        ContentType.SPORT: timedelta(minutes=2),
        ContentType.MARKETS: timedelta(minutes=5),
        ContentType.WEATHER: timedelta(minutes=30),
    }
)

TIME_SENSITIVE_TYPES = frozenset(CACHE_THRESHOLDS)

LIVE_BADGE = "🔴"
CACHED_BADGE = "⚪"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """Return an aware datetime for ``value``; naive values are read as UTC."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"invalid timestamp: {value!r}") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def threshold_for(content_type: ContentType | str | None) -> timedelta:
    resolved = ContentType.coerce(content_type)
    if resolved is None:
        return DEFAULT_THRESHOLD
    return CACHE_THRESHOLDS.get(resolved, DEFAULT_THRESHOLD)


def determine_cache_status(
    timestamp: datetime | str | None,
    content_type: ContentType | str | None,
    *,
    now: datetime | None = None,
) -> CacheStatus:
    """Classify ``timestamp`` as live or cached for ``content_type``.

    Pages without a timestamp are treated as live.
    """

    moment = parse_timestamp(timestamp)
    if moment is None:
        return CacheStatus.LIVE
    current = now if now is not None else utc_now()
    if current - moment > threshold_for(content_type):
        return CacheStatus.CACHED
    return CacheStatus.LIVE


def should_display_timestamp(content_type: ContentType | str | None) -> bool:
    return ContentType.coerce(content_type) in TIME_SENSITIVE_TYPES


def relative_time(moment: datetime, *, now: datetime | None = None) -> str:
    """Describe the age of ``moment`` as ``just now`` or ``Nm``/``Nh``/``Nd ago``."""

    current = now if now is not None else utc_now()
    minutes = int((current - moment).total_seconds() // 60)
    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def format_timestamp_with_status(
    timestamp: datetime | str | None,
    content_type: ContentType | str | None,
    *,
    now: datetime | None = None,
) -> str:
    """Return the header badge such as ``"🔴LIVE 14:05"`` or ``"⚪CACHED 7m ago"``."""

    moment = parse_timestamp(timestamp)
    if moment is None:
        return ""
    current = now if now is not None else utc_now()
    status = determine_cache_status(moment, content_type, now=current)
    if status is CacheStatus.LIVE:
        return f"{LIVE_BADGE}LIVE {moment.strftime('%H:%M')}"
    return f"{CACHED_BADGE}CACHED {relative_time(moment, now=current)}"


__all__ = [
    "CACHE_THRESHOLDS",
    "CacheStatus",
    "DEFAULT_THRESHOLD",
    "TIME_SENSITIVE_TYPES",
    "determine_cache_status",
    "format_timestamp_with_status",
    "parse_timestamp",
    "relative_time",
    "should_display_timestamp",
    "threshold_for",
    "utc_now",
]
