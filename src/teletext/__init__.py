"""Public teletext API: page model, layout engine and navigation runtime."""
from __future__ import annotations

from .cache_status import CacheStatus, determine_cache_status
from .config import ConfigError, TeletextConfig, load_config
from .grid_layout import GridLayoutEngine, LayoutInvariantError, LayoutResult
from .indicators import FooterNavigation, NavigationIndicatorRenderer
from .page import Continuation, InputMode, Page, PageLink, PageMeta
from .page_ids import (
    INDEX_PAGE_ID,
    Colour,
    ContentType,
    PageCategory,
    PageIdError,
    is_valid_page_id,
    parse_page_id,
)
from .page_layout import LayoutOptions, PageLayoutProcessor
from .paginator import paginate, split_long_text, wrap
from .runtime.fetcher import FetchError, PageFetcher, StaticPageFetcher
from .runtime.navigation_controller import (
    ControllerState,
    NavigationController,
    NavigationDirection,
)
from .system_pages import not_found_page, offline_page
from .text_layout import SCREEN_HEIGHT, SCREEN_WIDTH, Alignment

__all__ = [
    "INDEX_PAGE_ID",
    "SCREEN_HEIGHT",
    "SCREEN_WIDTH",
    "Alignment",
    "CacheStatus",
    "Colour",
    "ConfigError",
    "ContentType",
    "Continuation",
    "ControllerState",
    "FetchError",
    "FooterNavigation",
    "GridLayoutEngine",
    "InputMode",
    "LayoutInvariantError",
    "LayoutOptions",
    "LayoutResult",
    "NavigationController",
    "NavigationDirection",
    "NavigationIndicatorRenderer",
    "Page",
    "PageCategory",
    "PageFetcher",
    "PageIdError",
    "PageLayoutProcessor",
    "PageLink",
    "PageMeta",
    "StaticPageFetcher",
    "TeletextConfig",
    "determine_cache_status",
    "is_valid_page_id",
    "load_config",
    "not_found_page",
    "offline_page",
    "paginate",
    "parse_page_id",
    "split_long_text",
    "wrap",
]
