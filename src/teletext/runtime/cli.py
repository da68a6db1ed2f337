"""Line-oriented teletext browser driven from stdin."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import IO, Callable, Dict, Iterable, Sequence

from ..catalogue import load_catalogue
from ..config import TeletextConfig, load_config
from ..page import Page
from ..page_ids import INDEX_PAGE_ID, FASTEXT_COLOURS
from ..page_layout import PageLayoutProcessor
from ..text_layout import Alignment
from .favorites import FavoritesTable, load_favorites, save_favorites
from .fetcher import StaticPageFetcher
from .navigation_controller import NavigationController, NavigationDirection


logger = logging.getLogger(__name__)

QUIT_COMMANDS = frozenset({"quit", "exit", "q"})

_DIRECTION_COMMANDS: Dict[str, NavigationDirection] = {
    "back": NavigationDirection.BACK,
    "forward": NavigationDirection.FORWARD,
    "up": NavigationDirection.UP,
    "down": NavigationDirection.DOWN,
}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed arguments for the teletext CLI."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--pages",
        type=Path,
        default=None,
        help="Path to a JSON page catalogue served by the static fetcher",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML file with a [teletext] table",
    )
    parser.add_argument(
        "--favorites",
        type=Path,
        default=None,
        help="Path backing the persisted favourite slots",
    )
    parser.add_argument(
        "--start",
        default=INDEX_PAGE_ID,
        help="Page shown when the session starts (default: %(default)s)",
    )
    parser.add_argument(
        "--alignment",
        choices=[item.value for item in Alignment],
        default=None,
        help="Content alignment overriding the configuration file",
    )
    parser.add_argument(
        "--unavailable",
        action="append",
        default=[],
        metavar="PAGE",
        help="Simulate a failed fetch for PAGE (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity written to stderr",
    )
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> TeletextConfig:
    """Load the configuration file and apply command-line overrides."""

    config = load_config(args.config) if args.config is not None else TeletextConfig()
    if args.alignment is not None:
        config = replace(config, alignment=Alignment.coerce(args.alignment))
    if args.favorites is not None:
        config = replace(config, favorites_path=args.favorites)
    return config


def build_controller(
    args: argparse.Namespace,
    config: TeletextConfig,
    *,
    on_page: Callable[[Page], None] | None = None,
) -> NavigationController:
    """Wire the fetcher, layout processor and favourites for a session."""

    pages = load_catalogue(args.pages) if args.pages is not None else {}
    fetcher = StaticPageFetcher(pages=pages, unavailable=set(args.unavailable))
    favorites = (
        load_favorites(config.favorites_path)
        if config.favorites_path is not None
        else FavoritesTable()
    )
    return NavigationController(
        fetcher=fetcher,
        processor=PageLayoutProcessor(strict=config.strict_layout),
        session_id=config.session_id,
        alignment=config.alignment,
        full_screen=config.full_screen,
        history_size=config.history_size,
        favorites=favorites,
        on_page=on_page,
    )


def write_page(output: IO[str], page: Page) -> None:
    for row in page.rows:
        output.write(row + "\n")
    output.write("\n")
    output.flush()


async def run_session(
    controller: NavigationController,
    commands: Iterable[str],
    output: IO[str],
    *,
    start_page: str = INDEX_PAGE_ID,
    favorites_path: Path | None = None,
) -> None:
    """Feed ``commands`` to ``controller`` until exhausted or ``quit``."""

    controller.navigate_to_page(start_page)
    await controller.wait_idle()
    for line in commands:
        command = line.strip()
        if not command:
            continue
        if command.lower() in QUIT_COMMANDS:
            break
        dispatch_command(controller, command, output, favorites_path=favorites_path)
        await controller.wait_idle()
        if not controller.input_buffer.is_empty():
            output.write(controller.input_feedback() + "\n")
            output.flush()


def dispatch_command(
    controller: NavigationController,
    command: str,
    output: IO[str],
    *,
    favorites_path: Path | None = None,
) -> None:
    """Translate one command line into controller calls."""

    word, _, rest = command.partition(" ")
    word = word.lower()
    rest = rest.strip()

    if word.isascii() and word.isdigit():
        for digit in word:
            controller.handle_digit_press(digit)
        return
    if word == "enter":
        controller.handle_enter()
        return
    if word in ("bs", "backspace"):
        controller.handle_backspace()
        return
    if word == "cancel":
        controller.handle_cancel()
        controller.cancel_pending()
        return
    if word in _DIRECTION_COMMANDS:
        controller.handle_navigate(_DIRECTION_COMMANDS[word])
        return
    if word in {colour.value for colour in FASTEXT_COLOURS}:
        controller.handle_colour_button(word)
        return
    if word == "go":
        controller.navigate_to_page(rest)
        return
    if word == "fav":
        _dispatch_favorite(controller, rest, output, favorites_path)
        return
    if word == "help":
        page = controller.current_page
        category = page.category if page is not None else None
        has_arrows = page is not None and page.continuation is not None
        has_buttons = page is not None and bool(page.coloured_links())
        for line in controller.processor.indicators.contextual_help(
            category, has_arrows, has_buttons
        ):
            output.write(line + "\n")
        output.flush()
        return
    logger.warning("unknown command: %s", command)


def _dispatch_favorite(
    controller: NavigationController,
    rest: str,
    output: IO[str],
    favorites_path: Path | None,
) -> None:
    parts = rest.split()
    try:
        if len(parts) == 1:
            controller.handle_favorite_key(int(parts[0]))
            return
        if len(parts) == 2 and parts[0] == "set":
            if controller.history.current is None:
                return
            controller.favorites.set(int(parts[1]), controller.history.current)
        elif len(parts) == 2 and parts[0] == "clear":
            controller.favorites.clear(int(parts[1]))
        else:
            logger.warning("usage: fav N | fav set N | fav clear N")
            return
    except ValueError as exc:
        logger.warning("favourite command rejected: %s", exc)
        return
    if favorites_path is not None:
        save_favorites(controller.favorites, favorites_path)
    output.write(_favorites_summary(controller.favorites.as_list()) + "\n")
    output.flush()


def _favorites_summary(slots: Sequence[str]) -> str:
    return "FAV " + " ".join(
        f"{index}={slot or '-'}" for index, slot in enumerate(slots)
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the teletext CLI."""

    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = resolve_config(args)
    controller = build_controller(
        args, config, on_page=lambda page: write_page(sys.stdout, page)
    )
    asyncio.run(
        run_session(
            controller,
            sys.stdin,
            sys.stdout,
            start_page=args.start,
            favorites_path=config.favorites_path,
        )
    )
    return 0


__all__ = [
    "build_controller",
    "dispatch_command",
    "main",
    "parse_args",
    "resolve_config",
    "run_session",
    "write_page",
]


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
