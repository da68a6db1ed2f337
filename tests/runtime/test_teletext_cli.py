from __future__ import annotations

import asyncio
import io
import json
import sys
import textwrap
from pathlib import Path

import pytest

from teletext.runtime import cli
from teletext.text_layout import Alignment


def write_catalogue(tmp_path: Path) -> Path:
    path = tmp_path / "pages.json"
    path.write_text(
        json.dumps(
            {
                "100": {
                    "title": "Index",
                    "rows": ["201 Headlines", "301 Scores"],
                    "links": [{"label": "NEWS", "target": "201", "colour": "red"}],
                },
                "201": {
                    "title": "Headlines",
                    "text": "\n".join(f"Story {index}" for index in range(30)),
                    "links": [{"label": "INDEX", "target": "100", "colour": "red"}],
                },
                "301": {"title": "Scores", "rows": ["Final: 2-1"]},
            }
        ),
        encoding="utf-8",
    )
    return path


def _run(tmp_path: Path, commands: list[str], *argv: str) -> tuple[str, cli.NavigationController]:
    args = cli.parse_args(["--pages", str(write_catalogue(tmp_path)), *argv])
    config = cli.resolve_config(args)
    output = io.StringIO()
    controller = cli.build_controller(
        args, config, on_page=lambda page: cli.write_page(output, page)
    )
    asyncio.run(
        cli.run_session(
            controller, commands, output, start_page=args.start, favorites_path=config.favorites_path
        )
    )
    return output.getvalue(), controller


def test_session_renders_each_page(tmp_path: Path) -> None:
    text, controller = _run(tmp_path, ["201", "down", "red", "quit", "301"])

    screens = [block for block in text.split("\n\n") if block.strip()]
    assert len(screens) == 4
    assert all(len(screen.splitlines()) == 24 for screen in screens)
    assert "P201-2" in screens[2]
    assert controller.current_page.page_id == "100"


def test_partial_input_echoes_buffer(tmp_path: Path) -> None:
    text, _ = _run(tmp_path, ["20"])

    assert text.rstrip().endswith("[20_]")


def test_back_and_go_commands(tmp_path: Path) -> None:
    _, controller = _run(tmp_path, ["go 301", "go 201", "back"])

    assert controller.current_page.page_id == "301"
    assert controller.highlight_breadcrumb


def test_unavailable_pages_show_offline_screen(tmp_path: Path) -> None:
    text, controller = _run(tmp_path, ["go 201"], "--unavailable", "201")

    assert "OFFLINE" in text
    assert controller.raw_page.meta.offline


def test_help_prints_contextual_hint(tmp_path: Path) -> None:
    text, _ = _run(tmp_path, ["help"])

    assert text.rstrip().endswith("Enter page number")


def test_favourites_are_saved_and_followed(tmp_path: Path) -> None:
    favorites = tmp_path / "favorites.json"

    text, controller = _run(
        tmp_path, ["go 301", "fav set 2", "go 100", "fav 2"], "--favorites", str(favorites)
    )

    payload = json.loads(favorites.read_text(encoding="utf-8"))
    assert payload["favorites"][2] == "301"
    assert "FAV 0=- 1=- 2=301" in text
    assert controller.current_page.page_id == "301"


def test_bad_commands_are_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    _, controller = _run(tmp_path, ["jump", "fav 42", "go 99"])

    assert "unknown command: jump" in caplog.text
    assert "favourite command rejected" in caplog.text
    assert "invalid page id '99'" in caplog.text
    assert controller.current_page.page_id == "100"


def test_resolve_config_applies_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "teletext.toml"
    config_path.write_text(
        textwrap.dedent(
            """
            [teletext]
            alignment = "center"
            history_size = 5
            """
        ),
        encoding="utf-8",
    )

    args = cli.parse_args(["--config", str(config_path), "--alignment", "justify"])
    config = cli.resolve_config(args)

    assert config.alignment is Alignment.JUSTIFY
    assert config.history_size == 5


def test_main_reads_commands_from_stdin(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("301\nquit\n"))

    assert cli.main(["--pages", str(write_catalogue(tmp_path))]) == 0

    out = capsys.readouterr().out
    assert "P100" in out
    assert "Final: 2-1" in out
