from __future__ import annotations

import pytest

from teletext.runtime.history import NavigationHistory


def test_visit_appends_and_moves_cursor() -> None:
    history = NavigationHistory()
    history.visit("100")
    history.visit("200")
    history.visit("201")

    assert history.entries == ("100", "200", "201")
    assert history.cursor == 2
    assert history.current == "201"


def test_visiting_index_resets_history() -> None:
    history = NavigationHistory()
    for page_id in ("100", "200", "201"):
        history.visit(page_id)

    history.visit("100")

    assert history.entries == ("100",)
    assert history.cursor == 0


def test_visit_after_stepping_back_truncates_forward_entries() -> None:
    history = NavigationHistory()
    for page_id in ("100", "200", "201", "202"):
        history.visit(page_id)

    assert history.move_to(1) == "200"
    history.visit("300")

    assert history.entries == ("100", "200", "300")
    assert not history.can_go_forward()


def test_revisiting_the_current_page_is_not_duplicated() -> None:
    history = NavigationHistory()
    history.visit("100")
    history.visit("200")
    history.visit("200")

    assert history.entries == ("100", "200")


def test_back_and_forward_queries_follow_cursor() -> None:
    history = NavigationHistory()
    history.visit("100")
    history.visit("200")

    assert history.can_go_back()
    assert not history.can_go_forward()
    history.move_to(0)
    assert not history.can_go_back()
    assert history.can_go_forward()


def test_history_is_bounded() -> None:
    history = NavigationHistory(max_size=3)
    for page_id in ("100", "200", "201", "202", "203"):
        history.visit(page_id)

    assert history.entries == ("201", "202", "203")
    assert history.cursor == 2
    assert history.current == "203"


def test_trail_stops_at_cursor() -> None:
    history = NavigationHistory()
    for page_id in ("100", "200", "201"):
        history.visit(page_id)
    history.move_to(1)

    assert history.trail() == ("100", "200")


def test_empty_history() -> None:
    history = NavigationHistory()

    assert history.current is None
    assert history.trail() == ()
    assert not history.can_go_back()
    assert not history.can_go_forward()
    with pytest.raises(ValueError, match="at least one entry"):
        NavigationHistory(max_size=0)


def test_move_to_repositions_cursor_only() -> None:
    history = NavigationHistory()
    for page_id in ("100", "200", "201"):
        history.visit(page_id)

    assert history.entry_at(1) == "200"
    assert history.entry_at(3) is None
    assert history.move_to(1) == "200"
    assert history.entries == ("100", "200", "201")
    assert history.cursor == 1
    with pytest.raises(IndexError):
        history.move_to(5)
