from __future__ import annotations

import pytest

from teletext.page_ids import (
    Colour,
    ContentType,
    PageCategory,
    PageIdError,
    PageIdKind,
    content_type_for,
    is_valid_page_id,
    page_category_for,
    page_number,
    parse_page_id,
)


@pytest.mark.parametrize(
    "text",
    ["100", "899", "201", "201-1", "201-99", "201-3-2", "201-3-99", "450-12-10"],
)
def test_valid_page_ids_are_accepted(text: str) -> None:
    assert is_valid_page_id(text)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "99",
        "900",
        "1000",
        "abc",
        "201-0",
        "201-100",
        "201-3-1",
        "201-3-0",
        "201-",
        "201-3-2-2",
        " 201",
        "201\n",
        "201-3\n",
        "201-3-2\n",
        "\u0662\u0660\u0661",
        "\uff12\uff10\uff11",
        "201-\u0663",
    ],
)
def test_invalid_page_ids_are_rejected(text: str) -> None:
    assert not is_valid_page_id(text)


def test_parse_page_id_reports_shape() -> None:
    base = parse_page_id("201")
    sub_page = parse_page_id("201-4")
    article = parse_page_id("201-4-3")

    assert base.kind is PageIdKind.BASE
    assert sub_page.kind is PageIdKind.SUB_PAGE
    assert sub_page.sub_index == 4
    assert article.kind is PageIdKind.ARTICLE
    assert (article.number, article.sub_index, article.page_index) == (201, 4, 3)
    assert article.base == "201"


def test_parse_page_id_rejects_out_of_range_base() -> None:
    with pytest.raises(PageIdError, match="outside supported range"):
        parse_page_id("950-2")


def test_is_valid_page_id_tolerates_non_text() -> None:
    assert not is_valid_page_id(None)
    assert not is_valid_page_id(201)


@pytest.mark.parametrize(
    ("page_id", "expected"),
    [
        ("201", ContentType.NEWS),
        ("302-2", ContentType.SPORT),
        ("400", ContentType.MARKETS),
        ("450", ContentType.WEATHER),
        ("459-1", ContentType.WEATHER),
        ("460", ContentType.MARKETS),
        ("500", ContentType.AI),
        ("600", ContentType.GAMES),
        ("700", ContentType.SETTINGS),
        ("800", ContentType.DEV),
        ("100", None),
        ("150", None),
    ],
)
def test_content_type_follows_page_ranges(page_id: str, expected: ContentType | None) -> None:
    assert content_type_for(page_id) is expected


def test_content_type_badges_are_fixed() -> None:
    assert ContentType.NEWS.icon == "📰"
    assert ContentType.NEWS.colour is Colour.RED
    assert ContentType.AI.colour is Colour.CYAN
    assert ContentType.GAMES.colour is Colour.MAGENTA
    assert ContentType.DEV.colour is Colour.YELLOW


def test_page_category_for_index_and_ranges() -> None:
    assert page_category_for("100") is PageCategory.INDEX
    assert page_category_for("201-2") is PageCategory.NEWS
    assert page_category_for("455") is PageCategory.WEATHER
    assert page_category_for("510") is PageCategory.AI_MENU
    assert page_category_for("820") is PageCategory.CONTENT
    assert page_category_for("150") is PageCategory.CONTENT


def test_colour_coerce_accepts_names() -> None:
    assert Colour.coerce("Red") is Colour.RED
    with pytest.raises(ValueError, match="unknown colour"):
        Colour.coerce("purple")


def test_page_number_requires_ascii_digits_at_a_boundary() -> None:
    assert page_number("201-3") == 201
    assert page_number("201") == 201
    assert page_number("201\n") is None
    assert page_number("2015") is None
