from __future__ import annotations

import pytest

from more_ordered_lists.classifier import (
    classify_marker,
    first_marker,
    marker_value,
    next_marker,
    successor_marker,
)
from more_ordered_lists.config import ListConfig
from more_ordered_lists.exceptions import CodecRangeError
from more_ordered_lists.models import ListSeparator, ListType, MarkerLine


def _line(list_type: ListType, marker: str, separator=ListSeparator.DOT, indentation: str = ""):
    return MarkerLine(list_type, indentation, marker, separator, " text")


@pytest.mark.parametrize(
    ("marker", "expected"),
    [
        ("-", ListType.UNORDERED),
        ("12", ListType.NUMBERED),
        ("i", ListType.ROMAN),
        ("C", ListType.ROMAN),
        ("xiv", ListType.ROMAN),
        ("a", ListType.ALPHABETICAL),
        ("B", ListType.ALPHABETICAL),
        ("aa", ListType.NESTED_ALPHABETICAL),
        ("ab", ListType.NESTED_ALPHABETICAL),
    ],
)
def test_classifies_without_context(marker: str, expected: ListType):
    assert classify_marker(marker, ListConfig()) is expected


def test_mixed_case_is_rejected():
    assert classify_marker("Ab", ListConfig()) is None
    assert classify_marker("Ab", ListConfig(), _line(ListType.ALPHABETICAL, "z")) is None


def test_disabled_roman_falls_back_to_letters():
    assert classify_marker("i", ListConfig(enable_roman=False)) is ListType.ALPHABETICAL
    assert classify_marker("ii", ListConfig(enable_roman=False)) is ListType.NESTED_ALPHABETICAL


def test_repeated_mode_rejects_mixed_letters():
    config = ListConfig(nested_alphabetical_mode="repeated")
    assert classify_marker("bb", config) is ListType.NESTED_ALPHABETICAL
    assert classify_marker("ab", config) is None


def test_roman_letters_continue_an_alphabetical_list():
    config = ListConfig()
    assert marker_value(_line(classify_marker("c", config), "c"), config) == 100

    context = _line(ListType.ALPHABETICAL, "b")
    assert classify_marker("c", config, context) is ListType.ALPHABETICAL
    assert marker_value(_line(ListType.ALPHABETICAL, "c"), config) == 3
    assert classify_marker("i", ListConfig(), _line(ListType.ALPHABETICAL, "h")) is ListType.ALPHABETICAL


def test_roman_context_rejects_plain_letters():
    assert classify_marker("j", ListConfig(), _line(ListType.ROMAN, "i")) is None


def test_roman_context_keeps_roman_markers():
    assert classify_marker("ii", ListConfig(), _line(ListType.ROMAN, "i")) is ListType.ROMAN


def test_nested_context_accepts_roman_shaped_markers():
    context = _line(ListType.NESTED_ALPHABETICAL, "cb")
    assert classify_marker("cc", ListConfig(), context) is ListType.NESTED_ALPHABETICAL


def test_alphabetical_context_promotes_after_z():
    context = _line(ListType.ALPHABETICAL, "z")
    assert classify_marker("aa", ListConfig(), context) is ListType.NESTED_ALPHABETICAL
    assert classify_marker("aa", ListConfig(nested_alphabetical_mode="disabled"), context) is None


def test_alphabetical_context_promotes_multi_letter_markers_early():
    context = _line(ListType.ALPHABETICAL, "e")
    assert classify_marker("ff", ListConfig(), context) is ListType.NESTED_ALPHABETICAL


def test_bullets_only_continue_bullets():
    bullet = _line(ListType.UNORDERED, "-", separator=None)
    assert classify_marker("*", ListConfig(), bullet) is ListType.UNORDERED
    assert classify_marker("a", ListConfig(), bullet) is None
    assert classify_marker("-", ListConfig(), _line(ListType.ALPHABETICAL, "a")) is None


def test_numbers_do_not_continue_letters():
    assert classify_marker("1", ListConfig(), _line(ListType.ALPHABETICAL, "a")) is None


def test_marker_value_uses_nested_mode():
    line = _line(ListType.NESTED_ALPHABETICAL, "bb")
    assert marker_value(line, ListConfig()) == 54
    assert marker_value(line, ListConfig(nested_alphabetical_mode="repeated")) == 28


def test_successor_keeps_case():
    assert successor_marker(ListType.ROMAN, _line(ListType.ROMAN, "III"), ListConfig()) == "IV"
    assert successor_marker(ListType.ALPHABETICAL, _line(ListType.ALPHABETICAL, "c"), ListConfig()) == "d"


def test_successor_of_bullet_is_the_same_glyph():
    bullet = _line(ListType.UNORDERED, "+", separator=None)
    assert successor_marker(ListType.UNORDERED, bullet, ListConfig()) == "+"


def test_next_marker_continues_past_z():
    assert next_marker(_line(ListType.ALPHABETICAL, "z"), ListConfig()) == (
        ListType.NESTED_ALPHABETICAL,
        "aa",
    )
    assert next_marker(_line(ListType.ALPHABETICAL, "Z"), ListConfig()) == (
        ListType.NESTED_ALPHABETICAL,
        "AA",
    )


def test_next_marker_fails_past_z_without_nesting():
    with pytest.raises(CodecRangeError):
        next_marker(_line(ListType.ALPHABETICAL, "z"), ListConfig(nested_alphabetical_mode="disabled"))


def test_next_marker_fails_past_3999():
    with pytest.raises(CodecRangeError):
        next_marker(_line(ListType.ROMAN, "mmmcmxcix"), ListConfig())


def test_next_marker_in_repeated_mode():
    config = ListConfig(nested_alphabetical_mode="repeated")
    assert next_marker(_line(ListType.NESTED_ALPHABETICAL, "zz"), config) == (
        ListType.NESTED_ALPHABETICAL,
        "aaa",
    )


def test_first_marker_restarts_and_inherits_parent_separator():
    line = _line(ListType.ROMAN, "iv", separator=ListSeparator.DOT, indentation="\t")
    parent = _line(ListType.ALPHABETICAL, "A", separator=ListSeparator.PARENTHESIS)

    restarted = first_marker(line, parent, 1, ListConfig())

    assert restarted.marker == "i"
    assert restarted.separator is ListSeparator.PARENTHESIS
    assert restarted.render() == "\ti) text"


def test_first_marker_keeps_bullets():
    bullet = _line(ListType.UNORDERED, "-", separator=None, indentation="\t")
    parent = _line(ListType.ALPHABETICAL, "a")
    config = ListConfig(enable_legal_ordering=True)
    assert first_marker(bullet, parent, 1, config) == bullet


def test_first_marker_of_nested_list_is_aa():
    line = _line(ListType.NESTED_ALPHABETICAL, "CD", indentation="\t")
    parent = _line(ListType.ROMAN, "I")
    assert first_marker(line, parent, 1, ListConfig()).marker == "AA"


@pytest.mark.parametrize(
    ("level", "rendered"),
    [
        (0, "A. text"),
        (1, "I. text"),
        (2, "1. text"),
        (3, "a) text"),
        (4, "aa) text"),
        (5, "(1) text"),
        (6, "(a) text"),
        (7, "(aa) text"),
        (8, "(i) text"),
    ],
)
def test_legal_ordering_by_level(level: int, rendered: str):
    line = _line(ListType.ALPHABETICAL, "q")
    restarted = first_marker(line, None, level, ListConfig(enable_legal_ordering=True))
    assert restarted.render() == rendered


def test_legal_ordering_respects_disabled_systems():
    line = _line(ListType.ALPHABETICAL, "q", indentation="\t")
    parent = _line(ListType.ALPHABETICAL, "A")
    config = ListConfig(enable_legal_ordering=True, enable_roman=False)
    # Level 1 would be Roman; the line restarts in its own system instead
    assert first_marker(line, parent, 1, config).render() == "\ta. text"


def test_legal_ordering_beyond_table_restarts_normally():
    line = _line(ListType.NUMBERED, "7")
    restarted = first_marker(line, None, 9, ListConfig(enable_legal_ordering=True))
    assert restarted.marker == "1"
