from __future__ import annotations

import pytest

from more_ordered_lists.config import ListConfig
from more_ordered_lists.grammar import build_marker_pattern, match_line
from more_ordered_lists.models import ListSeparator, MarkerMatch


def test_matches_dot_separator():
    assert match_line("A. first", ListConfig()) == MarkerMatch("", "A", ListSeparator.DOT, " first")


def test_matches_parenthesis_separator_with_indentation():
    assert match_line("\tb) item", ListConfig()) == MarkerMatch(
        "\t", "b", ListSeparator.PARENTHESIS, " item"
    )


def test_matches_double_parentheses():
    assert match_line("    (iv) item", ListConfig()) == MarkerMatch(
        "    ", "iv", ListSeparator.DOUBLE_PARENTHESIS, " item"
    )


def test_matches_bullets_without_separator():
    assert match_line("- item", ListConfig()) == MarkerMatch("", "-", None, " item")
    assert match_line("+ item", ListConfig()).marker == "+"


def test_empty_content_is_allowed_after_the_space():
    assert match_line("b. ", ListConfig()) == MarkerMatch("", "b", ListSeparator.DOT, " ")


def test_multi_letter_markers_are_not_split():
    assert match_line("aa. item", ListConfig()).marker == "aa"


@pytest.mark.parametrize(
    "text",
    ["a invalid", "a.", "a . x", "a.x", ". x", ") x", "a1. x", "1i. x", "α. x", "$. x", "(a x", ""],
)
def test_rejects_lines_that_are_not_list_shaped(text: str):
    assert match_line(text, ListConfig()) is None


def test_disabled_parentheses_reject_both_parenthesis_forms():
    config = ListConfig(enable_parentheses=False)
    assert match_line("a) x", config) is None
    assert match_line("(a) x", config) is None
    assert match_line("a. x", config) is not None


def test_case_style_limits_letters():
    assert match_line("A. x", ListConfig(case_style="lower")) is None
    assert match_line("a. x", ListConfig(case_style="upper")) is None
    assert match_line("a. x", ListConfig(case_style="none")) is None
    assert match_line("1. x", ListConfig(case_style="none")) is not None


def test_marker_pattern_follows_enabled_systems():
    assert build_marker_pattern(ListConfig(case_style="lower")) == "[a-z]{2,}|[a-z]|[0-9]+"
    only_numbers = ListConfig(
        enable_alphabetical=False, enable_roman=False, nested_alphabetical_mode="disabled"
    )
    assert build_marker_pattern(only_numbers) == "[0-9]+"
