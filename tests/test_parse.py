from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from more_ordered_lists.classifier import marker_value
from more_ordered_lists.config import ListConfig
from more_ordered_lists.constants import DEFAULT_MAX_LINE_LENGTH
from more_ordered_lists.exceptions import LineTooLongError
from more_ordered_lists.models import ListSeparator, ListType
from more_ordered_lists.parser import (
    ParseFileError,
    find_list_containing,
    parse_file,
    parse_line,
    parse_list,
    parse_lists,
    parse_text,
)


def _write_markdown(tmp_path: Path, content: str) -> Path:
    target = tmp_path / "sample.md"
    target.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return target


def _summary(parsed):
    return [(line_number, line.type, line.marker) for line_number, line in parsed]


def test_parses_alphabetical_list():
    lists = parse_lists(["A. first", "B. second"])
    assert len(lists) == 1
    assert _summary(lists[0]) == [
        (0, ListType.ALPHABETICAL, "A"),
        (1, ListType.ALPHABETICAL, "B"),
    ]


def test_parses_roman_list():
    (parsed,) = parse_lists(["i. one", "ii. two", "iii. three", "iv. four"])
    assert [line.type for _, line in parsed] == [ListType.ROMAN] * 4


def test_roman_letters_continue_alphabetical_list():
    (parsed,) = parse_lists(["a. x", "b. y", "c. z"])
    assert parsed[2][1].type is ListType.ALPHABETICAL


def test_markers_are_corrected_from_context():
    (parsed,) = parse_lists(["a. x", "a. y", "q) z"])
    assert [line.render() for _, line in parsed] == ["a. x", "b. y", "c. z"]


def test_nested_levels():
    lines = ["A. top", "\ti. nested", "\tii. nested", "B. top"]
    (parsed,) = parse_lists(lines)

    assert _summary(parsed) == [
        (0, ListType.ALPHABETICAL, "A"),
        (1, ListType.ROMAN, "i"),
        (2, ListType.ROMAN, "ii"),
        (3, ListType.ALPHABETICAL, "B"),
    ]


def test_nested_list_starts_its_own_sequence():
    (parsed,) = parse_lists(["a. x", "\ta. y"])
    config = ListConfig()

    assert [(line.indentation_level, marker_value(line, config)) for _, line in parsed] == [
        (0, 1),
        (1, 1),
    ]


def test_first_nested_item_keeps_its_marker():
    (parsed,) = parse_lists(["a. x", "\tb. y"])
    assert parsed[1][1].marker == "b"
    assert parsed[1][1].indentation_level == 1


def test_nested_bullets_belong_to_the_list():
    (parsed,) = parse_lists(["a. x", "\t- y", "\t* z", "b. w"])
    assert [line.marker for _, line in parsed] == ["a", "-", "*", "b"]
    assert parsed[1][1].separator is None


def test_alphabetical_list_continues_past_z():
    (parsed,) = parse_lists(["y. a", "z. b", "aa. c", "ab. d"])
    assert _summary(parsed)[2:] == [
        (2, ListType.NESTED_ALPHABETICAL, "aa"),
        (3, ListType.NESTED_ALPHABETICAL, "ab"),
    ]


def test_alphabetical_list_stops_at_z_without_nesting():
    config = ListConfig(nested_alphabetical_mode="disabled")
    (parsed,) = parse_lists(["y. a", "z. b", "aa. c"], config=config)
    assert len(parsed) == 2


def test_multi_letter_marker_after_letter_becomes_nested():
    # "ff" after "e" is read as the nested form of the sixth item
    (parsed,) = parse_lists(["e. x", "ff. y"])
    assert parsed[1][1].type is ListType.NESTED_ALPHABETICAL
    assert parsed[1][1].render() == "f. y"


def test_repeated_mode():
    config = ListConfig(nested_alphabetical_mode="repeated")
    (parsed,) = parse_lists(["aa. x", "bb. y", "cc. z"], config=config)
    # "cc" is also a Roman numeral but continues the nested list
    assert [line.type for _, line in parsed] == [ListType.NESTED_ALPHABETICAL] * 3
    assert [line.marker for _, line in parsed] == ["aa", "bb", "cc"]


def test_separator_is_inherited_from_first_sibling():
    (parsed,) = parse_lists(["(a) x", "b. y", "c) z"])
    assert {line.separator for _, line in parsed} == {ListSeparator.DOUBLE_PARENTHESIS}


def test_plain_markdown_lists_are_left_alone():
    assert parse_lists(["1. x", "2. y"]) == []
    assert parse_lists(["- x", "- y"]) == []


def test_parenthesized_numbers_form_a_list():
    (parsed,) = parse_lists(["(1) x", "(2) y"])
    assert parsed[0][1].type is ListType.NUMBERED


@pytest.mark.parametrize(
    "line",
    ["a invalid", "a.", "a . x", "\ta. x", ". x", ") x", "a1. x", "1i. x", "α. x", "$. x", "0. x", "(0) x", "Ab. x"],
)
def test_invalid_lines_do_not_start_lists(line: str):
    assert parse_lists([line]) == []


def test_indentation_jump_ends_the_list():
    lists = parse_lists(["a. x", "\t\tb. y"])
    assert _summary(lists[0]) == [(0, ListType.ALPHABETICAL, "a")]


def test_list_ends_at_system_change():
    lists = parse_lists(["i. x", "j. y", "k. z"])
    assert [_summary(parsed) for parsed in lists] == [
        [(0, ListType.ROMAN, "i")],
        [(1, ListType.ALPHABETICAL, "j"), (2, ListType.ALPHABETICAL, "k")],
    ]


def test_lists_are_disjoint_and_separated_by_text():
    lines = ["a. x", "b. y", "", "Some text", "i. p", "ii. q"]
    lists = parse_lists(lines)
    assert [[number for number, _ in parsed] for parsed in lists] == [[0, 1], [4, 5]]


def test_parse_range():
    lines = ["a. x", "b. y", "c. z", "d. w"]
    lists = parse_lists(lines, start=1, end=3)
    assert [[number for number, _ in parsed] for parsed in lists] == [[1, 2]]
    assert parse_lists(lines, start=10) == []


def test_parse_list_returns_a_single_list():
    lines = ["a. x", "text", "b. y"]
    assert [number for number, _ in parse_list(lines)] == [0]
    assert parse_list(lines, start=1) == []


def test_parse_line_with_context():
    (context,) = [line for _, line in parse_list(["(iv) x"])]
    following = parse_line("v. y", ListConfig(), context)
    assert following.render() == "(v) y"


def test_parse_line_rejects_past_3999():
    (context,) = [line for _, line in parse_list(["mmmcmxcix. x"])]
    assert parse_line("i. y", ListConfig(), context) is None


def test_find_list_containing():
    lines = ["a. x", "b. y", "text", "i. p", "ii. q"]
    assert [number for number, _ in find_list_containing(lines, 4)] == [3, 4]
    assert [number for number, _ in find_list_containing(lines, 0)] == [0, 1]
    assert find_list_containing(lines, 2) == []
    assert find_list_containing(lines, 99) == []


def test_find_list_containing_splits_adjacent_lists():
    lines = ["a. x", "1. y"]
    assert find_list_containing(lines, 1) == []
    assert [number for number, _ in find_list_containing(lines, 0)] == [0]


def test_parse_text_keeps_line_endings():
    result = parse_text("a. x\r\nb. y\r\ntext\n")
    assert result.full_file == ["a. x\r\n", "b. y\r\n", "text\n"]
    assert [number for number, _ in result.lists[0]] == [0, 1]


def test_parse_text_rejects_long_lines():
    with pytest.raises(LineTooLongError):
        parse_text("a. " + "x" * 20, max_line_length=10)


def test_parse_file(tmp_path: Path):
    target = _write_markdown(
        tmp_path,
        """
        # Outline

        A. Introduction
        \ti. Scope
        \tii. Terms
        B. Body
        """,
    )

    result = parse_file(target)

    assert len(result.lists) == 1
    assert [number for number, _ in result.lists[0]] == [2, 3, 4, 5]


def test_parse_file_rejects_non_positive_override(tmp_path: Path):
    target = _write_markdown(tmp_path, "a. x\n")
    with pytest.raises(ParseFileError):
        parse_file(target, 0)


def test_parse_file_reports_long_lines(tmp_path: Path):
    target = _write_markdown(tmp_path, "a. " + "x" * DEFAULT_MAX_LINE_LENGTH + "\n")
    with pytest.raises(ParseFileError, match="line 1"):
        parse_file(target)


def test_parse_file_reports_invalid_utf8(tmp_path: Path):
    target = tmp_path / "broken.md"
    target.write_bytes(b"\xff\xfea. x\n")
    with pytest.raises(ParseFileError, match="Invalid UTF-8"):
        parse_file(target)


def test_parse_file_reports_missing_file(tmp_path: Path):
    with pytest.raises(ParseFileError):
        parse_file(tmp_path / "missing.md")


def test_parse_file_reports_invalid_config(tmp_path: Path):
    target = _write_markdown(tmp_path, "a. x\n")
    with pytest.raises(ParseFileError):
        parse_file(target, config=ListConfig(case_style="title"))
