from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from more_ordered_lists.editing import apply_rewrites
from more_ordered_lists.indentation import (
    decrease_indentation,
    increase_indentation,
    indentation_level,
)
from more_ordered_lists.models import ListType
from more_ordered_lists.numerals import (
    decode_alphabetical,
    decode_repeated_letters,
    decode_roman,
    encode_alphabetical,
    encode_repeated_letters,
    encode_roman,
    is_valid_roman,
)
from more_ordered_lists.parser import parse_lists
from more_ordered_lists.resequencer import renumber


@given(st.integers(min_value=1, max_value=100_000))
def test_alphabetical_codec_round_trip(value: int):
    assert decode_alphabetical(encode_alphabetical(value)) == value


@given(st.integers(min_value=1, max_value=2_000))
def test_repeated_letters_codec_round_trip(value: int):
    marker = encode_repeated_letters(value)
    assert len(set(marker)) == 1
    assert decode_repeated_letters(marker) == value


@given(st.integers(min_value=1, max_value=3999))
def test_roman_codec_round_trip(value: int):
    numeral = encode_roman(value)
    assert is_valid_roman(numeral)
    assert decode_roman(numeral) == value


@given(st.text(alphabet=" \t", max_size=12))
def test_indent_then_outdent_restores_level(indentation: str):
    deeper = increase_indentation(indentation)
    assert indentation_level(deeper) == indentation_level(indentation) + 1
    assert indentation_level(decrease_indentation(deeper)) == indentation_level(indentation)


list_line = st.builds(
    lambda indentation, marker, separator, content: f"{indentation}{marker}{separator}{content}",
    st.sampled_from(["", "", "\t", "    ", "\t\t"]),
    st.sampled_from(["a", "b", "c", "i", "ii", "z", "aa", "A", "IV", "1", "-", "*"]),
    st.sampled_from([". ", ") ", " "]),
    st.sampled_from(["item", "", "text"]),
)
document_line = st.one_of(list_line, st.sampled_from(["", "plain text", "(a) x", "(ii) y"]))


@given(st.lists(document_line, max_size=30))
def test_parsed_lists_are_disjoint_contiguous_and_ordered(lines: list[str]):
    lists = parse_lists(lines)
    seen: list[int] = []

    for parsed in lists:
        numbers = [line_number for line_number, _ in parsed]
        assert numbers
        assert numbers == list(range(numbers[0], numbers[-1] + 1))
        assert not seen or numbers[0] > seen[-1]
        seen.extend(numbers)

    assert len(seen) == len(set(seen))


@given(st.lists(document_line, max_size=30))
def test_parsing_is_deterministic(lines: list[str]):
    assert parse_lists(lines) == parse_lists(list(lines))


@given(st.lists(st.sampled_from("abdefgh"), max_size=19))
def test_renumber_puts_flat_lists_in_sequence(markers: list[str]):
    lines = ["a. item 0"] + [f"{marker}. item {index + 1}" for index, marker in enumerate(markers)]

    fixed = apply_rewrites(lines, renumber(lines))

    assert renumber(fixed) == []
    (parsed,) = parse_lists(fixed)
    assert len(parsed) == len(lines)
    assert {line.type for _, line in parsed} == {ListType.ALPHABETICAL}
    assert fixed[-1].startswith(encode_alphabetical(len(lines)) + ". ")
