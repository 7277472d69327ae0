"""Conversion between list markers and their ordinal values.

Every numbering system maps a positive integer to a canonical lowercase
marker and back. Letter systems decode case-insensitively; case is a
presentation attribute of the line, not part of the value.
"""

from __future__ import annotations

import string

from .constants import (
    ALPHABET_SIZE,
    MAX_ROMAN_VALUE,
    ROMAN_NUMERAL_PATTERN,
    ROMAN_NUMERAL_TABLE,
    ROMAN_SYMBOLS,
)
from .exceptions import CodecRangeError
from .models import ListType

_LETTERS = string.ascii_lowercase


def _letter_position(character: str) -> int:
    position = _LETTERS.find(character)
    if len(character) != 1 or position < 0:
        return 0
    return position + 1


# Alphabetical (bijective base-26)


def decode_alphabetical(marker: str) -> int:
    """Decode a letter marker in bijective base 26.

    Args:
        marker: Letters only, any case.

    Returns:
        int: Value where ``a`` is 1, ``z`` is 26 and ``aa`` is 27.

    Raises:
        CodecRangeError: If the marker is empty or contains non-letters.

    Examples:
        decode_alphabetical("az")  # 52
        decode_alphabetical("BA")  # 53
    """
    if not marker:
        raise CodecRangeError("alphabetical", marker)

    value = 0
    for character in marker.lower():
        position = _letter_position(character)
        if not position:
            raise CodecRangeError("alphabetical", marker)
        value = value * ALPHABET_SIZE + position
    return value


def encode_alphabetical(value: int) -> str:
    """Encode a positive value in bijective base 26.

    Examples:
        encode_alphabetical(27)  # "aa"
        encode_alphabetical(702)  # "zz"
    """
    if value < 1:
        raise CodecRangeError("alphabetical", value)

    digits = []
    remaining = value
    while remaining > 0:
        remaining, offset = divmod(remaining - 1, ALPHABET_SIZE)
        digits.append(_LETTERS[offset])
    return "".join(reversed(digits))


# Repeated letters (aa, bb, ..., zz, aaa)


def decode_repeated_letters(marker: str) -> int:
    """Decode a marker made of one repeated letter.

    Each length contributes 26 values: ``a``..``z`` are 1..26, ``aa``..``zz``
    are 27..52, ``aaa`` is 53.

    Raises:
        CodecRangeError: If the marker is empty, mixes letters, or contains
            non-letters.

    Examples:
        decode_repeated_letters("bb")  # 28
    """
    lowered = marker.lower()
    if not lowered or lowered.strip(lowered[0]):
        raise CodecRangeError("repeated letters", marker)

    position = _letter_position(lowered[0])
    if not position:
        raise CodecRangeError("repeated letters", marker)
    return ALPHABET_SIZE * (len(lowered) - 1) + position


def encode_repeated_letters(value: int) -> str:
    if value < 1:
        raise CodecRangeError("repeated letters", value)

    length, offset = divmod(value - 1, ALPHABET_SIZE)
    return _LETTERS[offset] * (length + 1)


# Roman numerals


def is_valid_roman(marker: str) -> bool:
    """Check whether `marker` is a well-formed Roman numeral between 1 and 3999.

    This is stricter than `decode_roman`: ``"iiii"`` and ``"vx"`` sum to a
    value but are not valid numerals.

    Examples:
        is_valid_roman("mcmxciv")  # True
        is_valid_roman("iiii")  # False
    """
    if not marker:
        return False
    return ROMAN_NUMERAL_PATTERN.match(marker.lower()) is not None


def decode_roman(marker: str) -> int:
    """Sum a Roman numeral, honoring subtractive notation.

    Raises:
        CodecRangeError: If the marker is empty, contains non-Roman characters,
            or its value is 0 or above 3999.

    Examples:
        decode_roman("XIV")  # 14
    """
    value = 0
    previous = 0
    for character in reversed(marker.lower()):
        current = ROMAN_SYMBOLS.get(character)
        if current is None:
            raise CodecRangeError("roman", marker)
        if current < previous:
            value -= current
        else:
            value += current
        previous = current

    if value < 1 or value > MAX_ROMAN_VALUE:
        raise CodecRangeError("roman", marker)
    return value


def encode_roman(value: int) -> str:
    if value < 1 or value > MAX_ROMAN_VALUE:
        raise CodecRangeError("roman", value)

    numeral = []
    remaining = value
    for amount, symbols in ROMAN_NUMERAL_TABLE:
        count, remaining = divmod(remaining, amount)
        numeral.append(symbols * count)
    return "".join(numeral)


# Numbers


def decode_numbered(marker: str) -> int:
    if not marker.isdigit() or not marker.isascii():
        raise CodecRangeError("numbered", marker)

    value = int(marker)
    if value < 1:
        raise CodecRangeError("numbered", marker)
    return value


def encode_numbered(value: int) -> str:
    if value < 1:
        raise CodecRangeError("numbered", value)
    return str(value)


# Dispatch


def decode(list_type: ListType, marker: str, nested_mode: str = "bijective") -> int:
    """Decode `marker` under the numbering system `list_type`.

    Args:
        list_type: Numbering system of the marker.
        marker: Marker token without separator.
        nested_mode: ``"repeated"`` selects repeated-letters decoding for
            nested alphabetical markers; any other mode uses bijective base 26.

    Returns:
        int: Ordinal value of the marker, starting at 1.

    Raises:
        CodecRangeError: If the marker is not valid in that system, or the
            system carries no value.

    Examples:
        decode(ListType.ROMAN, "ix")  # 9
        decode(ListType.NESTED_ALPHABETICAL, "bb", "repeated")  # 28
    """
    if list_type is ListType.ALPHABETICAL:
        return decode_alphabetical(marker)
    if list_type is ListType.NESTED_ALPHABETICAL:
        if nested_mode == "repeated":
            return decode_repeated_letters(marker)
        return decode_alphabetical(marker)
    if list_type is ListType.ROMAN:
        return decode_roman(marker)
    if list_type is ListType.NUMBERED:
        return decode_numbered(marker)
    raise CodecRangeError(list_type.value, marker)


def encode(list_type: ListType, value: int, nested_mode: str = "bijective") -> str:
    """Encode `value` as a lowercase marker in the numbering system `list_type`.

    Raises:
        CodecRangeError: If the value is out of range for the system, or the
            system carries no value.

    Examples:
        encode(ListType.ALPHABETICAL, 3)  # "c"
        encode(ListType.NESTED_ALPHABETICAL, 28, "repeated")  # "bb"
    """
    if list_type is ListType.ALPHABETICAL:
        return encode_alphabetical(value)
    if list_type is ListType.NESTED_ALPHABETICAL:
        if nested_mode == "repeated":
            return encode_repeated_letters(value)
        return encode_alphabetical(value)
    if list_type is ListType.ROMAN:
        return encode_roman(value)
    if list_type is ListType.NUMBERED:
        return encode_numbered(value)
    raise CodecRangeError(list_type.value, value)
