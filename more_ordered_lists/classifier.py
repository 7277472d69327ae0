"""Marker classification and sequencing.

Several numbering systems share letters: ``i`` is both Roman one and the
ninth letter, ``cc`` is both Roman two hundred and a nested alphabetical
marker. Without context the Roman reading wins; with a preceding sibling the
sibling's system wins whenever the marker is also valid there.
"""

from __future__ import annotations

from .config import ListConfig
from .constants import ALPHABET_SIZE, BULLET_GLYPHS
from .exceptions import CodecRangeError
from .models import ListSeparator, ListType, MarkerLine
from .numerals import decode, encode, is_valid_roman

# Legal outline numbering, by indentation level: A., I., 1., a), aa), (1), (a), (aa), (i)
LEGAL_FIRST_MARKERS = (
    (ListType.ALPHABETICAL, "A", ListSeparator.DOT),
    (ListType.ROMAN, "I", ListSeparator.DOT),
    (ListType.NUMBERED, "1", ListSeparator.DOT),
    (ListType.ALPHABETICAL, "a", ListSeparator.PARENTHESIS),
    (ListType.NESTED_ALPHABETICAL, "aa", ListSeparator.PARENTHESIS),
    (ListType.NUMBERED, "1", ListSeparator.DOUBLE_PARENTHESIS),
    (ListType.ALPHABETICAL, "a", ListSeparator.DOUBLE_PARENTHESIS),
    (ListType.NESTED_ALPHABETICAL, "aa", ListSeparator.DOUBLE_PARENTHESIS),
    (ListType.ROMAN, "i", ListSeparator.DOUBLE_PARENTHESIS),
)

FIRST_MARKERS = {
    ListType.ALPHABETICAL: "a",
    ListType.ROMAN: "i",
    ListType.NESTED_ALPHABETICAL: "aa",
    ListType.NUMBERED: "1",
}


def _is_decodable(list_type: ListType, marker: str, config: ListConfig) -> bool:
    if list_type is ListType.ROMAN:
        return is_valid_roman(marker)
    try:
        decode(list_type, marker, config.nested_alphabetical_mode)
    except CodecRangeError:
        return False
    return True


def _classify_intrinsic(marker: str, config: ListConfig) -> ListType | None:
    if marker in BULLET_GLYPHS:
        return ListType.UNORDERED
    if marker.isdigit():
        return ListType.NUMBERED
    if not marker.isalpha() or not (marker.islower() or marker.isupper()):
        return None
    if is_valid_roman(marker) and config.enable_roman:
        return ListType.ROMAN
    if len(marker) == 1 and config.enable_alphabetical:
        return ListType.ALPHABETICAL
    if (
        len(marker) > 1
        and config.nested_enabled
        and _is_decodable(ListType.NESTED_ALPHABETICAL, marker, config)
    ):
        return ListType.NESTED_ALPHABETICAL
    return None


def classify_marker(
    marker: str, config: ListConfig, context: MarkerLine | None = None
) -> ListType | None:
    """Decide which numbering system a marker belongs to.

    Without context the precedence is: bullet glyph, number, Roman numeral,
    single letter, multi-letter. With a sibling context:

    - the context's system wins when the marker is also valid in it and has
      the same length as the context marker;
    - an alphabetical context whose value reached ``z``, or followed by a
      multi-letter marker, continues as nested alphabetical when nesting is
      enabled and rejects the marker otherwise;
    - any other disagreement rejects the marker.

    Args:
        marker: Marker token without separator or parentheses.
        config: Enabled systems and letter cases.
        context: Previous item at the same indentation level, if any.

    Returns:
        ListType | None: The numbering system, or None when the marker does
            not belong to the running list.

    Examples:
        classify_marker("c", ListConfig())  # ListType.ROMAN
        classify_marker("c", ListConfig(), context=line_b)  # ListType.ALPHABETICAL
    """
    intrinsic = _classify_intrinsic(marker, config)
    if context is None:
        return intrinsic

    # Mixed case never continues a list
    if marker.isalpha() and not (marker.islower() or marker.isupper()):
        return None

    if context.type is ListType.ALPHABETICAL and marker.isalpha():
        try:
            exhausted = marker_value(context, config) >= ALPHABET_SIZE
        except CodecRangeError:
            return None
        if exhausted or len(marker) > 1:
            if config.nested_enabled:
                return ListType.NESTED_ALPHABETICAL
            return None

    if intrinsic is context.type:
        return intrinsic

    if (
        intrinsic is not ListType.UNORDERED
        and context.type is not ListType.UNORDERED
        and len(marker) == len(context.marker)
        and (marker.isalpha() or marker.isdigit())
        and _is_decodable(context.type, marker, config)
    ):
        return context.type

    return None


def marker_value(line: MarkerLine, config: ListConfig) -> int:
    """Decode the ordinal value of a classified line.

    Raises:
        CodecRangeError: If the marker is not valid in its system or the line
            is a bullet.
    """
    return decode(line.type, line.marker, config.nested_alphabetical_mode)


def successor_marker(list_type: ListType, context: MarkerLine, config: ListConfig) -> str:
    """Render the marker following `context` in the system `list_type`.

    Raises:
        CodecRangeError: If the context cannot be decoded or its successor
            cannot be encoded.
    """
    if list_type is ListType.UNORDERED:
        return context.marker
    value = marker_value(context, config) + 1
    return context.apply_case(encode(list_type, value, config.nested_alphabetical_mode))


def next_marker(context: MarkerLine, config: ListConfig) -> tuple[ListType, str]:
    """Compute the system and marker of the item following `context`.

    Alphabetical lists continue past ``z`` as nested alphabetical lists.

    Args:
        context: The preceding item at the same level.
        config: Configuration with the nested alphabetical mode.

    Returns:
        tuple[ListType, str]: Numbering system and marker, in the context's case.

    Raises:
        CodecRangeError: If the sequence cannot advance, e.g. after ``z``
            with nesting disabled or after Roman 3999.

    Examples:
        next_marker(line_z, ListConfig())  # (ListType.NESTED_ALPHABETICAL, "aa")
    """
    list_type = context.type
    if list_type is ListType.ALPHABETICAL and marker_value(context, config) >= ALPHABET_SIZE:
        if not config.nested_enabled:
            raise CodecRangeError("alphabetical", ALPHABET_SIZE + 1)
        list_type = ListType.NESTED_ALPHABETICAL
    return list_type, successor_marker(list_type, context, config)


def _legal_first_marker(level: int, config: ListConfig) -> tuple[ListType, str, ListSeparator] | None:
    if level >= len(LEGAL_FIRST_MARKERS):
        return None

    list_type, marker, separator = LEGAL_FIRST_MARKERS[level]
    if separator is not ListSeparator.DOT and not config.enable_parentheses:
        return None
    if marker.isupper() and not config.has_uppercase:
        return None
    if marker.islower() and not config.has_lowercase:
        return None
    if list_type is ListType.NESTED_ALPHABETICAL and not config.nested_enabled:
        return None
    if list_type is ListType.ROMAN and not config.enable_roman:
        return None
    if list_type is ListType.ALPHABETICAL and not config.enable_alphabetical:
        return None
    return list_type, marker, separator


def first_marker(
    line: MarkerLine, parent: MarkerLine | None, level: int, config: ListConfig
) -> MarkerLine:
    """Restart `line` as the first item of a new nesting level.

    The line keeps its system and case. It takes the separator of an ordered
    parent. With legal ordering enabled the system, marker and separator come
    from the legal outline sequence for `level` instead.

    Args:
        line: The line starting the level.
        parent: The item one level up, if any.
        level: Indentation level of `line`.
        config: Configuration with the legal ordering switch.

    Returns:
        MarkerLine: The line with its first marker.
    """
    if config.enable_legal_ordering and line.type is not ListType.UNORDERED:
        legal = _legal_first_marker(level, config)
        if legal is not None:
            list_type, marker, separator = legal
            return line.replace(type=list_type, marker=marker, separator=separator)

    if line.type is ListType.UNORDERED:
        return line

    separator = line.separator
    if parent is not None and parent.separator is not None:
        separator = parent.separator
    return line.replace(marker=line.apply_case(FIRST_MARKERS[line.type]), separator=separator)
