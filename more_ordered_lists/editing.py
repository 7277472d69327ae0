"""Editing operations on list items.

Each operation takes the document lines and returns the rewrites to apply,
or raises without returning anything when the edit cannot be completed.
"""

from __future__ import annotations

from collections.abc import Sequence

from .config import ListConfig, resolve_config
from .exceptions import IndentationUnderflowError
from .indentation import decrease_indentation, increase_indentation
from .models import MarkerLine, ParsedList
from .parser import find_list_containing
from .resequencer import resequence


def _locate(
    lines: Sequence[str], line_number: int, config: ListConfig
) -> tuple[ParsedList, MarkerLine | None]:
    parsed_list = find_list_containing(lines, line_number, config)
    for number, line in parsed_list:
        if number == line_number:
            return parsed_list, line
    return parsed_list, None


def indent_item(
    lines: Sequence[str], line_number: int, config: ListConfig | None = None
) -> list[tuple[int, str]]:
    """Nest an item one level deeper and renumber the rest of its list.

    Args:
        lines: Document lines without line terminators.
        line_number: Zero-based index of the item.
        config: Configuration selecting recognized systems.

    Returns:
        list[tuple[int, str]]: Rewrites to apply; empty when the line is not
            a list item.

    Raises:
        InvalidIndentationJumpError: If the item has no item above it to nest
            under.
        CodecRangeError: If a marker cannot be generated.
    """
    config = resolve_config(config)
    parsed_list, current = _locate(lines, line_number, config)
    if current is None:
        return []

    edited = current.replace(indentation=increase_indentation(current.indentation))
    return resequence(parsed_list, line_number, edited, config, lines=lines)


def outdent_item(
    lines: Sequence[str], line_number: int, config: ListConfig | None = None
) -> list[tuple[int, str]]:
    """Move an item one level up and renumber the rest of its list.

    Raises:
        IndentationUnderflowError: If the item is already at level 0.
        CodecRangeError: If a marker cannot be generated.
    """
    config = resolve_config(config)
    parsed_list, current = _locate(lines, line_number, config)
    if current is None:
        return []

    edited = current.replace(indentation=decrease_indentation(current.indentation))
    return resequence(parsed_list, line_number, edited, config, lines=lines)


def continue_item(
    lines: Sequence[str],
    line_number: int,
    config: ListConfig | None = None,
    content: str = "",
) -> list[tuple[int, str]]:
    """Start the next item after `line_number`.

    An item with content gets a new sibling inserted below it, and the rest
    of the list is renumbered. An empty item is moved one level up instead;
    at the top level its marker is removed, which ends the list.

    Args:
        lines: Document lines without line terminators.
        line_number: Zero-based index of the current item.
        config: Configuration selecting recognized systems.
        content: Text of the new item, without the leading space.

    Returns:
        list[tuple[int, str]]: Rewrites to apply. For an insertion the first
            rewrite is the new line at ``line_number + 1`` and the others use
            the numbering after the insertion.

    Raises:
        CodecRangeError: If the sequence cannot advance, e.g. after ``z``
            with nested alphabetical lists disabled.

    Examples:
        continue_item(["a. first"], 0)  # [(1, "b. ")]
    """
    config = resolve_config(config)
    parsed_list, current = _locate(lines, line_number, config)
    if current is None:
        return []

    if not current.content.strip():
        try:
            edited = current.replace(indentation=decrease_indentation(current.indentation))
        except IndentationUnderflowError:
            return [(line_number, "")]
        return resequence(parsed_list, line_number, edited, config, lines=lines)

    new_item = current.replace(content=" " + content)
    return resequence(parsed_list, line_number, new_item, config, lines=lines, inserted=True)


def apply_rewrites(
    lines: Sequence[str], rewrites: Sequence[tuple[int, str]], inserted_at: int | None = None
) -> list[str]:
    """Return a copy of `lines` with `rewrites` applied.

    Args:
        lines: Document lines before the edit.
        rewrites: ``(line_number, new_text)`` pairs.
        inserted_at: Index of a line inserted by the edit, when rewrites use
            the numbering after an insertion.

    Returns:
        list[str]: The edited document lines.

    Examples:
        apply_rewrites(["a. x"], [(1, "b. ")], inserted_at=1)  # ["a. x", "b. "]
    """
    result = list(lines)
    if inserted_at is not None:
        result.insert(inserted_at, "")
    for line_number, text in rewrites:
        result[line_number] = text
    return result
