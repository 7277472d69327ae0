"""Recomputing list markers after an edit."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .classifier import classify_marker, first_marker, next_marker, successor_marker
from .config import ListConfig, resolve_config
from .exceptions import InvalidIndentationJumpError, MissingContextError
from .grammar import match_line
from .models import ContextStack, ListType, MarkerLine, ParsedList
from .parser import is_host_list_line, parse_lists

logger = logging.getLogger(__name__)


@dataclass
class _Step:
    """One line of the walk, in post-edit numbering."""

    line_number: int
    line: MarkerLine
    current_text: str | None
    edited: bool = False
    had_sibling: bool = False


def _lines_with_siblings(parsed_list: ParsedList) -> set[int]:
    stack = ContextStack()
    with_siblings = set()
    for line_number, line in parsed_list:
        level = line.indentation_level
        stack.truncate(level)
        if stack.sibling(level) is not None:
            with_siblings.add(line_number)
        stack.place(line)
    return with_siblings


def _build_steps(
    parsed_list: ParsedList,
    line_number: int,
    edited: MarkerLine,
    lines: Sequence[str] | None,
    inserted: bool,
) -> list[_Step]:
    with_siblings = _lines_with_siblings(parsed_list)
    steps = []

    for number, line in parsed_list:
        current_text = lines[number] if lines is not None else None
        had_sibling = number in with_siblings

        if number == line_number and not inserted:
            steps.append(_Step(number, edited, current_text, edited=True, had_sibling=had_sibling))
            continue

        shifted = number + 1 if inserted and number > line_number else number
        steps.append(_Step(shifted, line, current_text, had_sibling=had_sibling))

        if inserted and number == line_number:
            steps.append(_Step(number + 1, edited, None, edited=True))

    return steps


def _rebuild_edited(
    step: _Step, sibling: MarkerLine | None, parent: MarkerLine | None, config: ListConfig
) -> MarkerLine:
    line = step.line
    level = line.indentation_level

    if sibling is not None:
        list_type, marker = next_marker(sibling, config)
        return line.replace(type=list_type, marker=marker, separator=sibling.separator)
    if parent is not None:
        return first_marker(line, parent, level, config)
    if level == 0:
        return line
    raise MissingContextError(step.line_number)


def _rebuild_following(
    step: _Step, sibling: MarkerLine | None, parent: MarkerLine | None, config: ListConfig
) -> MarkerLine | None:
    line = step.line
    level = line.indentation_level

    if sibling is not None:
        list_type = classify_marker(line.marker, config, sibling)
        if list_type is None:
            if sibling.type is ListType.ALPHABETICAL and line.marker.isalpha():
                # Raises when the alphabet is exhausted and cannot nest
                next_marker(sibling, config)
            logger.debug(
                "Line %d: %s marker %r does not follow %s marker %r",
                step.line_number,
                line.type.value,
                line.marker,
                sibling.type.value,
                sibling.marker,
            )
            return None
        marker = line.marker
        if list_type is not ListType.UNORDERED:
            marker = successor_marker(list_type, sibling, config)
        return line.replace(type=list_type, marker=marker, separator=sibling.separator)

    if parent is None:
        return line if level == 0 else None
    if step.had_sibling:
        # The previous sibling moved away; this line now starts its level
        return first_marker(line, parent, level, config)
    return line


def resequence(
    parsed_list: ParsedList,
    line_number: int,
    edited: MarkerLine | str,
    config: ListConfig | None = None,
    *,
    lines: Sequence[str] | None = None,
    inserted: bool = False,
) -> list[tuple[int, str]]:
    """Recompute markers from an edited line to the end of its list.

    The edited line becomes the successor of its sibling, or the first item
    of a new level under its parent. Every following line is rebuilt from a
    context stack seeded with the lines before it, and a line that lost its
    previous sibling restarts its level. The walk stops where the list would
    stop when parsed.

    Args:
        parsed_list: The list containing the edit, as returned by the parser
            for the document before the edit.
        line_number: Zero-based index of the edited line.
        edited: New state of the edited line, as a `MarkerLine` or as raw
            line text. Raw text that is not a list line, or that turns the
            first item into a top-level bullet or ``1.`` item, is returned
            unchanged without touching the rest of the list.
        config: Configuration selecting recognized systems.
        lines: Current document lines. When given, lines whose text already
            matches are left out of the result; otherwise every recomputed
            line is returned.
        inserted: Treat `edited` as a new line inserted after `line_number`.
            Rewrites then use the numbering after the insertion, and the
            inserted line is always part of the result.

    Returns:
        list[tuple[int, str]]: ``(line_number, new_text)`` rewrites in
            document order. Nothing is returned when any line fails.

    Raises:
        InvalidIndentationJumpError: If the edited line is nested more than
            one level below the items before it.
        CodecRangeError: If a successor marker cannot be generated, including
            a following item whose alphabetical sibling reached ``z`` with
            nesting disabled.
        ConfigError: If the configuration fails validation.

    Examples:
        parsed = find_list_containing(lines, 1)
        edited = parsed[1][1].replace(indentation="\\t")
        resequence(parsed, 1, edited, lines=lines)
    """
    config = resolve_config(config)
    target = line_number + 1 if inserted else line_number

    if all(number != line_number for number, _ in parsed_list):
        raise ValueError(f"Line {line_number + 1} is not part of the given list")

    if isinstance(edited, str):
        text = edited
        match = match_line(text, config)
        list_type = classify_marker(match.marker, config) if match is not None else None
        if match is None or list_type is None:
            return [(target, text)]
        edited = MarkerLine(list_type, match.indentation, match.marker, match.separator, match.content)
        starts_list = not inserted and line_number == parsed_list[0][0]
        if starts_list and edited.indentation_level == 0 and is_host_list_line(edited):
            return [(target, text)]

    stack = ContextStack()
    rewrites: list[tuple[int, str]] = []

    for step in _build_steps(parsed_list, line_number, edited, lines, inserted):
        if step.line_number < target:
            stack.place(step.line)
            continue

        level = step.line.indentation_level
        if level > stack.depth:
            if step.edited:
                raise InvalidIndentationJumpError(level, stack.depth)
            logger.debug("Line %d: resequencing stops at indentation jump", step.line_number)
            break

        stack.truncate(level)
        sibling = stack.sibling(level)
        parent = stack.parent(level)

        if step.edited:
            rebuilt = _rebuild_edited(step, sibling, parent, config)
        else:
            rebuilt = _rebuild_following(step, sibling, parent, config)
            if rebuilt is None:
                logger.debug("Line %d: resequencing stops, list ends here", step.line_number)
                break

        stack.place(rebuilt)
        text = rebuilt.render()
        if text != step.current_text:
            rewrites.append((step.line_number, text))

    return rewrites


def renumber(lines: Sequence[str], config: ListConfig | None = None) -> list[tuple[int, str]]:
    """Compute the rewrites that put every list in `lines` in sequence.

    Args:
        lines: Document lines without line terminators.
        config: Configuration selecting recognized systems.

    Returns:
        list[tuple[int, str]]: ``(line_number, new_text)`` for every item
            whose marker or separator does not follow its sibling.

    Examples:
        renumber(["A. x", "A. y", "A. z"])  # [(1, "B. y"), (2, "C. z")]
    """
    config = resolve_config(config)
    rewrites = []
    for parsed in parse_lists(lines, config=config):
        for line_number, line in parsed:
            text = line.render()
            if text != lines[line_number]:
                rewrites.append((line_number, text))
    return rewrites
