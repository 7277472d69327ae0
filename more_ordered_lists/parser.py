"""List parsing utilities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .classifier import classify_marker, marker_value, successor_marker
from .config import ConfigError, ListConfig, resolve_config
from .exceptions import CodecRangeError, LineTooLongError, ParseError
from .filesystem import safe_read
from .grammar import LinePatterns, build_line_patterns, match_line
from .indentation import indentation_level, leading_indentation
from .models import ContextStack, ListSeparator, ListType, MarkerLine, ParsedList, ParseResult

logger = logging.getLogger(__name__)


def parse_line(
    text: str,
    config: ListConfig,
    context: MarkerLine | None = None,
    patterns: LinePatterns | None = None,
) -> MarkerLine | None:
    """Parse one line, optionally continuing a sibling item.

    When `context` is given, the marker is corrected to the successor of the
    context and the context's separator is inherited, so ``["A. x", "A. y"]``
    parses as ``A`` and ``B``. Bullets keep their own glyph.

    Args:
        text: A single line without its line terminator.
        config: Configuration selecting recognized systems.
        context: Previous item at the same indentation level, if any.
        patterns: Precompiled line patterns for `config`.

    Returns:
        MarkerLine | None: The classified line, or None when the line does not
            continue or start a list.

    Examples:
        parse_line("(iv) text", ListConfig())
        parse_line("b) next", ListConfig(), context=previous_line)
    """
    match = match_line(text, config, patterns)
    if match is None:
        return None

    list_type = classify_marker(match.marker, config, context)
    if list_type is None:
        return None

    marker = match.marker
    separator = match.separator
    if list_type is not ListType.UNORDERED:
        try:
            if context is None:
                # Validates the marker; "0." or "(0)" carry no ordinal value
                marker_value(MarkerLine(list_type, "", marker, separator, ""), config)
            else:
                marker = successor_marker(list_type, context, config)
                separator = context.separator
        except CodecRangeError as error:
            logger.debug("Marker %r cannot be sequenced: %s", match.marker, error)
            return None

    return MarkerLine(list_type, match.indentation, marker, separator, match.content)


def is_host_list_line(line: MarkerLine) -> bool:
    # Unindented bullets and "1." / "1)" lists are handled by plain Markdown
    if line.type is ListType.UNORDERED:
        return True
    return line.type is ListType.NUMBERED and line.separator is not ListSeparator.DOUBLE_PARENTHESIS


def _scan_list(
    lines: Sequence[str], start: int, end: int, config: ListConfig, patterns: LinePatterns
) -> ParsedList:
    stack = ContextStack()
    parsed: ParsedList = []

    for line_number in range(start, end):
        text = lines[line_number]
        level = indentation_level(leading_indentation(text))

        if level > stack.depth:
            logger.debug("Line %d: indentation level %d skips a level", line_number, level)
            break

        stack.truncate(level)
        sibling = stack.sibling(level)
        parent = stack.parent(level)

        current = parse_line(text, config, sibling, patterns)
        if current is None:
            break

        if sibling is None and parent is None:
            if level > 0:
                logger.debug("Line %d: nested item without a parent", line_number)
                break
            if is_host_list_line(current):
                break

        stack.place(current)
        parsed.append((line_number, current))

    return parsed


def _scan_lists(
    lines: Sequence[str], start: int, end: int, config: ListConfig, patterns: LinePatterns
) -> list[ParsedList]:
    lists: list[ParsedList] = []
    line_number = start

    while line_number < end:
        parsed = _scan_list(lines, line_number, end, config, patterns)
        if parsed:
            lists.append(parsed)
            line_number = parsed[-1][0] + 1
        else:
            line_number += 1

    return lists


def _clamp_range(lines: Sequence[str], start: int, end: int | None) -> tuple[int, int]:
    end = len(lines) if end is None else min(end, len(lines))
    return max(start, 0), end


def parse_list(
    lines: Sequence[str], start: int = 0, end: int | None = None, config: ListConfig | None = None
) -> ParsedList:
    """Parse the single list starting at `start`.

    Walks forward from `start` keeping the latest item of every indentation
    level and stops at the first line that cannot extend the list: a line
    that is not list-shaped, a marker rejected in context, a jump of more
    than one indentation level, or an unindented bullet or ``1.`` item that
    plain Markdown already handles.

    Args:
        lines: Document lines without line terminators.
        start: Zero-based index of the first line of the list.
        end: Exclusive upper bound of the scan; defaults to the end of `lines`.
        config: Configuration selecting recognized systems.

    Returns:
        ParsedList: ``(line_number, MarkerLine)`` pairs, empty when no list
            starts at `start`.

    Raises:
        ConfigError: If the configuration fails validation.
    """
    config = resolve_config(config)
    start, end = _clamp_range(lines, start, end)
    return _scan_list(lines, start, end, config, build_line_patterns(config))


def parse_lists(
    lines: Sequence[str], start: int = 0, end: int | None = None, config: ListConfig | None = None
) -> list[ParsedList]:
    """Find every list in a range of lines.

    Restarts the scan after each list, and after each line where no list
    starts, until the range is exhausted. The returned lists are disjoint and
    each covers consecutive lines.

    Args:
        lines: Document lines without line terminators.
        start: Zero-based index of the first line to scan.
        end: Exclusive upper bound of the scan; defaults to the end of `lines`.
        config: Configuration selecting recognized systems. Defaults to a new
            `ListConfig` when omitted.

    Returns:
        list[ParsedList]: Lists in document order.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        parse_lists(["A. first", "B. second"])
        parse_lists(editor_lines, start=first_visible, end=last_visible + 1)
    """
    config = resolve_config(config)
    start, end = _clamp_range(lines, start, end)
    return _scan_lists(lines, start, end, config, build_line_patterns(config))


def find_list_containing(
    lines: Sequence[str], target: int, config: ListConfig | None = None
) -> ParsedList:
    """Return the list that contains line `target`.

    First locates the run of consecutive list-shaped lines around `target`
    using the grammar alone, then parses that run and picks the list covering
    `target`.

    Args:
        lines: Document lines without line terminators.
        target: Zero-based index of the line of interest.
        config: Configuration selecting recognized systems.

    Returns:
        ParsedList: The containing list, or an empty list when `target` is
            not part of any list.

    Raises:
        ConfigError: If the configuration fails validation.
    """
    config = resolve_config(config)
    if not 0 <= target < len(lines):
        return []

    patterns = build_line_patterns(config)
    if match_line(lines[target], config, patterns) is None:
        return []

    run_start = target
    while run_start > 0 and match_line(lines[run_start - 1], config, patterns) is not None:
        run_start -= 1

    run_end = target + 1
    while run_end < len(lines) and match_line(lines[run_end], config, patterns) is not None:
        run_end += 1

    for parsed in _scan_lists(lines, run_start, run_end, config, patterns):
        if parsed[0][0] <= target <= parsed[-1][0]:
            return parsed
    return []


def strip_line_ending(line: str) -> str:
    return line.rstrip("\r\n")


def parse_text(
    content: str, max_line_length: int | None = None, config: ListConfig | None = None
) -> ParseResult:
    """Parse text content into lists.

    Args:
        content: Text to parse.
        max_line_length: Optional override for the maximum allowed line length
            (excluding line endings).
        config: Configuration controlling parsing behavior. Defaults to a new
            `ListConfig` when omitted.

    Returns:
        ParseResult: File lines (with endings) and the lists found in them.

    Raises:
        ConfigError: If the configuration fails validation.
        LineTooLongError: If a line exceeds `max_line_length`.
    """
    config = resolve_config(config)
    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )

    full_file = content.splitlines(keepends=True)
    lines = [strip_line_ending(line) for line in full_file]

    for line_number, line in enumerate(lines):
        if len(line) > effective_max_line_length:
            raise LineTooLongError(line_number + 1, effective_max_line_length)

    return ParseResult(full_file=full_file, lists=parse_lists(lines, config=config))


class ParseFileError(Exception):
    """Raised when parsing a text file fails."""


def parse_file(
    filepath: Path,
    max_line_length: int | None = None,
    config: ListConfig | None = None,
) -> ParseResult:
    """Parse a text file and extract its lists.

    Args:
        filepath: Path to the file to parse.
        max_line_length: Optional override for the maximum allowed line length
            (excluding line endings).
        config: Configuration controlling parsing behavior; defaults to a new
            `ListConfig` when omitted.

    Returns:
        ParseResult: File lines and the lists found in them.

    Raises:
        ParseFileError: If configuration is invalid, a line exceeds the
            limit, or the file cannot be read or decoded.

    Examples:
        result = parse_file(Path("notes.md"), 120, config)
    """
    try:
        config = resolve_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )
    if effective_max_line_length <= 0:
        raise ParseFileError("`max_line_length` override must be a positive integer")

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except IOError as error:
        raise ParseFileError(str(error)) from error

    try:
        return parse_text(content, effective_max_line_length, config)
    except LineTooLongError as error:
        error_message = (
            f"{filepath} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        )
        raise ParseFileError(error_message) from error
    except ParseError as error:
        raise ParseFileError(f"{filepath}: {error}") from error
