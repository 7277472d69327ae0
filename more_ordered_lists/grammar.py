"""Recognition of list-shaped lines."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .config import ListConfig
from .constants import BULLET_GLYPHS
from .models import ListSeparator, MarkerMatch

_SEPARATORS = {".": ListSeparator.DOT, ")": ListSeparator.PARENTHESIS}


@dataclass(frozen=True)
class LinePatterns:
    """Compiled line shapes, tried in declaration order.

    Attributes:
        bullet: ``INDENTATION + GLYPH + SPACE + CONTENT``.
        standard: ``INDENTATION + MARKER + SEPARATOR + SPACE + CONTENT``.
        parentheses: ``INDENTATION + ( + MARKER + ) + SPACE + CONTENT``, or
            None when parentheses are disabled.
    """

    bullet: re.Pattern[str]
    standard: re.Pattern[str]
    parentheses: re.Pattern[str] | None


def build_marker_pattern(config: ListConfig) -> str:
    """Build the alternation matching a marker token.

    Multi-letter runs are tried before single letters so that ``aa`` is not
    split, and letters are limited to the enabled cases. Digits are always
    allowed here; classification decides whether they are accepted.

    Args:
        config: Configuration selecting systems and letter cases.

    Returns:
        str: Regular expression source without anchors or groups.

    Examples:
        build_marker_pattern(ListConfig(case_style="lower"))  # "[a-z]{2,}|[a-z]|[0-9]+"
    """
    patterns = []

    alphabet = ""
    if config.has_uppercase:
        alphabet += "A-Z"
    if config.has_lowercase:
        alphabet += "a-z"

    # Roman numerals need multi-letter runs even when nesting is disabled;
    # classification rejects the non-Roman ones.
    if alphabet:
        if config.nested_enabled or config.enable_roman:
            patterns.append(f"[{alphabet}]{{2,}}")
        if config.enable_alphabetical or config.enable_roman:
            patterns.append(f"[{alphabet}]")

    patterns.append("[0-9]+")
    return "|".join(patterns)


def build_separator_pattern(config: ListConfig) -> str:
    separators = r"\."
    if config.enable_parentheses:
        separators += r"\)"
    return separators


def build_line_patterns(config: ListConfig) -> LinePatterns:
    marker_pattern = build_marker_pattern(config)
    separator_pattern = build_separator_pattern(config)
    glyphs = re.escape(BULLET_GLYPHS)

    bullet = re.compile(rf"^([ \t]*)([{glyphs}]) (.*)$")
    standard = re.compile(rf"^([ \t]*)({marker_pattern})([{separator_pattern}]) (.*)$")
    parentheses = None
    if config.enable_parentheses:
        parentheses = re.compile(rf"^([ \t]*)\(({marker_pattern})\) (.*)$")

    return LinePatterns(bullet=bullet, standard=standard, parentheses=parentheses)


def match_line(text: str, config: ListConfig, patterns: LinePatterns | None = None) -> MarkerMatch | None:
    """Split a line into indentation, marker, separator and content.

    Args:
        text: A single line without its line terminator.
        config: Configuration selecting the recognized shapes.
        patterns: Precompiled patterns for `config`, to avoid rebuilding them
            for every line of a scan.

    Returns:
        MarkerMatch | None: The raw pieces, or None when the line does not
            look like a list item.

    Examples:
        match_line("\\t(b) text", ListConfig())
        match_line("a.missing space", ListConfig())  # None
    """
    patterns = patterns or build_line_patterns(config)

    bullet_match = patterns.bullet.match(text)
    if bullet_match:
        indentation, glyph, content = bullet_match.groups()
        return MarkerMatch(indentation, glyph, None, " " + content)

    standard_match = patterns.standard.match(text)
    if standard_match:
        indentation, marker, separator, content = standard_match.groups()
        return MarkerMatch(indentation, marker, _SEPARATORS[separator], " " + content)

    if patterns.parentheses is not None:
        parentheses_match = patterns.parentheses.match(text)
        if parentheses_match:
            indentation, marker, content = parentheses_match.groups()
            return MarkerMatch(
                indentation, marker, ListSeparator.DOUBLE_PARENTHESIS, " " + content
            )

    return None
