"""Data models for more-ordered-lists."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from .exceptions import InvalidIndentationJumpError
from .indentation import indentation_level


class ListType(Enum):
    """Numbering systems a list line can belong to.

    Attributes:
        ALPHABETICAL: Single letters, ``a`` to ``z``.
        ROMAN: Roman numerals, ``i`` to ``mmmcmxcix``.
        NESTED_ALPHABETICAL: Multi-letter markers continuing past ``z``.
        NUMBERED: Decimal numbers.
        UNORDERED: Bullet glyphs ``*``, ``-`` and ``+``.
    """

    ALPHABETICAL = "alphabetical"
    ROMAN = "roman"
    NESTED_ALPHABETICAL = "nested_alphabetical"
    NUMBERED = "numbered"
    UNORDERED = "unordered"


class ListSeparator(Enum):
    """Characters that terminate an ordered marker."""

    DOT = "."
    PARENTHESIS = ")"
    DOUBLE_PARENTHESIS = "()"


@dataclass(frozen=True)
class MarkerMatch:
    """Raw pieces of a list-shaped line before classification.

    Attributes:
        indentation: Leading whitespace.
        marker: Marker token without separator or parentheses.
        separator: Separator, or None for bullet glyphs.
        content: Text after the marker, including the single leading space.
    """

    indentation: str
    marker: str
    separator: ListSeparator | None
    content: str


@dataclass(frozen=True)
class MarkerLine:
    """A classified list line.

    Attributes:
        type: Numbering system of the marker.
        indentation: Leading whitespace, kept verbatim.
        marker: Bare marker token, e.g. ``"A"``, ``"iv"``, ``"aa"`` or ``"-"``.
        separator: Separator following the marker; None for bullets.
        content: Text after the marker, including its leading space.
    """

    type: ListType
    indentation: str
    marker: str
    separator: ListSeparator | None
    content: str

    def render(self) -> str:
        """Return the line text for this item.

        Examples:
            MarkerLine(ListType.ROMAN, "\\t", "iv", ListSeparator.DOUBLE_PARENTHESIS, " x").render()
            # "\\t(iv) x"
        """
        if self.separator is ListSeparator.DOUBLE_PARENTHESIS:
            return f"{self.indentation}({self.marker}){self.content}"
        if self.separator is None:
            return f"{self.indentation}{self.marker}{self.content}"
        return f"{self.indentation}{self.marker}{self.separator.value}{self.content}"

    @property
    def indentation_level(self) -> int:
        return indentation_level(self.indentation)

    @property
    def case_style(self) -> str | None:
        """Letter case of the marker; None for numbers and bullets."""
        if not any(character.isalpha() for character in self.marker):
            return None
        if self.marker.isupper():
            return "upper"
        if self.marker.islower():
            return "lower"
        return None

    def apply_case(self, marker: str) -> str:
        """Render a generated marker in this line's letter case."""
        if self.case_style == "upper":
            return marker.upper()
        if self.case_style == "lower":
            return marker.lower()
        return marker

    def replace(self, **changes: object) -> MarkerLine:
        return replace(self, **changes)


ParsedList = list[tuple[int, MarkerLine]]


@dataclass
class ContextStack:
    """Most recent item per indentation level while walking a list.

    Slot ``i`` holds the last line seen at level ``i``. The stack never has
    gaps: a line can extend it by one level at most.
    """

    entries: list[MarkerLine] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.entries)

    def sibling(self, level: int) -> MarkerLine | None:
        if level < len(self.entries):
            return self.entries[level]
        return None

    def parent(self, level: int) -> MarkerLine | None:
        if 0 < level <= len(self.entries):
            return self.entries[level - 1]
        return None

    def truncate(self, level: int) -> None:
        """Discard contexts nested deeper than `level`."""
        del self.entries[level + 1 :]

    def place(self, line: MarkerLine) -> None:
        """Record `line` as the current item of its level.

        Raises:
            InvalidIndentationJumpError: If the line is more than one level
                deeper than the stack.
        """
        level = line.indentation_level
        if level > len(self.entries):
            raise InvalidIndentationJumpError(level, len(self.entries))
        del self.entries[level:]
        self.entries.append(line)


@dataclass
class ParseResult:
    """Structured result of parsing a text file.

    Attributes:
        full_file: Lines from the file, including trailing newlines.
        lists: Lists discovered in the file, with zero-based line numbers.
    """

    full_file: list[str]
    lists: list[ParsedList]
