"""Package-specific exception types."""

from __future__ import annotations


class ListError(ValueError):
    """Base class for list marker errors.

    Lines that simply do not look like list items are not errors; parsing
    functions return ``None`` or end the current list for those.
    """


class CodecRangeError(ListError):
    """Raised when a marker cannot be decoded or a value cannot be encoded.

    Args:
        system: Name of the numbering system involved.
        detail: The offending marker or value.
    """

    def __init__(self, system: str, detail: object):
        self.system = system
        self.detail = detail
        super().__init__(f"Invalid {system} marker or value: {detail!r}")


class IndentationUnderflowError(ListError):
    """Raised when decreasing indentation that is already at level 0."""

    def __init__(self, indentation: str):
        self.indentation = indentation
        super().__init__(f"Cannot decrease indentation below level 0 ({indentation!r})")


class InvalidIndentationJumpError(ListError):
    """Raised when a line is nested more than one level deeper than its list allows.

    Args:
        level: Indentation level of the offending line.
        depth: Deepest level the list could be extended to.
    """

    def __init__(self, level: int, depth: int):
        self.level = level
        self.depth = depth
        super().__init__(f"Indentation level {level} skips a level (maximum allowed is {depth})")


class MissingContextError(ListError):
    """Raised when an edited nested line has neither a sibling nor a parent."""

    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(f"No sibling or parent item found for line {line_number + 1}")


class ParseError(ListError):
    """Base class for errors raised while reading list content from text."""


class LineTooLongError(ParseError):
    """Raised when a line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Line {self.line_number} exceeds maximum allowed length "
            f"of {self.max_line_length} characters"
        )
