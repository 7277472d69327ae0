"""
more-ordered-lists: alphabetical, Roman and nested ordered lists for Markdown text.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    more-ordered-lists outline.md --check

Library Usage:
    from more_ordered_lists import apply_rewrites, continue_item, parse_lists

    lines = ["a. first", "b. second"]
    lists = parse_lists(lines)
    rewrites = continue_item(lines, 0, content="inserted")
    lines = apply_rewrites(lines, rewrites, inserted_at=1)
"""

from .classifier import classify_marker, first_marker, next_marker
from .config import ConfigError, ListConfig, build_config, load_config
from .editing import apply_rewrites, continue_item, indent_item, outdent_item
from .exceptions import (
    CodecRangeError,
    IndentationUnderflowError,
    InvalidIndentationJumpError,
    LineTooLongError,
    ListError,
    MissingContextError,
    ParseError,
)
from .grammar import match_line
from .indentation import decrease_indentation, increase_indentation, indentation_level
from .models import ListSeparator, ListType, MarkerLine, ParsedList, ParseResult
from .numerals import decode, encode
from .parser import find_list_containing, parse_file, parse_line, parse_list, parse_lists, parse_text
from .resequencer import renumber, resequence

__version__ = "0.1.0"

__all__ = [
    # Parsing
    "parse_lists",
    "parse_list",
    "parse_line",
    "parse_text",
    "parse_file",
    "find_list_containing",
    "match_line",
    "classify_marker",
    # Resequencing and editing
    "resequence",
    "renumber",
    "indent_item",
    "outdent_item",
    "continue_item",
    "apply_rewrites",
    # Markers and indentation
    "next_marker",
    "first_marker",
    "decode",
    "encode",
    "indentation_level",
    "increase_indentation",
    "decrease_indentation",
    # Data models
    "ListType",
    "ListSeparator",
    "MarkerLine",
    "ParsedList",
    "ParseResult",
    # Configuration
    "ListConfig",
    "load_config",
    "build_config",
    # Exceptions
    "ListError",
    "CodecRangeError",
    "IndentationUnderflowError",
    "InvalidIndentationJumpError",
    "MissingContextError",
    "ParseError",
    "LineTooLongError",
    "ConfigError",
    # Version
    "__version__",
]
