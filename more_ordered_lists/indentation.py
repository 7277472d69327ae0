"""Indentation levels of list lines."""

from __future__ import annotations

import re

from .constants import INDENT_UNIT, INDENT_WIDTH
from .exceptions import IndentationUnderflowError

_INDENTATION_PATTERN = re.compile(r"^[ \t]*")
_RUN_PATTERN = re.compile(r"\t| +")


def leading_indentation(text: str) -> str:
    """Return the leading tabs and spaces of `text`."""
    return _INDENTATION_PATTERN.match(text).group(0)


def indentation_level(indentation: str) -> int:
    """Convert leading whitespace into a nesting level.

    Every tab counts as one level and every complete group of four spaces
    within a run of spaces counts as one level. Shorter runs count as zero.

    Args:
        indentation: Leading whitespace of a line.

    Returns:
        int: Nesting level, starting at 0.

    Examples:
        indentation_level("\\t")  # 1
        indentation_level("     ")  # 1
        indentation_level("  \\t  ")  # 1
    """
    level = 0
    for run in _RUN_PATTERN.findall(indentation):
        if run == "\t":
            level += 1
        else:
            level += len(run) // INDENT_WIDTH
    return level


def increase_indentation(indentation: str) -> str:
    return INDENT_UNIT + indentation


def decrease_indentation(indentation: str) -> str:
    """Remove one nesting level from `indentation`.

    The last complete unit (a tab or four spaces) is removed. A trailing run of
    fewer than four spaces is kept verbatim, unless removing a tab would join
    it to the spaces before the tab into an extra group of four.

    Args:
        indentation: Leading whitespace of a line.

    Returns:
        str: Indentation one level shallower.

    Raises:
        IndentationUnderflowError: If the indentation is already at level 0.

    Examples:
        decrease_indentation("\\t\\t")  # "\\t"
        decrease_indentation("     ")  # " "
    """
    runs = _RUN_PATTERN.findall(indentation)

    for index in range(len(runs) - 1, -1, -1):
        run = runs[index]
        if run == "\t":
            del runs[index]
            if 0 < index < len(runs) and runs[index - 1] != "\t" and runs[index] != "\t":
                # The space runs around the tab merge; their remainders must not form a new group
                right = runs.pop(index)
                if len(runs[index - 1]) % INDENT_WIDTH + len(right) % INDENT_WIDTH >= INDENT_WIDTH:
                    right = right[: len(right) // INDENT_WIDTH * INDENT_WIDTH]
                runs[index - 1] += right
            return "".join(runs)
        if len(run) >= INDENT_WIDTH:
            runs[index] = run[INDENT_WIDTH:]
            return "".join(runs)

    raise IndentationUnderflowError(indentation)
