"""Constants used across the more-ordered-lists package."""

from __future__ import annotations

import re

from .config import ListConfig

DEFAULT_CONFIG = ListConfig()

# Indentation
INDENT_WIDTH = 4
INDENT_UNIT = "\t"

# Markers
BULLET_GLYPHS = "*-+"
ALPHABET_SIZE = 26
MAX_ROMAN_VALUE = 3999
ROMAN_SYMBOLS = {"i": 1, "v": 5, "x": 10, "l": 50, "c": 100, "d": 500, "m": 1000}
ROMAN_NUMERAL_PATTERN = re.compile(r"^m{0,3}(cm|cd|d?c{0,3})(xc|xl|l?x{0,3})(ix|iv|v?i{0,3})$")
ROMAN_NUMERAL_TABLE = (
    (1000, "m"),
    (900, "cm"),
    (500, "d"),
    (400, "cd"),
    (100, "c"),
    (90, "xc"),
    (50, "l"),
    (40, "xl"),
    (10, "x"),
    (9, "ix"),
    (5, "v"),
    (4, "iv"),
    (1, "i"),
)

# File front end
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
DEFAULT_MAX_LINE_LENGTH = DEFAULT_CONFIG.max_line_length
TEXT_EXTENSIONS = (".md", ".markdown", ".txt")
