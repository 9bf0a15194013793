"""Hex dump formatting and glyph tables."""

from .glyphs import GlyphRevision, build_glyph_table
from .hexdump import (
    BYTES_PER_LINE,
    FORMATTER_LOGGER,
    NO_FILE_MESSAGE,
    HexDocument,
    InvariantViolation,
    format_bytes,
    format_line,
    hex_digit,
    hex_pair,
    line_count_for,
)

__all__ = [
    "BYTES_PER_LINE",
    "FORMATTER_LOGGER",
    "NO_FILE_MESSAGE",
    "GlyphRevision",
    "HexDocument",
    "InvariantViolation",
    "build_glyph_table",
    "format_bytes",
    "format_line",
    "hex_digit",
    "hex_pair",
    "line_count_for",
]
