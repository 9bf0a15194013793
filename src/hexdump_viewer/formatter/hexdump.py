"""Binary-to-hex-dump formatting.

Each 16-byte block of the source becomes one fixed-width line::

    <label>\\t|  41 42 43 44  45 46 47 48   ...  |ABCDEFGH...  |

The formatter is pure: no I/O, no mutable state. Missing slots at the tail
of the file render as blanks so every line keeps the same width.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from hexdump_viewer.runtime import telemetry

from .glyphs import GlyphRevision, build_glyph_table

BYTES_PER_LINE = 16
NO_FILE_MESSAGE = "No file chosen"
BLANK_SLOT = "   "
# Separate logger: formatting may run in a worker thread.
FORMATTER_LOGGER = "hexdump_viewer.formatter"


class InvariantViolation(AssertionError):
    """Raised when an internal value breaks a guarantee of the formatter."""

    def __init__(self, message: str, *, value: object | None = None) -> None:
        super().__init__(message)
        self.value = value


@dataclass(frozen=True, slots=True)
class HexDocument:
    """Ordered, immutable sequence of formatted lines plus a display name."""

    lines: Tuple[str, ...] = ("",)
    name: str = NO_FILE_MESSAGE
    byte_count: int = 0

    @classmethod
    def placeholder(cls, message: str = NO_FILE_MESSAGE) -> "HexDocument":
        """One-line document carrying a sentinel message instead of a dump."""

        return cls(lines=(message,), name=message, byte_count=0)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def last_line_index(self) -> int:
        return max(0, len(self.lines) - 1)

    def get_line(self, index: int) -> str:
        return self.lines[index]


def hex_digit(nibble: int) -> str:
    """Return the uppercase hex digit for ``nibble``.

    Callers only ever pass ``byte >> 4`` or ``byte & 0x0F``, so the range
    check below cannot fire for byte input.
    """

    if not 0 <= nibble <= 15:
        raise InvariantViolation("nibble out of range", value=nibble)
    if nibble < 10:
        return chr(nibble | 0x30)
    return chr(nibble + 55)


def hex_pair(value: int) -> str:
    return hex_digit(value >> 4) + hex_digit(value & 0x0F)


def _hex_column(chunk: bytes) -> str:
    parts: List[str] = []
    for slot in range(BYTES_PER_LINE):
        if slot < len(chunk):
            parts.append(hex_pair(chunk[slot]) + " ")
        else:
            parts.append(BLANK_SLOT)
        if slot % 4 == 3:
            parts.append(" ")
        if slot == 7:
            parts.append(" ")
    parts.append("|  ")
    return "".join(parts)


def _glyph_column(chunk: bytes, table: str) -> str:
    glyphs = "".join(table[value] for value in chunk)
    return glyphs.ljust(BYTES_PER_LINE) + "  |"


def format_line(label: str, chunk: bytes, table: str) -> str:
    """Render one block; ``chunk`` holds at most 16 bytes."""

    return f"{label}\t|  {_hex_column(chunk)}{_glyph_column(chunk, table)}"


def line_count_for(byte_count: int, *, trailing_blank_line: bool = True) -> int:
    if trailing_blank_line:
        return byte_count // BYTES_PER_LINE + 1
    return max(1, -(-byte_count // BYTES_PER_LINE))


def format_bytes(
    data: Sequence[int] | bytes,
    name: str = NO_FILE_MESSAGE,
    *,
    revision: "str | GlyphRevision" = GlyphRevision.SHADED,
    trailing_blank_line: bool = True,
    pad_labels: bool = True,
) -> HexDocument:
    """Format ``data`` into a :class:`HexDocument`.

    By default the document has ``len(data) // 16 + 1`` lines, so input whose
    length is a multiple of 16 (including empty input) ends with a fully
    blank line. Passing ``trailing_blank_line=False`` drops that line and
    breaks layout compatibility with dumps produced by earlier versions.

    Row labels are left-aligned and padded to the widest label so every line
    has one width; ``pad_labels=False`` writes the bare number before the tab.
    """

    payload = bytes(data)
    table = build_glyph_table(revision)
    count = line_count_for(len(payload), trailing_blank_line=trailing_blank_line)
    width = len(str(count)) if pad_labels else 0
    with telemetry.span(
        "formatter::format",
        logger_name=FORMATTER_LOGGER,
        component="formatter",
        metadata={"bytes": len(payload), "lines": count},
    ):
        lines = tuple(
            format_line(
                str(index + 1).ljust(width),
                payload[index * BYTES_PER_LINE : (index + 1) * BYTES_PER_LINE],
                table,
            )
            for index in range(count)
        )
    return HexDocument(lines=lines, name=name, byte_count=len(payload))


__all__ = [
    "BYTES_PER_LINE",
    "FORMATTER_LOGGER",
    "NO_FILE_MESSAGE",
    "HexDocument",
    "InvariantViolation",
    "format_bytes",
    "format_line",
    "hex_digit",
    "hex_pair",
    "line_count_for",
]
