"""Byte-to-glyph tables for the printable-character column."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict

LIGHT_SHADE = "░"
MEDIUM_SHADE = "▒"
DARK_SHADE = "▓"
FULL_BLOCK = "█"
LEGACY_PLACEHOLDER = "."


class GlyphRevision(str, Enum):
    """Versioned glyph column behaviour."""

    LEGACY = "legacy"
    SHADED = "shaded"

    @classmethod
    def parse(cls, value: "str | GlyphRevision") -> "GlyphRevision":
        if isinstance(value, GlyphRevision):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown glyph revision '{value}' (expected one of: {choices})"
            ) from exc


def shaded_glyph(value: int) -> str:
    if 32 <= value < 127:
        return chr(value)
    if value == 0x00:
        return LIGHT_SHADE
    if value == 0x7F:
        return DARK_SHADE
    if value == 0xFF:
        return FULL_BLOCK
    return MEDIUM_SHADE


def legacy_glyph(value: int) -> str:
    # 0x7F is inside the legacy printable range.
    if 32 <= value < 128:
        return chr(value)
    return LEGACY_PLACEHOLDER


_GLYPH_RULES: Dict[GlyphRevision, Callable[[int], str]] = {
    GlyphRevision.LEGACY: legacy_glyph,
    GlyphRevision.SHADED: shaded_glyph,
}


def build_glyph_table(revision: "str | GlyphRevision" = GlyphRevision.SHADED) -> str:
    """Return a 256-character string mapping each byte value to its glyph."""

    rule = _GLYPH_RULES[GlyphRevision.parse(revision)]
    return "".join(rule(value) for value in range(256))


__all__ = [
    "GlyphRevision",
    "LIGHT_SHADE",
    "MEDIUM_SHADE",
    "DARK_SHADE",
    "FULL_BLOCK",
    "LEGACY_PLACEHOLDER",
    "build_glyph_table",
    "legacy_glyph",
    "shaded_glyph",
]
