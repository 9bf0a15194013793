"""Viewer configuration sourced from ``HEXDUMP_VIEWER_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from hexdump_viewer.formatter import NO_FILE_MESSAGE, GlyphRevision

ENV_PREFIX = "HEXDUMP_VIEWER_"


def _env_int(env: Mapping[str, str], name: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class ViewerConfig:
    """Formatting and viewport settings for a viewer session."""

    glyph_revision: GlyphRevision = GlyphRevision.SHADED
    trailing_blank_line: bool = True
    pad_labels: bool = True
    visible_lines: int = 24
    # Files at least this large are formatted off the UI thread.
    background_threshold: int = 1024 * 1024
    no_file_message: str = NO_FILE_MESSAGE

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ViewerConfig":
        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            glyph_revision=GlyphRevision.parse(
                source.get(f"{ENV_PREFIX}GLYPHS", defaults.glyph_revision.value)
            ),
            trailing_blank_line=_env_flag(
                source, "TRAILING_BLANK_LINE", defaults.trailing_blank_line
            ),
            pad_labels=_env_flag(source, "PAD_LABELS", defaults.pad_labels),
            visible_lines=max(
                0, _env_int(source, "VISIBLE_LINES", defaults.visible_lines)
            ),
            background_threshold=_env_int(
                source, "BACKGROUND_THRESHOLD", defaults.background_threshold
            ),
            no_file_message=source.get(
                f"{ENV_PREFIX}NO_FILE_MESSAGE", defaults.no_file_message
            ),
        )


__all__ = ["ENV_PREFIX", "ViewerConfig"]
