"""Textual host adapter; ``app`` requires the ``textual`` package."""

from .controller import (
    KEY_COMMANDS,
    TextualHexAdapter,
    TextualUIHooks,
    render_scroll_track,
)

__all__ = [
    "KEY_COMMANDS",
    "TextualHexAdapter",
    "TextualUIHooks",
    "render_scroll_track",
]
