"""Reading source files into memory."""

from __future__ import annotations

from pathlib import Path


class SourceReadError(RuntimeError):
    """Raised when a source file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read '{path}': {reason}")
        self.path = path
        self.reason = reason


def read_source(path: str | Path) -> bytes:
    """Read the whole file at ``path``."""

    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise SourceReadError(str(path), exc.strerror or str(exc)) from exc


__all__ = ["SourceReadError", "read_source"]
