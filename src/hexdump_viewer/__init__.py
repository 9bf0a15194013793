"""UI-agnostic hex dump formatter and line-windowed viewer."""

__all__ = [
    "adapters",
    "config",
    "formatter",
    "runtime",
    "session",
    "window",
]

__version__ = "0.1.0"
