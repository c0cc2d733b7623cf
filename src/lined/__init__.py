"""EDLIN-style line editor built around a bounded line-buffer engine."""

__all__ = [
    "adapters",
    "buffer",
    "actions",
    "modes",
    "runtime",
    "config",
    "console",
]

__version__ = "0.1.0"
