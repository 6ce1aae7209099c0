"""Terminal-resident plain-text line editor."""

__all__ = [
    "adapters",
    "buffer",
    "keymaps",
    "render",
    "runtime",
    "session",
    "transform",
]

__version__ = "0.1.0"
