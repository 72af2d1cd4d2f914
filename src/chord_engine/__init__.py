"""Scoped multi-key chord resolution for modal terminal UIs."""

__all__ = [
    "actions",
    "adapters",
    "errors",
    "input",
    "keymaps",
    "runtime",
    "scopes",
]

__version__ = "0.1.0"
