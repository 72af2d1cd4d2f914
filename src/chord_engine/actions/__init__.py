"""Built-in action catalog consumed by the keymap layer."""

from .catalog import (
    ACTION_KEY_PREFIX,
    DEFAULT_ACTIONS,
    DEFAULT_CATALOG,
    ActionCatalog,
    ActionCategory,
    ActionDescriptor,
    is_reserved_key,
)

__all__ = [
    "ACTION_KEY_PREFIX",
    "ActionCategory",
    "ActionDescriptor",
    "ActionCatalog",
    "DEFAULT_ACTIONS",
    "DEFAULT_CATALOG",
    "is_reserved_key",
]
