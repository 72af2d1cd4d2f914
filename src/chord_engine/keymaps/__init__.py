"""Scoped key binding index, resolver and help bookkeeping."""

from .models import (
    CATCH_ALL,
    NO_ACTION,
    Binding,
    BoundKeySequence,
    KeySequence,
    ViewScope,
    tokenize,
)
from .index import BindingIndex, KeymapTrie
from .help import HelpRegistry, HelpRow, HelpSection, build_help_sections
from .registry import KeyBindingRegistry, RegistryStats, UserBindings
from .resolver import KeymapResolver, RemapExpansion, ResolutionResult
from .defaults import load_default_keymaps

__all__ = [
    "CATCH_ALL",
    "NO_ACTION",
    "Binding",
    "BoundKeySequence",
    "KeySequence",
    "ViewScope",
    "tokenize",
    "BindingIndex",
    "KeymapTrie",
    "HelpRegistry",
    "HelpRow",
    "HelpSection",
    "build_help_sections",
    "KeyBindingRegistry",
    "RegistryStats",
    "UserBindings",
    "KeymapResolver",
    "RemapExpansion",
    "ResolutionResult",
    "load_default_keymaps",
]
