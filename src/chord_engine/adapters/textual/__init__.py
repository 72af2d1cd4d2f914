"""Textual integration for the chord engine."""

from .controller import TextualKeymapAdapter, TextualKeymapHooks, textual_key_to_token

__all__ = ["TextualKeymapAdapter", "TextualKeymapHooks", "textual_key_to_token"]
