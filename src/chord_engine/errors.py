"""Exceptions raised by the chord engine."""

from __future__ import annotations


class KeymapError(RuntimeError):
    """Base class for keymap failures."""


class RemapDepthError(KeymapError):
    """Raised when following remaps does not settle within the depth cap."""

    def __init__(self, keys: str, chain: tuple[str, ...], max_depth: int) -> None:
        super().__init__(
            f"Remap of '{keys}' exceeded {max_depth} hops: {' -> '.join(chain)}"
        )
        self.keys = keys
        self.chain = chain
        self.max_depth = max_depth


class UnknownActionError(KeymapError, KeyError):
    """Raised when an action id is not present in the catalog."""

    def __init__(self, action_id: str) -> None:
        super().__init__(f"Action '{action_id}' is not registered")
        self.action_id = action_id

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = ["KeymapError", "RemapDepthError", "UnknownActionError"]
