"""Value types shared by the binding index, registry and resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Union

from chord_engine.scopes import CATCH_ALL, Scope, ViewScope


def tokenize(text: str) -> tuple[str, ...]:
    """Split a key string into keystroke tokens.

    ``<...>`` is a single symbolic token when the closing bracket arrives
    before any whitespace or another ``<``; otherwise ``<`` is literal.
    """

    tokens: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == "<":
            end = _bracket_end(text, index)
            if end is not None:
                tokens.append(text[index : end + 1])
                index = end + 1
                continue
        tokens.append(char)
        index += 1
    return tuple(tokens)


def _bracket_end(text: str, start: int) -> Optional[int]:
    for index in range(start + 1, len(text)):
        char = text[index]
        if char == ">":
            return index if index > start + 1 else None
        if char == "<" or char.isspace():
            return None
    return None


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Ordered keystroke tokens, rendered back to text with ``str()``."""

    tokens: tuple[str, ...]

    @classmethod
    def parse(cls, text: str) -> "KeySequence":
        return cls(tokenize(text))

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "KeySequence":
        return cls(tuple(token for token in tokens if token))

    def __str__(self) -> str:
        return "".join(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __bool__(self) -> bool:
        return bool(self.tokens)

    def append(self, *tokens: str) -> "KeySequence":
        return KeySequence(self.tokens + tuple(tokens))

    def is_prefix_of(self, other: "KeySequence") -> bool:
        return other.tokens[: len(self.tokens)] == self.tokens


KeysLike = Union[str, KeySequence]


def as_sequence(keys: KeysLike) -> KeySequence:
    if isinstance(keys, KeySequence):
        return keys
    if isinstance(keys, str):
        return KeySequence.parse(keys)
    raise TypeError(f"Expected str or KeySequence, got {type(keys).__name__}")


def require_sequence(keys: KeysLike) -> KeySequence:
    sequence = as_sequence(keys)
    if not sequence:
        raise ValueError("key sequence cannot be empty")
    return sequence


@dataclass(frozen=True, slots=True)
class Binding:
    """What a key sequence is bound to: an action id or another key sequence."""

    kind: Literal["action", "remap"]
    action_id: Optional[str] = None
    target: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind == "remap":
            if not isinstance(self.target, str) or not self.target:
                raise ValueError("remap target must be a non-empty key string")
            if self.action_id is not None:
                raise ValueError("remap bindings do not carry an action id")
        elif self.kind == "action":
            if self.target is not None:
                raise ValueError("action bindings do not carry a remap target")
        else:
            raise ValueError(f"unknown binding kind '{self.kind}'")

    @classmethod
    def action(cls, action_id: Optional[str]) -> "Binding":
        return cls(kind="action", action_id=action_id)

    @classmethod
    def remap(cls, target: KeysLike) -> "Binding":
        return cls(kind="remap", target=str(target))

    @property
    def is_action(self) -> bool:
        return self.kind == "action" and self.action_id is not None

    @property
    def is_remap(self) -> bool:
        return self.kind == "remap"

    @property
    def is_noop(self) -> bool:
        return self.kind == "action" and self.action_id is None


NO_ACTION = Binding.action(None)


@dataclass(frozen=True, slots=True)
class BoundKeySequence:
    """A key sequence credited to an action in help output."""

    sequence: str
    user_defined: bool = False


__all__ = [
    "ViewScope",
    "CATCH_ALL",
    "Scope",
    "tokenize",
    "KeySequence",
    "KeysLike",
    "as_sequence",
    "require_sequence",
    "Binding",
    "NO_ACTION",
    "BoundKeySequence",
]
