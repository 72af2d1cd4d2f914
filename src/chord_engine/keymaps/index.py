"""Per-scope token tries mapping key sequences to bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from .models import Binding, KeySequence, KeysLike, Scope, as_sequence, require_sequence


@dataclass(slots=True)
class TrieNode:
    """Single trie node holding an optional binding and child transitions."""

    binding: Optional[Binding] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())

    @property
    def is_empty(self) -> bool:
        return self.binding is None and not self.children


@dataclass(slots=True)
class KeymapTrie:
    """Prefix-indexed store of the bindings owned by one scope."""

    scope: Scope
    root: TrieNode = field(default_factory=TrieNode)
    size: int = 0

    def set(self, sequence: KeySequence, binding: Binding) -> None:
        node = self.root
        for token in sequence.tokens:
            node = node.child(token)
        if node.binding is None:
            self.size += 1
        node.binding = binding

    def get(self, sequence: KeySequence) -> Optional[Binding]:
        node = self._walk(sequence)
        return node.binding if node is not None else None

    def has_prefix(self, sequence: KeySequence) -> bool:
        node = self._walk(sequence)
        return node is not None and not node.is_empty

    def delete(self, sequence: KeySequence) -> bool:
        path: list[tuple[TrieNode, str]] = []
        node = self.root
        for token in sequence.tokens:
            child = node.children.get(token)
            if child is None:
                return False
            path.append((node, token))
            node = child
        if node.binding is None:
            return False

        node.binding = None
        self.size -= 1
        for parent, token in reversed(path):
            if not parent.children[token].is_empty:
                break
            del parent.children[token]
        return True

    def items(self) -> Iterator[tuple[KeySequence, Binding]]:
        stack: list[tuple[tuple[str, ...], TrieNode]] = [((), self.root)]
        while stack:
            tokens, node = stack.pop()
            if node.binding is not None and tokens:
                yield KeySequence(tokens), node.binding
            for token in sorted(node.children, reverse=True):
                stack.append((tokens + (token,), node.children[token]))

    def _walk(self, sequence: KeySequence) -> Optional[TrieNode]:
        node = self.root
        for token in sequence.tokens:
            node = node.children.get(token)
            if node is None:
                return None
        return node


class BindingIndex:
    """Lazily created trie per scope; unknown scopes have no bindings."""

    def __init__(self) -> None:
        self._tries: Dict[Scope, KeymapTrie] = {}

    def set(self, scope: Scope, keys: KeysLike, binding: Binding) -> None:
        sequence = require_sequence(keys)
        trie = self._tries.get(scope)
        if trie is None:
            trie = self._tries[scope] = KeymapTrie(scope=scope)
        trie.set(sequence, binding)

    def lookup(self, scope: Scope, keys: KeysLike) -> Optional[Binding]:
        trie = self._tries.get(scope)
        sequence = as_sequence(keys)
        if trie is None or not sequence:
            return None
        return trie.get(sequence)

    def has_prefix_of(self, scope: Scope, keys: KeysLike) -> bool:
        """True when some binding in ``scope`` starts with ``keys``."""

        trie = self._tries.get(scope)
        sequence = as_sequence(keys)
        if trie is None or not sequence:
            return False
        return trie.has_prefix(sequence)

    def delete(self, scope: Scope, keys: KeysLike) -> bool:
        trie = self._tries.get(scope)
        sequence = as_sequence(keys)
        if trie is None or not sequence:
            return False
        removed = trie.delete(sequence)
        if removed and trie.size == 0:
            del self._tries[scope]
        return removed

    def scopes(self) -> tuple[Scope, ...]:
        return tuple(self._tries)

    def count(self, scope: Scope) -> int:
        trie = self._tries.get(scope)
        return trie.size if trie is not None else 0

    def items(self, scope: Scope) -> Iterator[tuple[KeySequence, Binding]]:
        trie = self._tries.get(scope)
        if trie is None:
            return iter(())
        return trie.items()

    def __len__(self) -> int:
        return sum(trie.size for trie in self._tries.values())


__all__ = ["TrieNode", "KeymapTrie", "BindingIndex"]
