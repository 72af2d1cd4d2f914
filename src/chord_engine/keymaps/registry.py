"""Keymap registry: binding mutations kept in lock-step with help bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from chord_engine.actions.catalog import DEFAULT_CATALOG, ActionCatalog, is_reserved_key
from chord_engine.runtime.telemetry import span
from chord_engine.scopes import scope_name

from .help import HelpRegistry
from .index import BindingIndex
from .models import (
    Binding,
    BoundKeySequence,
    KeySequence,
    KeysLike,
    Scope,
    require_sequence,
)


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    scopes: tuple[str, ...]
    help_actions: int


class KeyBindingRegistry:
    """Owns the per-scope binding index and the help registry.

    Every mutation updates both structures, so an overwritten or removed
    sequence never lingers in help output.
    """

    def __init__(
        self,
        catalog: ActionCatalog = DEFAULT_CATALOG,
        *,
        logger_name: str | None = None,
    ) -> None:
        self.catalog = catalog
        self._index = BindingIndex()
        self._help = HelpRegistry()
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def lookup(self, scope: Scope, keys: KeysLike) -> Optional[Binding]:
        return self._index.lookup(scope, keys)

    def has_prefix_of(self, scope: Scope, keys: KeysLike) -> bool:
        return self._index.has_prefix_of(scope, keys)

    def bind_action(
        self,
        scope: Scope,
        keys: KeysLike,
        action_id: str,
        *,
        user_defined: bool = False,
    ) -> Binding:
        """Bind ``keys`` in ``scope`` to ``action_id``; last write wins."""

        sequence = require_sequence(keys)
        if not action_id:
            raise ValueError("action_id cannot be empty")
        with span(
            "keymaps::bind_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={
                "scope": scope_name(scope),
                "keys": sequence,
                "action_id": action_id,
            },
        ):
            self._forget_help(scope, sequence)
            binding = Binding.action(action_id)
            self._index.set(scope, sequence, binding)
            self._credit(action_id, scope, sequence, user_defined)
            self._touch()
            return binding

    def bind_remap(
        self,
        scope: Scope,
        keys: KeysLike,
        target: KeysLike,
        *,
        user_defined: bool = False,
    ) -> Binding:
        """Bind ``keys`` in ``scope`` to another key sequence."""

        sequence = require_sequence(keys)
        target_sequence = require_sequence(target)
        with span(
            "keymaps::bind_remap",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={
                "scope": scope_name(scope),
                "keys": sequence,
                "target": target_sequence,
            },
        ) as handle:
            self.unbind(scope, sequence)
            binding = Binding.remap(target_sequence)
            self._index.set(scope, sequence, binding)
            action_id = self.catalog.action_for_key(str(target_sequence))
            if action_id is not None:
                handle.add_metadata("credited_action", action_id)
                self._credit(action_id, scope, sequence, user_defined)
            self._touch()
            return binding

    def unbind(self, scope: Scope, keys: KeysLike) -> bool:
        """Remove the binding for ``keys`` in ``scope``; ``False`` if none."""

        sequence = require_sequence(keys)
        with span(
            "keymaps::unbind",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"scope": scope_name(scope), "keys": sequence},
        ) as handle:
            existing = self._index.lookup(scope, sequence)
            removed = self._index.delete(scope, sequence)
            if existing is not None:
                self._drop_help_entry(existing, scope, sequence)
            handle.add_metadata("removed", removed)
            if removed:
                self._touch()
            return removed

    def key_sequences_for(
        self, action_id: str, scope: Scope
    ) -> list[BoundKeySequence]:
        """Key sequences credited to ``action_id`` in ``scope``, in bind order."""

        return self._help.entries(action_id, scope)

    def user_bindings(self) -> "UserBindings":
        return UserBindings(self)

    def iter_bindings(self, scope: Scope) -> Iterator[tuple[KeySequence, Binding]]:
        return self._index.items(scope)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            binding_count=len(self._index),
            scopes=tuple(sorted(scope_name(s) for s in self._index.scopes())),
            help_actions=len(self._help.actions()),
        )

    def credited_action(self, binding: Binding) -> Optional[str]:
        """Action a binding counts toward in help output, if any."""

        if binding.is_remap and binding.target is not None:
            return self.catalog.action_for_key(binding.target)
        return binding.action_id

    def _credit(
        self, action_id: str, scope: Scope, sequence: KeySequence, user_defined: bool
    ) -> None:
        text = str(sequence)
        if is_reserved_key(text):
            return
        self._help.add(action_id, scope, BoundKeySequence(text, user_defined))

    def _forget_help(self, scope: Scope, sequence: KeySequence) -> None:
        existing = self._index.lookup(scope, sequence)
        if existing is not None:
            self._drop_help_entry(existing, scope, sequence)

    def _drop_help_entry(
        self, binding: Binding, scope: Scope, sequence: KeySequence
    ) -> None:
        action_id = self.credited_action(binding)
        if action_id is not None:
            self._help.remove(action_id, scope, str(sequence))

    def _touch(self) -> None:
        self._revision += 1


class UserBindings:
    """Mutation view used while loading user configuration."""

    def __init__(self, registry: KeyBindingRegistry) -> None:
        self._registry = registry

    def bind_action(self, scope: Scope, keys: KeysLike, action_id: str) -> Binding:
        return self._registry.bind_action(scope, keys, action_id, user_defined=True)

    def bind_remap(self, scope: Scope, keys: KeysLike, target: KeysLike) -> Binding:
        return self._registry.bind_remap(scope, keys, target, user_defined=True)

    def unbind(self, scope: Scope, keys: KeysLike) -> bool:
        return self._registry.unbind(scope, keys)


__all__ = [
    "KeyBindingRegistry",
    "RegistryStats",
    "UserBindings",
]
