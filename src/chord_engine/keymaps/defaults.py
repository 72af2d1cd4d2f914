"""Seed a registry with the catalog's built-in bindings."""

from __future__ import annotations

from typing import Sequence

from chord_engine.actions.catalog import ActionCatalog
from chord_engine.runtime.telemetry import record_event

from .models import CATCH_ALL
from .registry import KeyBindingRegistry


def load_default_keymaps(
    registry: KeyBindingRegistry,
    *,
    catalog: ActionCatalog | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
) -> int:
    """Register built-in bindings through the ordinary bind entry points.

    Each canonical action key is bound in the catch-all scope so remap targets
    naming an action resolve to it; those never appear in help. Declared
    default sequences follow. Returns the number of bindings made.
    """

    source = catalog if catalog is not None else registry.catalog
    filters = _build_filters(include_actions, exclude_actions)
    selected = [d for d in source if _selected(d.id, filters)]
    count = 0

    for descriptor in selected:
        if descriptor.action_key:
            registry.bind_action(CATCH_ALL, descriptor.action_key, descriptor.id)
            count += 1

    for descriptor in selected:
        for scope, sequences in descriptor.key_bindings.items():
            for keys in sequences:
                registry.bind_action(scope, keys, descriptor.id, user_defined=False)
                count += 1

    record_event(
        "keymaps.defaults_loaded",
        level="debug",
        data={"actions": len(selected), "bindings": count},
    )
    return count


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = ["load_default_keymaps"]
