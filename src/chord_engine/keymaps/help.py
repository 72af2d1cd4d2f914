"""Help bookkeeping: which key sequences are credited to which action."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Protocol

from chord_engine.actions.catalog import ActionCatalog, ActionCategory, ActionDescriptor

from .models import BoundKeySequence, Scope

_WHITESPACE = re.compile(r"\s")


class HelpRegistry:
    """Maps ``(action_id, scope)`` to the ordered key sequences bound to it."""

    def __init__(self) -> None:
        self._entries: Dict[str, Dict[Scope, list[BoundKeySequence]]] = {}

    def add(self, action_id: str, scope: Scope, entry: BoundKeySequence) -> None:
        by_scope = self._entries.setdefault(action_id, {})
        by_scope.setdefault(scope, []).append(entry)

    def remove(self, action_id: str, scope: Scope, sequence: str) -> bool:
        by_scope = self._entries.get(action_id)
        if not by_scope:
            return False
        entries = by_scope.get(scope)
        if not entries:
            return False
        kept = [entry for entry in entries if entry.sequence != sequence]
        if len(kept) == len(entries):
            return False
        if kept:
            by_scope[scope] = kept
        else:
            del by_scope[scope]
            if not by_scope:
                del self._entries[action_id]
        return True

    def entries(self, action_id: str, scope: Scope) -> list[BoundKeySequence]:
        return list(self._entries.get(action_id, {}).get(scope, ()))

    def actions(self) -> tuple[str, ...]:
        return tuple(self._entries)


class KeySequenceSource(Protocol):
    def key_sequences_for(
        self, action_id: str, scope: Scope
    ) -> list[BoundKeySequence]: ...


@dataclass(frozen=True, slots=True)
class HelpRow:
    keys: tuple[BoundKeySequence, ...]
    action_key: str
    description: str

    @property
    def keys_text(self) -> str:
        return format_key_cell(self.keys)


@dataclass(frozen=True, slots=True)
class HelpSection:
    title: str
    description: tuple[str, ...] = ()
    rows: tuple[HelpRow, ...] = ()


HELP_TITLE = "Key Bindings"
HELP_DESCRIPTION = (
    "The following tables contain default and user configured key bindings",
)

SECTION_CATEGORIES: tuple[tuple[str, ActionCategory], ...] = (
    ("Movement", ActionCategory.MOVEMENT),
    ("Search", ActionCategory.SEARCH),
    ("View Navigation", ActionCategory.VIEW_NAVIGATION),
    ("General", ActionCategory.GENERAL),
)


def format_key_cell(keys: Iterable[BoundKeySequence]) -> str:
    """Render bound sequences for a table cell; whitespace forces quoting."""

    parts = []
    for entry in keys:
        text = entry.sequence
        if _WHITESPACE.search(text):
            text = f'"{text}"'
        parts.append(text)
    return ", ".join(parts) if parts else "None"


def collect_keys(
    source: KeySequenceSource, descriptor: ActionDescriptor
) -> tuple[BoundKeySequence, ...]:
    """Aggregate an action's key sequences across its scopes, first text wins."""

    seen: set[str] = set()
    keys: list[BoundKeySequence] = []
    for scope in descriptor.binding_scopes():
        for entry in source.key_sequences_for(descriptor.id, scope):
            if entry.sequence in seen:
                continue
            seen.add(entry.sequence)
            keys.append(entry)
    return tuple(keys)


def build_help_rows(
    source: KeySequenceSource,
    catalog: ActionCatalog,
    accept: Callable[[ActionDescriptor], bool],
) -> tuple[HelpRow, ...]:
    matching = sorted(
        (d for d in catalog if d.action_key and accept(d)),
        key=lambda d: d.action_key or "",
    )
    return tuple(
        HelpRow(
            keys=collect_keys(source, descriptor),
            action_key=descriptor.action_key or "",
            description=descriptor.description,
        )
        for descriptor in matching
    )


def build_help_sections(
    source: KeySequenceSource, catalog: ActionCatalog
) -> list[HelpSection]:
    """Produce the key binding help sections, one table per action category."""

    sections = [HelpSection(title=HELP_TITLE, description=HELP_DESCRIPTION)]
    for title, category in SECTION_CATEGORIES:
        rows = build_help_rows(
            source, catalog, lambda d, category=category: d.category is category
        )
        sections.append(HelpSection(title=title, rows=rows))
    return sections


__all__ = [
    "HelpRegistry",
    "HelpRow",
    "HelpSection",
    "SECTION_CATEGORIES",
    "build_help_rows",
    "build_help_sections",
    "collect_keys",
    "format_key_cell",
]
