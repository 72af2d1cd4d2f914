"""Textual adapter that turns key events into chord dispatches."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from chord_engine.input import DispatchResult, KeyInputProcessor
from chord_engine.scopes import Scope, ViewScope, scope_name

NAMED_KEYS: dict[str, str] = {
    "enter": "Enter",
    "return": "Enter",
    "tab": "Tab",
    "escape": "Escape",
    "space": "Space",
    "backspace": "Backspace",
    "delete": "Delete",
    "insert": "Insert",
    "up": "Up",
    "down": "Down",
    "left": "Left",
    "right": "Right",
    "home": "Home",
    "end": "End",
    "pageup": "PageUp",
    "pagedown": "PageDown",
}

MODIFIER_PREFIXES: dict[str, str] = {
    "ctrl": "C",
    "shift": "S",
    "alt": "M",
    "meta": "M",
}

_FUNCTION_KEY = re.compile(r"[fF]\d{1,2}")


def textual_key_to_token(key: str, character: Optional[str] = None) -> Optional[str]:
    """Translate a Textual key name into a keystroke token.

    Printable characters without ctrl/alt map to themselves; everything else
    becomes a bracketed name such as ``<C-w>``, ``<S-Tab>`` or ``<PageDown>``.
    Returns ``None`` for bare modifier presses and unknown keys.
    """

    if not key:
        return None
    parts = key.split("+")
    base = parts[-1]
    modifiers: list[str] = []
    for part in parts[:-1]:
        prefix = MODIFIER_PREFIXES.get(part.lower())
        if prefix is None:
            return None
        if prefix not in modifiers:
            modifiers.append(prefix)

    if base in MODIFIER_PREFIXES:
        return None

    has_command_modifier = any(prefix in ("C", "M") for prefix in modifiers)
    if (
        not has_command_modifier
        and character
        and len(character) == 1
        and character.isprintable()
        and not character.isspace()
    ):
        return character

    name = NAMED_KEYS.get(base.lower())
    if name is None:
        if _FUNCTION_KEY.fullmatch(base):
            name = base.upper()
        elif len(base) == 1:
            name = base
        else:
            return None
    elif not modifiers:
        return f"<{name}>"

    if not modifiers:
        return name if len(name) == 1 else f"<{name}>"
    return f"<{'-'.join(modifiers)}-{name}>"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualKeymapHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    dispatch_action: Callable[[str, DispatchResult], None]
    update_status: Callable[[str], None] = _noop
    show_pending: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualKeymapAdapter:
    """Feeds Textual key events through a ``KeyInputProcessor``."""

    def __init__(
        self,
        processor: KeyInputProcessor,
        hooks: TextualKeymapHooks,
        *,
        hierarchy: Sequence[Scope] = (ViewScope.MAIN,),
    ) -> None:
        self.processor = processor
        self.hooks = hooks
        self._hierarchy: tuple[Scope, ...] = tuple(hierarchy)

    @property
    def hierarchy(self) -> tuple[Scope, ...]:
        return self._hierarchy

    def focus(self, hierarchy: Sequence[Scope]) -> None:
        """Switch the active view hierarchy, abandoning any pending chord."""

        self._hierarchy = tuple(hierarchy)
        abandoned = self.processor.flush()
        if abandoned:
            self._log_state("flush ->", keys=abandoned)
        self.hooks.show_pending("")

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[DispatchResult]:
        token = textual_key_to_token(key, character)
        if token is None:
            self._log_state("ignored ->", key=key)
            return None

        self._log_state("key ->", key=key, token=token)
        result = self.processor.feed(token, self._hierarchy)
        self._after_dispatch(result)
        self._log_state(
            "result <-",
            status=result.status,
            keys=result.keys,
            action=result.action_id,
            message=result.message,
        )
        return result

    def cancel_pending(self) -> str:
        abandoned = self.processor.flush()
        self.hooks.show_pending("")
        return abandoned

    def _after_dispatch(self, result: DispatchResult) -> None:
        if result.status == "pending":
            self.hooks.show_pending(result.keys)
            return
        self.hooks.show_pending("")
        if result.status == "action" and result.action_id:
            self.hooks.dispatch_action(result.action_id, result)
            self.hooks.update_status(result.action_id)
        elif result.status == "error":
            self.hooks.update_status(result.message or "remap error")
        else:
            self.hooks.update_status(f"{result.keys}: not bound")

    def _log_state(self, prefix: str, **fields: object) -> None:
        parts = [prefix, f"views={','.join(scope_name(s) for s in self._hierarchy)}"]
        for key, value in fields.items():
            if value is not None:
                parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = ["TextualKeymapAdapter", "TextualKeymapHooks", "textual_key_to_token"]
