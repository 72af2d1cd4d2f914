"""Executable Textual app that shows how typed chords resolve."""

from __future__ import annotations

import argparse
from collections import deque
from typing import Deque, Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from chord_engine.input import DispatchResult, KeyInputProcessor
from chord_engine.keymaps import (
    KeyBindingRegistry,
    KeymapResolver,
    load_default_keymaps,
)
from chord_engine.runtime.settings import EngineSettings
from chord_engine.scopes import Scope, ViewScope

from .controller import TextualKeymapAdapter, TextualKeymapHooks


def create_default_processor(
    settings: EngineSettings | None = None,
) -> KeyInputProcessor:
    """Build a processor over a registry seeded with the built-in bindings."""

    settings = settings or EngineSettings.from_env()
    registry = KeyBindingRegistry(logger_name=settings.logger_name)
    load_default_keymaps(registry)
    resolver = KeymapResolver(
        registry, settings=settings, logger_name=settings.logger_name
    )
    return KeyInputProcessor(resolver, max_remap_depth=settings.max_remap_depth)


class ChordEngineApp(App[None]):
    """Minimal Textual UI echoing resolved actions."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#action-log {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#pending-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [("ctrl+c", "quit", "Quit")]

    def __init__(
        self,
        *,
        hierarchy: Sequence[Scope] = (ViewScope.MAIN,),
        history: int = 200,
    ) -> None:
        super().__init__()
        self._hierarchy = tuple(hierarchy)
        self._actions: Deque[str] = deque(maxlen=history)
        self.adapter: TextualKeymapAdapter | None = None
        self._log_widget: Static | None = None
        self._pending_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="log-area"):
            self._log_widget = Static("", id="action-log")
            yield self._log_widget
        self._pending_widget = Static("", id="pending-line")
        self._status_widget = Static("", id="status-line")
        yield self._pending_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualKeymapHooks(
            dispatch_action=self._dispatch_action,
            update_status=self._update_status,
            show_pending=self._show_pending,
        )
        self.adapter = TextualKeymapAdapter(
            create_default_processor(), hooks, hierarchy=self._hierarchy
        )

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+c":
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()

    def _dispatch_action(self, action_id: str, result: DispatchResult) -> None:
        line = f"{result.keys:<12} {action_id}"
        if result.remap_chain:
            line += f"  (via {' -> '.join(result.remap_chain)})"
        if result.prompt:
            line += "  [prompt]"
        self._actions.append(line)
        if self._log_widget:
            self._log_widget.update("\n".join(self._actions))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_pending(self, keys: str) -> None:
        if self._pending_widget:
            self._pending_widget.update(f"pending: {keys}" if keys else "")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the chord engine Textual demo.")
    parser.add_argument(
        "--view",
        action="append",
        choices=[scope.value for scope in ViewScope if scope is not ViewScope.ALL],
        help="Focused view, most specific first (repeatable, default: main)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    views = tuple(ViewScope(view) for view in args.view or ("main",))
    ChordEngineApp(hierarchy=views).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
