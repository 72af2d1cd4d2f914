"""Static catalog of built-in actions and their default key bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence

from chord_engine.errors import UnknownActionError
from chord_engine.scopes import CATCH_ALL, Scope, ViewScope

# Key strings in this namespace name actions directly and never show up in help.
ACTION_KEY_PREFIX = "<action-"

PROMPT_TEXT = ":"
SEARCH_PROMPT_TEXT = "/"
REVERSE_SEARCH_PROMPT_TEXT = "?"


class ActionCategory(str, Enum):
    NONE = "none"
    MOVEMENT = "movement"
    SEARCH = "search"
    VIEW_NAVIGATION = "view_navigation"
    GENERAL = "general"
    VIEW_SPECIFIC = "view_specific"


def _freeze_bindings(
    bindings: Mapping[Scope, Sequence[str]],
) -> Mapping[Scope, tuple[str, ...]]:
    return MappingProxyType({scope: tuple(keys) for scope, keys in bindings.items()})


@dataclass(frozen=True, slots=True)
class ActionDescriptor:
    """Read-only metadata describing one action."""

    id: str
    description: str
    category: ActionCategory = ActionCategory.NONE
    action_key: Optional[str] = None
    prompt: bool = False
    key_bindings: Mapping[Scope, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionDescriptor id cannot be empty")
        if self.action_key is not None and not self.action_key.startswith(
            ACTION_KEY_PREFIX
        ):
            raise ValueError(
                f"action key '{self.action_key}' must start with '{ACTION_KEY_PREFIX}'"
            )
        object.__setattr__(self, "key_bindings", _freeze_bindings(self.key_bindings))

    def binding_scopes(self) -> tuple[Scope, ...]:
        """Scopes whose bindings belong to this action in help output."""

        if not self.key_bindings:
            return (CATCH_ALL,)
        return tuple(self.key_bindings)


class ActionCatalog:
    """Indexes descriptors by id and by canonical action key."""

    def __init__(self, descriptors: Iterable[ActionDescriptor]) -> None:
        self._by_id: Dict[str, ActionDescriptor] = {}
        self._by_key: Dict[str, str] = {}
        for descriptor in descriptors:
            if descriptor.id in self._by_id:
                raise ValueError(f"Action '{descriptor.id}' already registered")
            self._by_id[descriptor.id] = descriptor
            if descriptor.action_key:
                if descriptor.action_key in self._by_key:
                    raise ValueError(
                        f"Action key '{descriptor.action_key}' already registered"
                    )
                self._by_key[descriptor.action_key] = descriptor.id

    def get(self, action_id: str) -> ActionDescriptor:
        try:
            return self._by_id[action_id]
        except KeyError as exc:
            raise UnknownActionError(action_id) from exc

    def __contains__(self, action_id: object) -> bool:
        return action_id in self._by_id

    def __iter__(self) -> Iterator[ActionDescriptor]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def action_for_key(self, keys: str) -> Optional[str]:
        """Return the action id whose canonical key is exactly ``keys``."""

        return self._by_key.get(keys)

    def is_action_key(self, keys: str) -> bool:
        return keys in self._by_key

    def action_keys(self) -> Mapping[str, str]:
        return MappingProxyType(self._by_key)

    def is_prompt_action(self, action_id: Optional[str]) -> bool:
        descriptor = self._by_id.get(action_id) if action_id else None
        return descriptor.prompt if descriptor else False


def is_reserved_key(keys: str) -> bool:
    """True for key strings in the canonical action-key namespace."""

    return keys.startswith(ACTION_KEY_PREFIX)


_ALL = ViewScope.ALL

DEFAULT_ACTIONS: tuple[ActionDescriptor, ...] = (
    # General
    ActionDescriptor(
        id="general.exit",
        action_key="<action-exit>",
        category=ActionCategory.GENERAL,
        description="Exit the application",
    ),
    ActionDescriptor(
        id="general.suspend",
        action_key="<action-suspend>",
        category=ActionCategory.GENERAL,
        description="Suspend the application",
        key_bindings={_ALL: ("<C-z>",)},
    ),
    ActionDescriptor(
        id="general.run_command",
        category=ActionCategory.GENERAL,
        description="Run a shell command",
    ),
    ActionDescriptor(
        id="general.prompt",
        action_key="<action-prompt>",
        category=ActionCategory.GENERAL,
        prompt=True,
        description="Command prompt",
        key_bindings={ViewScope.MAIN: (PROMPT_TEXT,)},
    ),
    ActionDescriptor(
        id="general.question_prompt",
        category=ActionCategory.GENERAL,
        prompt=True,
        description="Prompt the user with a question",
    ),
    ActionDescriptor(
        id="general.branch_name_prompt",
        action_key="<action-branch-name-prompt>",
        category=ActionCategory.GENERAL,
        prompt=True,
        description="Create a new branch",
        key_bindings={ViewScope.REF: ("b",), ViewScope.COMMIT: ("b",)},
    ),
    ActionDescriptor(
        id="general.show_status",
        category=ActionCategory.GENERAL,
        description="Display message in status bar",
    ),
    ActionDescriptor(
        id="general.select",
        action_key="<action-select>",
        category=ActionCategory.GENERAL,
        description="Select item (opens listener view if none exists)",
        key_bindings={_ALL: ("<Enter>",)},
    ),
    ActionDescriptor(
        id="general.new_tab",
        category=ActionCategory.GENERAL,
        description="Add a new tab",
    ),
    ActionDescriptor(
        id="general.remove_tab",
        category=ActionCategory.GENERAL,
        description="Remove the active tab",
    ),
    ActionDescriptor(
        id="general.add_view",
        category=ActionCategory.GENERAL,
        description="Add a new view",
    ),
    ActionDescriptor(
        id="general.split_view",
        category=ActionCategory.GENERAL,
        description="Split the current view with a new view",
    ),
    ActionDescriptor(
        id="general.mouse_select",
        category=ActionCategory.GENERAL,
        description="Mouse select",
    ),
    ActionDescriptor(
        id="general.mouse_scroll_down",
        category=ActionCategory.GENERAL,
        description="Mouse scroll down",
    ),
    ActionDescriptor(
        id="general.mouse_scroll_up",
        category=ActionCategory.GENERAL,
        description="Mouse scroll up",
    ),
    ActionDescriptor(
        id="general.create_branch",
        category=ActionCategory.GENERAL,
        description="Create a branch",
    ),
    ActionDescriptor(
        id="general.create_context_menu",
        category=ActionCategory.GENERAL,
        description="Create a context menu",
    ),
    ActionDescriptor(
        id="general.create_command_output_view",
        category=ActionCategory.GENERAL,
        description="Create a command output view",
    ),
    ActionDescriptor(
        id="general.show_available_actions",
        action_key="<action-show-available-actions>",
        category=ActionCategory.GENERAL,
        description="Show available actions for the selected row",
        key_bindings={_ALL: ("<C-a>",)},
    ),
    ActionDescriptor(
        id="general.show_help_view",
        action_key="<action-show-help>",
        category=ActionCategory.GENERAL,
        description="Show the help view",
    ),
    # Search
    ActionDescriptor(
        id="search.prompt",
        action_key="<action-search-prompt>",
        category=ActionCategory.SEARCH,
        prompt=True,
        description="Search forwards",
        key_bindings={ViewScope.MAIN: (SEARCH_PROMPT_TEXT,)},
    ),
    ActionDescriptor(
        id="search.reverse_prompt",
        action_key="<action-reverse-search-prompt>",
        category=ActionCategory.SEARCH,
        prompt=True,
        description="Search backwards",
        key_bindings={ViewScope.MAIN: (REVERSE_SEARCH_PROMPT_TEXT,)},
    ),
    ActionDescriptor(
        id="search.forward",
        category=ActionCategory.SEARCH,
        description="Perform search forwards",
    ),
    ActionDescriptor(
        id="search.backward",
        category=ActionCategory.SEARCH,
        description="Perform search backwards",
    ),
    ActionDescriptor(
        id="search.find_next",
        action_key="<action-search-find-next>",
        category=ActionCategory.SEARCH,
        description="Move to next search match",
        key_bindings={_ALL: ("n",)},
    ),
    ActionDescriptor(
        id="search.find_prev",
        action_key="<action-search-find-prev>",
        category=ActionCategory.SEARCH,
        description="Move to previous search match",
        key_bindings={_ALL: ("N",)},
    ),
    ActionDescriptor(
        id="search.clear",
        action_key="<action-clear-search>",
        category=ActionCategory.SEARCH,
        description="Clear search",
    ),
    # Movement
    ActionDescriptor(
        id="movement.next_line",
        action_key="<action-next-line>",
        category=ActionCategory.MOVEMENT,
        description="Move down one line",
        key_bindings={_ALL: ("<Down>", "j")},
    ),
    ActionDescriptor(
        id="movement.prev_line",
        action_key="<action-prev-line>",
        category=ActionCategory.MOVEMENT,
        description="Move up one line",
        key_bindings={_ALL: ("<Up>", "k")},
    ),
    ActionDescriptor(
        id="movement.next_page",
        action_key="<action-next-page>",
        category=ActionCategory.MOVEMENT,
        description="Move one page down",
        key_bindings={_ALL: ("<PageDown>", "<C-f>")},
    ),
    ActionDescriptor(
        id="movement.prev_page",
        action_key="<action-prev-page>",
        category=ActionCategory.MOVEMENT,
        description="Move one page up",
        key_bindings={_ALL: ("<PageUp>", "<C-b>")},
    ),
    ActionDescriptor(
        id="movement.next_half_page",
        action_key="<action-next-half-page>",
        category=ActionCategory.MOVEMENT,
        description="Move half page down",
        key_bindings={_ALL: ("<C-d>",)},
    ),
    ActionDescriptor(
        id="movement.prev_half_page",
        action_key="<action-prev-half-page>",
        category=ActionCategory.MOVEMENT,
        description="Move half page up",
        key_bindings={_ALL: ("<C-u>",)},
    ),
    ActionDescriptor(
        id="movement.scroll_right",
        action_key="<action-scroll-right>",
        category=ActionCategory.MOVEMENT,
        description="Scroll right",
        key_bindings={_ALL: ("<Right>", "l")},
    ),
    ActionDescriptor(
        id="movement.scroll_left",
        action_key="<action-scroll-left>",
        category=ActionCategory.MOVEMENT,
        description="Scroll left",
        key_bindings={_ALL: ("<Left>", "h")},
    ),
    ActionDescriptor(
        id="movement.first_line",
        action_key="<action-first-line>",
        category=ActionCategory.MOVEMENT,
        description="Move to first line",
        key_bindings={_ALL: ("gg",)},
    ),
    ActionDescriptor(
        id="movement.last_line",
        action_key="<action-last-line>",
        category=ActionCategory.MOVEMENT,
        description="Move to last line",
        key_bindings={_ALL: ("G",)},
    ),
    ActionDescriptor(
        id="movement.center_view",
        action_key="<action-center-view>",
        category=ActionCategory.MOVEMENT,
        description="Center view",
        key_bindings={_ALL: ("z.", "zz")},
    ),
    ActionDescriptor(
        id="movement.scroll_cursor_top",
        action_key="<action-scroll-cursor-top>",
        category=ActionCategory.MOVEMENT,
        description="Scroll the screen so cursor is at the top",
        key_bindings={_ALL: ("zt",)},
    ),
    ActionDescriptor(
        id="movement.scroll_cursor_bottom",
        action_key="<action-scroll-cursor-bottom>",
        category=ActionCategory.MOVEMENT,
        description="Scroll the screen so cursor is at the bottom",
        key_bindings={_ALL: ("zb",)},
    ),
    ActionDescriptor(
        id="movement.cursor_top_view",
        action_key="<action-cursor-top-view>",
        category=ActionCategory.MOVEMENT,
        description="Move to the first line of the page",
        key_bindings={_ALL: ("H",)},
    ),
    ActionDescriptor(
        id="movement.cursor_middle_view",
        action_key="<action-cursor-middle-view>",
        category=ActionCategory.MOVEMENT,
        description="Move to the middle line of the page",
        key_bindings={_ALL: ("M",)},
    ),
    ActionDescriptor(
        id="movement.cursor_bottom_view",
        action_key="<action-cursor-bottom-view>",
        category=ActionCategory.MOVEMENT,
        description="Move to the last line of the page",
        key_bindings={_ALL: ("L",)},
    ),
    # View navigation
    ActionDescriptor(
        id="view.next",
        action_key="<action-next-view>",
        category=ActionCategory.VIEW_NAVIGATION,
        description="Move to next view",
        key_bindings={_ALL: ("<C-w>w", "<C-w><C-w>", "<Tab>")},
    ),
    ActionDescriptor(
        id="view.prev",
        action_key="<action-prev-view>",
        category=ActionCategory.VIEW_NAVIGATION,
        description="Move to previous view",
        key_bindings={_ALL: ("<C-w>W", "<S-Tab>")},
    ),
    ActionDescriptor(
        id="view.full_screen",
        action_key="<action-full-screen-view>",
        category=ActionCategory.VIEW_NAVIGATION,
        description="Toggle current view full screen",
        key_bindings={_ALL: ("<C-w>o", "<C-w><C-o>", "f")},
    ),
    ActionDescriptor(
        id="view.toggle_layout",
        action_key="<action-toggle-view-layout>",
        category=ActionCategory.VIEW_NAVIGATION,
        description="Toggle view layout",
        key_bindings={_ALL: ("<C-w>t",)},
    ),
    ActionDescriptor(
        id="view.next_tab",
        action_key="<action-next-tab>",
        category=ActionCategory.VIEW_NAVIGATION,
        description="Move to next tab",
        key_bindings={_ALL: ("gt",)},
    ),
    ActionDescriptor(
        id="view.prev_tab",
        action_key="<action-prev-tab>",
        category=ActionCategory.VIEW_NAVIGATION,
        description="Move to previous tab",
        key_bindings={_ALL: ("gT",)},
    ),
    ActionDescriptor(
        id="view.remove",
        action_key="<action-remove-view>",
        category=ActionCategory.VIEW_NAVIGATION,
        description="Close view (or close tab if empty)",
        key_bindings={_ALL: ("q",)},
    ),
    # View specific
    ActionDescriptor(
        id="view_specific.filter_prompt",
        action_key="<action-filter-prompt>",
        category=ActionCategory.VIEW_SPECIFIC,
        prompt=True,
        description="Add filter",
        key_bindings={ViewScope.COMMIT: ("<C-q>",), ViewScope.REF: ("<C-q>",)},
    ),
    ActionDescriptor(
        id="view_specific.add_filter",
        category=ActionCategory.VIEW_SPECIFIC,
        description="Add filter",
    ),
    ActionDescriptor(
        id="view_specific.remove_filter",
        action_key="<action-remove-filter>",
        category=ActionCategory.VIEW_SPECIFIC,
        description="Remove filter",
        key_bindings={ViewScope.COMMIT: ("<C-r>",), ViewScope.REF: ("<C-r>",)},
    ),
    ActionDescriptor(
        id="view_specific.checkout_ref",
        action_key="<action-checkout-ref>",
        category=ActionCategory.VIEW_SPECIFIC,
        description="Checkout ref",
        key_bindings={ViewScope.REF: ("c",)},
    ),
    ActionDescriptor(
        id="view_specific.checkout_commit",
        action_key="<action-checkout-commit>",
        category=ActionCategory.VIEW_SPECIFIC,
        description="Checkout commit",
        key_bindings={ViewScope.COMMIT: ("c",)},
    ),
    ActionDescriptor(
        id="view_specific.stage_file",
        action_key="<action-stage-file>",
        category=ActionCategory.VIEW_SPECIFIC,
        description="Stage",
        key_bindings={ViewScope.GIT_STATUS: ("a",)},
    ),
    ActionDescriptor(
        id="view_specific.unstage_file",
        action_key="<action-unstage-file>",
        category=ActionCategory.VIEW_SPECIFIC,
        description="Unstage",
        key_bindings={ViewScope.GIT_STATUS: ("u",)},
    ),
    ActionDescriptor(
        id="view_specific.commit",
        action_key="<action-commit>",
        category=ActionCategory.VIEW_SPECIFIC,
        description="Commit",
        key_bindings={ViewScope.GIT_STATUS: ("c",)},
    ),
)

DEFAULT_CATALOG = ActionCatalog(DEFAULT_ACTIONS)


__all__ = [
    "ACTION_KEY_PREFIX",
    "ActionCategory",
    "ActionDescriptor",
    "ActionCatalog",
    "DEFAULT_ACTIONS",
    "DEFAULT_CATALOG",
    "is_reserved_key",
]
