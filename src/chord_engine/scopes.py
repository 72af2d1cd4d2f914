"""Scope identifiers for the views that own key bindings."""

from __future__ import annotations

from enum import Enum
from typing import Hashable


class ViewScope(str, Enum):
    """UI views that can own key bindings."""

    ALL = "all"
    MAIN = "main"
    COMMIT = "commit"
    REF = "ref"
    DIFF = "diff"
    GIT_STATUS = "git_status"
    HELP = "help"
    CONTEXT_MENU = "context_menu"
    COMMAND_OUTPUT = "command_output"
    MESSAGE_BOX = "message_box"


# Consulted last by every resolution.
CATCH_ALL = ViewScope.ALL

Scope = Hashable


def scope_name(scope: Scope) -> str:
    """Readable name for logs and stats."""

    if isinstance(scope, Enum):
        return str(scope.value)
    return str(scope)


__all__ = ["ViewScope", "CATCH_ALL", "Scope", "scope_name"]
