from __future__ import annotations

import pytest

from chord_engine.keymaps import (
    CATCH_ALL,
    KeyBindingRegistry,
    KeymapResolver,
    ViewScope,
    load_default_keymaps,
)


@pytest.fixture()
def resolver() -> KeymapResolver:
    registry = KeyBindingRegistry()
    load_default_keymaps(registry)
    return KeymapResolver(registry)


def test_load_reports_binding_count() -> None:
    registry = KeyBindingRegistry()

    count = load_default_keymaps(registry)

    assert count == registry.stats().binding_count
    assert count > 0


def test_chords_resolve_from_catch_all(resolver: KeymapResolver) -> None:
    assert resolver.resolve([ViewScope.MAIN], "gg").binding.action_id == (
        "movement.first_line"
    )
    assert resolver.resolve([ViewScope.DIFF], "<C-w>w").binding.action_id == (
        "view.next"
    )


@pytest.mark.parametrize("keys", ["g", "<C-w>", "z"])
def test_chord_prefixes_are_pending(resolver: KeymapResolver, keys: str) -> None:
    assert resolver.resolve([ViewScope.MAIN], keys).status == "pending"


@pytest.mark.parametrize(
    ("scope", "action_id"),
    [
        (ViewScope.REF, "view_specific.checkout_ref"),
        (ViewScope.COMMIT, "view_specific.checkout_commit"),
        (ViewScope.GIT_STATUS, "view_specific.commit"),
    ],
)
def test_view_specific_keys(
    resolver: KeymapResolver, scope: ViewScope, action_id: str
) -> None:
    assert resolver.resolve([scope], "c").binding.action_id == action_id


def test_view_specific_key_misses_elsewhere(resolver: KeymapResolver) -> None:
    assert resolver.resolve([ViewScope.DIFF], "c").status == "miss"


def test_action_keys_resolve_everywhere(resolver: KeymapResolver) -> None:
    result = resolver.resolve([ViewScope.HELP], "<action-next-view>")

    assert result.binding.action_id == "view.next"
    assert result.scope is CATCH_ALL


def test_include_filter_limits_loaded_actions() -> None:
    registry = KeyBindingRegistry()

    count = load_default_keymaps(registry, include_actions=["movement.first_line"])

    assert count == 2
    assert registry.lookup(CATCH_ALL, "gg") is not None
    assert registry.lookup(CATCH_ALL, "G") is None


def test_exclude_filter_skips_actions() -> None:
    registry = KeyBindingRegistry()

    load_default_keymaps(registry, exclude_actions=["movement.last_line"])

    assert registry.lookup(CATCH_ALL, "G") is None
    assert registry.lookup(CATCH_ALL, "gg") is not None


def test_defaults_are_not_user_defined() -> None:
    registry = KeyBindingRegistry()
    load_default_keymaps(registry)

    entries = registry.key_sequences_for("movement.next_line", CATCH_ALL)

    assert [entry.sequence for entry in entries] == ["<Down>", "j"]
    assert not any(entry.user_defined for entry in entries)
