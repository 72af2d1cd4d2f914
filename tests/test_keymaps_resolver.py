from __future__ import annotations

import pytest

from chord_engine.errors import RemapDepthError
from chord_engine.keymaps import (
    CATCH_ALL,
    NO_ACTION,
    Binding,
    KeyBindingRegistry,
    KeymapResolver,
    ViewScope,
    load_default_keymaps,
)
from chord_engine.runtime.settings import EngineSettings


def make_resolver(
    registry: KeyBindingRegistry | None = None, *, max_depth: int = 16
) -> KeymapResolver:
    return KeymapResolver(
        registry or KeyBindingRegistry(),
        settings=EngineSettings(max_remap_depth=max_depth),
    )


def test_unbound_sequence_misses() -> None:
    resolver = make_resolver()

    result = resolver.resolve([ViewScope.MAIN], "x")

    assert tuple(result) == (NO_ACTION, False)
    assert result.status == "miss"


def test_bound_action_matches() -> None:
    resolver = make_resolver()
    resolver.registry.bind_action(ViewScope.MAIN, "x", "custom.x")

    binding, pending = resolver.resolve([ViewScope.MAIN], "x")

    assert binding == Binding.action("custom.x")
    assert pending is False


def test_more_specific_exact_match_wins() -> None:
    resolver = make_resolver()
    resolver.registry.bind_action(ViewScope.REF, "ab", "custom.specific")
    resolver.registry.bind_action(CATCH_ALL, "ab", "custom.catch_all")

    result = resolver.resolve([ViewScope.REF], "ab")

    assert result.binding == Binding.action("custom.specific")
    assert result.pending is False
    assert result.scope is ViewScope.REF


def test_hierarchy_order_is_most_specific_first() -> None:
    resolver = make_resolver()
    resolver.registry.bind_action(ViewScope.MAIN, "x", "custom.main")
    resolver.registry.bind_action(ViewScope.REF, "x", "custom.ref")

    first = resolver.resolve([ViewScope.REF, ViewScope.MAIN], "x")
    second = resolver.resolve([ViewScope.MAIN, ViewScope.REF], "x")

    assert first.binding.action_id == "custom.ref"
    assert second.binding.action_id == "custom.main"


def test_exact_match_in_broader_scope_beats_pending() -> None:
    resolver = make_resolver()
    resolver.registry.bind_action(ViewScope.REF, "gg", "custom.gg")
    resolver.registry.bind_action(CATCH_ALL, "g", "custom.g")

    result = resolver.resolve([ViewScope.REF], "g")

    assert tuple(result) == (Binding.action("custom.g"), False)


def test_prefix_only_reports_pending() -> None:
    resolver = make_resolver()
    resolver.registry.bind_action(ViewScope.COMMIT, "gg", "custom.gg")

    result = resolver.resolve([ViewScope.COMMIT], "g")

    assert tuple(result) == (NO_ACTION, True)
    assert result.status == "pending"


def test_pending_from_catch_all() -> None:
    resolver = make_resolver()
    resolver.registry.bind_action(CATCH_ALL, "<C-w>w", "view.next")

    assert tuple(resolver.resolve([ViewScope.DIFF], "<C-w>")) == (NO_ACTION, True)


def test_overwrite_last_write_wins() -> None:
    resolver = make_resolver()
    resolver.registry.bind_action(ViewScope.MAIN, "x", "custom.first")
    resolver.registry.bind_action(ViewScope.MAIN, "x", "custom.second")

    assert resolver.resolve([ViewScope.MAIN], "x").binding.action_id == "custom.second"


def test_remap_round_trip() -> None:
    resolver = make_resolver()
    resolver.registry.bind_remap(ViewScope.MAIN, "x", "y")

    assert tuple(resolver.resolve([ViewScope.MAIN], "x")) == (Binding.remap("y"), False)


def test_empty_hierarchy_still_consults_catch_all() -> None:
    resolver = make_resolver()
    resolver.registry.bind_action(CATCH_ALL, "q", "view.remove")

    assert resolver.resolve([], "q").binding.action_id == "view.remove"
    assert resolver.resolve([CATCH_ALL], "q").binding.action_id == "view.remove"


def test_empty_input_misses() -> None:
    resolver = make_resolver()
    resolver.registry.bind_action(CATCH_ALL, "q", "view.remove")

    assert tuple(resolver.resolve([ViewScope.MAIN], "")) == (NO_ACTION, False)


def test_expand_follows_remap_to_action_key() -> None:
    registry = KeyBindingRegistry()
    load_default_keymaps(registry)
    resolver = make_resolver(registry)
    registry.bind_remap(ViewScope.MAIN, "J", "<action-next-line>")

    expansion = resolver.expand([ViewScope.MAIN], "J")

    assert expansion.result.binding.action_id == "movement.next_line"
    assert expansion.chain == ("J", "<action-next-line>")
    assert expansion.remapped is True


def test_expand_without_remap_returns_plain_result() -> None:
    resolver = make_resolver()
    resolver.registry.bind_action(ViewScope.MAIN, "x", "custom.x")

    expansion = resolver.expand([ViewScope.MAIN], "x")

    assert expansion.result.binding.action_id == "custom.x"
    assert expansion.chain == ("x",)
    assert expansion.remapped is False


def test_expand_rejects_remap_cycles() -> None:
    resolver = make_resolver(max_depth=4)
    resolver.registry.bind_remap(ViewScope.MAIN, "a", "b")
    resolver.registry.bind_remap(ViewScope.MAIN, "b", "a")

    with pytest.raises(RemapDepthError) as excinfo:
        resolver.expand([ViewScope.MAIN], "a")

    assert excinfo.value.max_depth == 4
    assert excinfo.value.chain[:3] == ("a", "b", "a")


def test_expand_honors_explicit_depth() -> None:
    resolver = make_resolver()
    resolver.registry.bind_remap(ViewScope.MAIN, "a", "b")
    resolver.registry.bind_remap(ViewScope.MAIN, "b", "c")
    resolver.registry.bind_action(ViewScope.MAIN, "c", "custom.c")

    assert resolver.expand([ViewScope.MAIN], "a", max_depth=2).keys == "c"
    with pytest.raises(RemapDepthError):
        resolver.expand([ViewScope.MAIN], "a", max_depth=1)
