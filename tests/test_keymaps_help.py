from __future__ import annotations

from chord_engine.actions import DEFAULT_CATALOG
from chord_engine.keymaps import (
    BoundKeySequence,
    KeyBindingRegistry,
    ViewScope,
    build_help_sections,
    load_default_keymaps,
)
from chord_engine.keymaps.help import (
    HELP_TITLE,
    HelpRegistry,
    collect_keys,
    format_key_cell,
)


def make_registry() -> KeyBindingRegistry:
    registry = KeyBindingRegistry()
    load_default_keymaps(registry)
    return registry


def rows_by_key(section):
    return {row.action_key: row for row in section.rows}


def test_sections_follow_category_order() -> None:
    sections = build_help_sections(make_registry(), DEFAULT_CATALOG)

    assert [section.title for section in sections] == [
        HELP_TITLE,
        "Movement",
        "Search",
        "View Navigation",
        "General",
    ]
    assert sections[0].rows == ()


def test_movement_rows_list_default_keys_in_bind_order() -> None:
    movement = build_help_sections(make_registry(), DEFAULT_CATALOG)[1]

    rows = rows_by_key(movement)

    assert rows["<action-next-line>"].keys_text == "<Down>, j"
    assert rows["<action-center-view>"].keys_text == "z., zz"
    assert rows["<action-next-line>"].description == "Move down one line"


def test_rows_are_sorted_by_action_key() -> None:
    for section in build_help_sections(make_registry(), DEFAULT_CATALOG)[1:]:
        keys = [row.action_key for row in section.rows]
        assert keys == sorted(keys)


def test_actions_without_bindings_show_none() -> None:
    general = build_help_sections(make_registry(), DEFAULT_CATALOG)[4]

    assert rows_by_key(general)["<action-exit>"].keys_text == "None"


def test_actions_without_action_key_are_omitted() -> None:
    general = build_help_sections(make_registry(), DEFAULT_CATALOG)[4]

    descriptions = {row.description for row in general.rows}

    assert "Run a shell command" not in descriptions


def test_user_bindings_are_flagged_in_rows() -> None:
    registry = make_registry()
    registry.user_bindings().bind_action(
        ViewScope.ALL, "e", "movement.next_line"
    )

    movement = build_help_sections(registry, DEFAULT_CATALOG)[1]
    row = rows_by_key(movement)["<action-next-line>"]

    assert row.keys[-1] == BoundKeySequence("e", user_defined=True)
    assert row.keys_text == "<Down>, j, e"


def test_unbound_default_disappears_from_help() -> None:
    registry = make_registry()
    registry.unbind(ViewScope.ALL, "j")

    movement = build_help_sections(registry, DEFAULT_CATALOG)[1]

    assert rows_by_key(movement)["<action-next-line>"].keys_text == "<Down>"


def test_collect_keys_deduplicates_across_scopes() -> None:
    registry = make_registry()
    descriptor = DEFAULT_CATALOG.get("view_specific.filter_prompt")

    keys = collect_keys(registry, descriptor)

    assert [entry.sequence for entry in keys] == ["<C-q>"]


def test_format_key_cell_quotes_whitespace() -> None:
    cell = format_key_cell(
        [BoundKeySequence("g g"), BoundKeySequence("<C-w>w")]
    )

    assert cell == '"g g", <C-w>w'
    assert format_key_cell([]) == "None"


def test_help_registry_remove_prunes_empty_buckets() -> None:
    help_registry = HelpRegistry()
    help_registry.add("custom.x", ViewScope.MAIN, BoundKeySequence("x"))
    help_registry.add("custom.x", ViewScope.MAIN, BoundKeySequence("y"))

    assert help_registry.remove("custom.x", ViewScope.MAIN, "x") is True
    assert help_registry.entries("custom.x", ViewScope.MAIN) == [
        BoundKeySequence("y")
    ]
    assert help_registry.remove("custom.x", ViewScope.MAIN, "y") is True
    assert help_registry.actions() == ()
    assert help_registry.remove("custom.x", ViewScope.MAIN, "y") is False
