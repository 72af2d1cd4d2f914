from __future__ import annotations

import pytest

from chord_engine.keymaps import NO_ACTION, Binding, KeySequence, tokenize


@pytest.mark.parametrize(
    ("text", "tokens"),
    [
        ("gg", ("g", "g")),
        ("<C-w><C-w>", ("<C-w>", "<C-w>")),
        ("<C-w>o", ("<C-w>", "o")),
        ("a<b", ("a", "<", "b")),
        ("<>", ("<", ">")),
        ("< x>", ("<", " ", "x", ">")),
        ("<<Enter>", ("<", "<Enter>")),
        ("", ()),
    ],
)
def test_tokenize(text: str, tokens: tuple[str, ...]) -> None:
    assert tokenize(text) == tokens


def test_key_sequence_renders_back_to_text() -> None:
    sequence = KeySequence.parse("<C-w>W")

    assert str(sequence) == "<C-w>W"
    assert len(sequence) == 2
    assert KeySequence.parse("<C-w>").is_prefix_of(sequence)
    assert not KeySequence.parse("<").is_prefix_of(sequence)


def test_binding_variants() -> None:
    action = Binding.action("view.next")
    remap = Binding.remap("<C-w>w")

    assert action.is_action and not action.is_remap
    assert remap.is_remap and remap.target == "<C-w>w"
    assert NO_ACTION.is_noop and not NO_ACTION.is_action


def test_remap_requires_target() -> None:
    with pytest.raises(ValueError):
        Binding.remap("")
