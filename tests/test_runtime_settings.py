from __future__ import annotations

import pytest

from chord_engine.runtime.settings import DEFAULT_MAX_REMAP_DEPTH, EngineSettings


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CHORD_ENGINE_MAX_REMAP_DEPTH", raising=False)
    monkeypatch.delenv("CHORD_ENGINE_KEYMAP_LOGGER", raising=False)

    settings = EngineSettings.from_env()

    assert settings.max_remap_depth == DEFAULT_MAX_REMAP_DEPTH
    assert settings.logger_name == "chord_engine.keymaps"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHORD_ENGINE_MAX_REMAP_DEPTH", "4")
    monkeypatch.setenv("CHORD_ENGINE_KEYMAP_LOGGER", "demo.keys")

    settings = EngineSettings.from_env()

    assert settings.max_remap_depth == 4
    assert settings.logger_name == "demo.keys"


def test_invalid_depth_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHORD_ENGINE_MAX_REMAP_DEPTH", "deep")

    with pytest.raises(ValueError):
        EngineSettings.from_env()
    with pytest.raises(ValueError):
        EngineSettings(max_remap_depth=0)
