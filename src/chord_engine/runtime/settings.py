"""Environment-driven engine settings."""

from __future__ import annotations

from dataclasses import dataclass

from .telemetry import env

DEFAULT_MAX_REMAP_DEPTH = 16


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Tunables shared by the resolver and the input processor."""

    max_remap_depth: int = DEFAULT_MAX_REMAP_DEPTH
    logger_name: str = "chord_engine.keymaps"

    def __post_init__(self) -> None:
        if self.max_remap_depth <= 0:
            raise ValueError("max_remap_depth must be positive")

    @classmethod
    def from_env(cls) -> "EngineSettings":
        raw_depth = env("MAX_REMAP_DEPTH")
        depth = DEFAULT_MAX_REMAP_DEPTH
        if raw_depth:
            try:
                depth = int(raw_depth)
            except ValueError as exc:
                raise ValueError(
                    "CHORD_ENGINE_MAX_REMAP_DEPTH must be an integer, "
                    f"got {raw_depth!r}"
                ) from exc
        return cls(
            max_remap_depth=depth,
            logger_name=env("KEYMAP_LOGGER") or "chord_engine.keymaps",
        )


__all__ = ["EngineSettings", "DEFAULT_MAX_REMAP_DEPTH"]
