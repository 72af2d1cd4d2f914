"""Hierarchy-aware key sequence resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal, Optional, Sequence

from chord_engine.errors import RemapDepthError
from chord_engine.runtime.settings import EngineSettings
from chord_engine.runtime.telemetry import record_event, span
from chord_engine.scopes import scope_name

from .models import (
    CATCH_ALL,
    NO_ACTION,
    Binding,
    KeySequence,
    KeysLike,
    Scope,
    as_sequence,
)
from .registry import KeyBindingRegistry


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Binding found for a key sequence plus the pending flag.

    Unpacks as ``binding, pending``.
    """

    binding: Binding
    pending: bool = False
    scope: Optional[Scope] = None

    @property
    def status(self) -> Literal["match", "pending", "miss"]:
        if not self.binding.is_noop:
            return "match"
        return "pending" if self.pending else "miss"

    @property
    def is_action(self) -> bool:
        return self.binding.is_action

    @property
    def is_remap(self) -> bool:
        return self.binding.is_remap

    def __iter__(self) -> Iterator[object]:
        yield self.binding
        yield self.pending


@dataclass(frozen=True, slots=True)
class RemapExpansion:
    """Outcome of following remaps until a non-remap result is reached."""

    result: ResolutionResult
    chain: tuple[str, ...]

    @property
    def keys(self) -> str:
        """Key sequence the final result was resolved for."""

        return self.chain[-1]

    @property
    def remapped(self) -> bool:
        return len(self.chain) > 1


def with_catch_all(hierarchy: Sequence[Scope]) -> tuple[Scope, ...]:
    scopes = tuple(hierarchy)
    if scopes and scopes[-1] == CATCH_ALL:
        return scopes
    return scopes + (CATCH_ALL,)


class KeymapResolver:
    """Resolves key sequences against a scope hierarchy, most specific first."""

    def __init__(
        self,
        registry: KeyBindingRegistry,
        *,
        settings: EngineSettings | None = None,
        logger_name: str | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or EngineSettings()
        self._logger_name = logger_name

    def resolve(
        self, hierarchy: Sequence[Scope], keys: KeysLike
    ) -> ResolutionResult:
        """Find the best binding for ``keys``.

        The first scope holding an exact entry wins outright. A scope that
        only holds longer sequences starting with ``keys`` marks the result as
        pending, but scanning continues because a broader scope may still hold
        an exact entry.
        """

        sequence = as_sequence(keys)
        scopes = with_catch_all(hierarchy)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={
                "hierarchy": ",".join(scope_name(scope) for scope in scopes),
                "length": len(sequence),
            },
        ) as handle:
            if not sequence:
                handle.add_metadata("status", "miss")
                return ResolutionResult(NO_ACTION)

            pending = False
            for scope in scopes:
                binding = self.registry.lookup(scope, sequence)
                if binding is not None:
                    handle.add_metadata("status", "match")
                    handle.add_metadata("scope", scope_name(scope))
                    return ResolutionResult(binding, False, scope)
                if not pending and self.registry.has_prefix_of(scope, sequence):
                    pending = True

            handle.add_metadata("status", "pending" if pending else "miss")
            return ResolutionResult(NO_ACTION, pending)

    def expand(
        self,
        hierarchy: Sequence[Scope],
        keys: KeysLike,
        *,
        max_depth: int | None = None,
    ) -> RemapExpansion:
        """Resolve ``keys`` and follow remap targets through the same hierarchy.

        Raises ``RemapDepthError`` when more than ``max_depth`` remaps are
        chained, which is how remap cycles surface.
        """

        limit = max_depth if max_depth is not None else self.settings.max_remap_depth
        current: KeySequence = as_sequence(keys)
        chain = [str(current)]
        result = self.resolve(hierarchy, current)
        while result.is_remap:
            if len(chain) > limit:
                record_event(
                    "keymaps.remap_overflow",
                    level="warning",
                    data={"keys": chain[0], "depth": limit},
                    logger_name=self._logger_name,
                )
                raise RemapDepthError(chain[0], tuple(chain), limit)
            current = as_sequence(result.binding.target or "")
            chain.append(str(current))
            result = self.resolve(hierarchy, current)
        return RemapExpansion(result=result, chain=tuple(chain))


__all__ = [
    "KeymapResolver",
    "RemapExpansion",
    "ResolutionResult",
    "with_catch_all",
]
