"""Keystroke buffering and dispatch on top of the keymap resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from chord_engine.errors import RemapDepthError
from chord_engine.keymaps import KeymapResolver, KeySequence
from chord_engine.keymaps.models import KeysLike, Scope, as_sequence
from chord_engine.runtime import telemetry
from chord_engine.scopes import scope_name

DispatchStatus = Literal["action", "pending", "miss", "error"]


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """What happened to the keys fed so far."""

    status: DispatchStatus
    keys: str
    action_id: Optional[str] = None
    prompt: bool = False
    remap_chain: tuple[str, ...] = ()
    message: Optional[str] = None

    @property
    def consumed(self) -> bool:
        return self.status in ("action", "pending")


class KeyInputProcessor:
    """Accumulates keystrokes until they resolve to an action or miss.

    Pending chords are never timed out here; hosts that want a timeout call
    ``flush`` themselves.
    """

    def __init__(
        self,
        resolver: KeymapResolver,
        *,
        max_remap_depth: int | None = None,
        logger_name: str | None = None,
    ) -> None:
        self.resolver = resolver
        self.max_remap_depth = max_remap_depth
        self._buffer = KeySequence(())
        self._revision = resolver.registry.revision()
        self._logger_name = logger_name

    @property
    def pending_keys(self) -> str:
        return str(self._buffer)

    def feed(self, keys: KeysLike, hierarchy: Sequence[Scope]) -> DispatchResult:
        """Append ``keys`` to the pending buffer and resolve the whole buffer."""

        incoming = as_sequence(keys)
        self._drop_stale_buffer()
        self._buffer = self._buffer.append(*incoming.tokens)
        buffered = str(self._buffer)

        with telemetry.span(
            "input::feed",
            logger_name=self._logger_name,
            component="input",
            metadata={
                "keys": buffered,
                "hierarchy": ",".join(scope_name(scope) for scope in hierarchy),
            },
        ) as handle:
            try:
                expansion = self.resolver.expand(
                    hierarchy, self._buffer, max_depth=self.max_remap_depth
                )
            except RemapDepthError as exc:
                self._clear()
                handle.add_metadata("status", "error")
                telemetry.record_event(
                    "input.remap_error",
                    level="warning",
                    data={"keys": buffered, "chain": " -> ".join(exc.chain)},
                    logger_name=self._logger_name,
                )
                return DispatchResult(
                    status="error",
                    keys=buffered,
                    remap_chain=exc.chain,
                    message=str(exc),
                )

            result = expansion.result
            chain = expansion.chain if expansion.remapped else ()
            if result.is_action:
                self._clear()
                action_id = result.binding.action_id
                handle.add_metadata("action_id", action_id)
                return DispatchResult(
                    status="action",
                    keys=buffered,
                    action_id=action_id,
                    prompt=self.resolver.registry.catalog.is_prompt_action(action_id),
                    remap_chain=chain,
                )

            if result.pending:
                # A remap may land on a prefix; keep waiting on the target keys.
                self._buffer = as_sequence(expansion.keys)
                handle.add_metadata("status", "pending")
                return DispatchResult(
                    status="pending", keys=str(self._buffer), remap_chain=chain
                )

            self._clear()
            handle.add_metadata("status", "miss")
            return DispatchResult(status="miss", keys=buffered, remap_chain=chain)

    def flush(self) -> str:
        """Abandon the pending chord and return the keys it held."""

        abandoned = str(self._buffer)
        if abandoned:
            telemetry.record_event(
                "input.flush",
                level="debug",
                data={"keys": abandoned},
                logger_name=self._logger_name,
            )
        self._clear()
        return abandoned

    def _clear(self) -> None:
        self._buffer = KeySequence(())
        self._revision = self.resolver.registry.revision()

    def _drop_stale_buffer(self) -> None:
        revision = self.resolver.registry.revision()
        if revision == self._revision:
            return
        if self._buffer:
            telemetry.record_event(
                "input.stale_pending",
                level="debug",
                data={"keys": str(self._buffer)},
                logger_name=self._logger_name,
            )
        self._buffer = KeySequence(())
        self._revision = revision


__all__ = ["DispatchResult", "DispatchStatus", "KeyInputProcessor"]
