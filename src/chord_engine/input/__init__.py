"""Input buffering and dispatch for resolved key sequences."""

from .processor import DispatchResult, DispatchStatus, KeyInputProcessor

__all__ = ["DispatchResult", "DispatchStatus", "KeyInputProcessor"]
