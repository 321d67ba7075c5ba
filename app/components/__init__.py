"""Reusable UI components for the Q&A forum."""

from .search_state import (
    FilterState,
    SearchStatus,
    SearchStateMachine,
    ControlsLockedError,
)

__all__ = [
    "FilterState",
    "SearchStatus",
    "SearchStateMachine",
    "ControlsLockedError",
]
