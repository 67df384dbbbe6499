"""Keystroke-driven picker state machine (no terminal I/O)."""

from fgit.core.picker.state_machine import (
    ACTION_KEYS,
    INITIAL_STATE,
    Action,
    AwaitingAction,
    AwaitingCode,
    Dispatch,
    PickerState,
    Quit,
    Signal,
    Transition,
    VisibleEntry,
    step,
    visible_entries,
)

__all__ = [
    "ACTION_KEYS",
    "INITIAL_STATE",
    "Action",
    "AwaitingAction",
    "AwaitingCode",
    "Dispatch",
    "PickerState",
    "Quit",
    "Signal",
    "Transition",
    "VisibleEntry",
    "step",
    "visible_entries",
]
