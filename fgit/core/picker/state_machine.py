"""Interactive picker as an explicit state machine.

The picker is a pure transition function over tagged states. A terminal
front end feeds it key names (prompt_toolkit style: single characters,
"backspace", "escape", "c-c") and renders whatever state comes back; the
machine never touches the screen or the VCS, so it can be driven entirely
from tests.

    AwaitingCode("") --symbol--> AwaitingCode(partial)   (ambiguous)
                     --symbol--> AwaitingAction(record)  (found)
    AwaitingAction   --a/d/s/e--> Dispatch(record, action)
                     --escape--> AwaitingCode("")
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from fgit.core.ids import AssignmentMap, Ambiguous, Found, resolve
from fgit.core.listing import ListingEntry
from fgit.domain.entities import FileRecord
from fgit.domain.value_objects import CodeAlphabet


class Action(str, Enum):
    """Actions available once a file is selected."""

    ADD = "add"
    DIFF = "diff"
    STAGED_DIFF = "staged-diff"
    EDIT = "edit"


ACTION_KEYS: dict[str, Action] = {
    "a": Action.ADD,
    "d": Action.DIFF,
    "s": Action.STAGED_DIFF,
    "e": Action.EDIT,
    "v": Action.EDIT,
}

BACKSPACE = "backspace"
ESCAPE = "escape"
INTERRUPT = "c-c"
QUIT = "q"


class Signal(str, Enum):
    """What a transition did, for the renderer's status line."""

    NARROWED = "narrowed"
    SELECTED = "selected"
    NO_MATCH = "no-match"
    DISPATCHED = "dispatched"
    CANCELLED = "cancelled"
    QUIT = "quit"
    IGNORED = "ignored"


@dataclass(frozen=True)
class AwaitingCode:
    """Collecting ID symbols.

    Attributes:
        partial: Symbols typed so far.
    """

    partial: str = ""


@dataclass(frozen=True)
class AwaitingAction:
    """A file is selected; waiting for an action key."""

    record: FileRecord
    code: str


@dataclass(frozen=True)
class Dispatch:
    """Terminal: run ``action`` on ``record``."""

    record: FileRecord
    action: Action


@dataclass(frozen=True)
class Quit:
    """Terminal: leave the picker without doing anything."""


PickerState = AwaitingCode | AwaitingAction | Dispatch | Quit

INITIAL_STATE: PickerState = AwaitingCode("")


@dataclass(frozen=True)
class Transition:
    """Result of one keystroke."""

    state: PickerState
    signal: Signal


def _awaiting_code(
    state: AwaitingCode, key: str, assignment: AssignmentMap, alphabet: CodeAlphabet
) -> Transition:
    if key in alphabet:
        partial = state.partial + key
        result = resolve(partial, assignment)
        if isinstance(result, Found):
            return Transition(AwaitingAction(result.record, result.code), Signal.SELECTED)
        if isinstance(result, Ambiguous):
            return Transition(AwaitingCode(partial), Signal.NARROWED)
        return Transition(AwaitingCode(""), Signal.NO_MATCH)

    if key == BACKSPACE:
        if not state.partial:
            return Transition(state, Signal.IGNORED)
        return Transition(AwaitingCode(state.partial[:-1]), Signal.NARROWED)

    if key == ESCAPE:
        if state.partial:
            return Transition(AwaitingCode(""), Signal.CANCELLED)
        return Transition(Quit(), Signal.QUIT)

    if key in (QUIT, INTERRUPT):
        return Transition(Quit(), Signal.QUIT)

    return Transition(state, Signal.IGNORED)


def _awaiting_action(state: AwaitingAction, key: str) -> Transition:
    action = ACTION_KEYS.get(key)
    if action is not None:
        return Transition(Dispatch(state.record, action), Signal.DISPATCHED)
    if key in (ESCAPE, BACKSPACE):
        return Transition(AwaitingCode(""), Signal.CANCELLED)
    if key in (QUIT, INTERRUPT):
        return Transition(Quit(), Signal.QUIT)
    return Transition(state, Signal.IGNORED)


def step(
    state: PickerState,
    key: str,
    assignment: AssignmentMap,
    alphabet: CodeAlphabet,
) -> Transition:
    """Advance the picker by one keystroke.

    Args:
        state: Current state.
        key: Key name: a single character, "backspace", "escape" or "c-c".
        assignment: ID map of the snapshot being picked from.
        alphabet: ID alphabet of the snapshot. A key is treated as an ID
            symbol only if it belongs to it, so "q" quits only when it is
            not a symbol.

    Returns:
        The next state and a signal describing the transition.
    """
    if isinstance(state, AwaitingCode):
        return _awaiting_code(state, key, assignment, alphabet)
    if isinstance(state, AwaitingAction):
        return _awaiting_action(state, key)
    return Transition(state, Signal.IGNORED)


class VisibleEntry(NamedTuple):
    """A listing entry still reachable from the typed prefix."""

    entry: ListingEntry
    typed: str
    remaining: str


def visible_entries(partial: str, entries: Iterable[ListingEntry]) -> list[VisibleEntry]:
    """Filter listing entries by the typed prefix, for display.

    Args:
        partial: Symbols typed so far.
        entries: Listing entries in listing order.

    Returns:
        Entries whose ID starts with ``partial``, with the ID split into
        the typed part and the part still to type.
    """
    return [
        VisibleEntry(entry, entry.code[: len(partial)], entry.code[len(partial) :])
        for entry in entries
        if entry.code.startswith(partial)
    ]
