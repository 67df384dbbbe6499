"""Full-screen interactive picker.

Thin prompt_toolkit front end over the picker state machine: every key
press is turned into a key name, fed to ``step``, and the screen is redrawn
from the resulting state.
"""

import logging
from typing import Any

from prompt_toolkit import Application
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.layout import Dimension, HSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.layout import Layout
from prompt_toolkit.styles import Style

from fgit.core.listing import Snapshot
from fgit.core.picker import (
    ACTION_KEYS,
    INITIAL_STATE,
    AwaitingAction,
    AwaitingCode,
    Dispatch,
    PickerState,
    Quit,
    Signal,
    Transition,
    step,
    visible_entries,
)
from fgit.core.presentation.colors import FgitColors

StyleFragments = list[tuple[str, str]]

_STATUS_MESSAGES: dict[Signal, str] = {
    Signal.NO_MATCH: "No match",
    Signal.CANCELLED: "Cancelled",
}

_ACTION_LABELS = {
    "add": "add",
    "diff": "diff",
    "staged-diff": "staged diff",
    "edit": "edit",
}


class InteractivePickerUI:
    """Interactive picker using prompt_toolkit."""

    def __init__(self, snapshot: Snapshot) -> None:
        """Initialize the picker.

        Args:
            snapshot: Change set to pick from. It is not refreshed while the
                picker runs.
        """
        self.snapshot = snapshot
        self.state: PickerState = INITIAL_STATE
        self.last_signal: Signal | None = None
        self._build_ui()

    def feed(self, key: str) -> Transition:
        """Advance the state machine by one key name."""
        transition = step(self.state, key, self.snapshot.assignment, self.snapshot.alphabet)
        self.state = transition.state
        self.last_signal = transition.signal
        return transition

    @property
    def is_done(self) -> bool:
        """True once the picker reached a terminal state."""
        return isinstance(self.state, (Dispatch, Quit))

    @property
    def result(self) -> Dispatch | None:
        """The chosen file and action, or None if the user quit."""
        return self.state if isinstance(self.state, Dispatch) else None

    def _build_ui(self) -> None:
        """Build the prompt_toolkit UI layout."""
        kb = self._create_key_bindings()

        main_container = HSplit([
            Window(
                content=FormattedTextControl(self._get_body_text, focusable=False),
                wrap_lines=False,
            ),
            Window(height=Dimension.exact(1), char="─", style="class:separator"),
            Window(
                content=FormattedTextControl(self._get_status_text, focusable=False),
                height=Dimension.exact(1),
            ),
        ])

        self.app: Application[Any] = Application(
            layout=Layout(main_container),
            key_bindings=kb,
            style=Style.from_dict(FgitColors.get_prompt_toolkit_style()),
            full_screen=True,
            mouse_support=False,
        )

    def _handle(self, event: KeyPressEvent, key: str) -> None:
        self.feed(key)
        if self.is_done:
            event.app.exit()
        else:
            event.app.invalidate()

    def _create_key_bindings(self) -> KeyBindings:
        """Map terminal keys onto state machine key names."""
        kb = KeyBindings()

        @kb.add("backspace")
        def backspace(event: KeyPressEvent) -> None:
            self._handle(event, "backspace")

        @kb.add("escape", eager=True)
        def escape(event: KeyPressEvent) -> None:
            self._handle(event, "escape")

        @kb.add("c-c")
        def interrupt(event: KeyPressEvent) -> None:
            self._handle(event, "c-c")

        @kb.add("<any>")
        def character(event: KeyPressEvent) -> None:
            if len(event.data) == 1 and event.data.isprintable():
                self._handle(event, event.data)

        return kb

    def _get_body_text(self) -> StyleFragments:
        if isinstance(self.state, AwaitingAction):
            return self._get_action_text(self.state)
        partial = self.state.partial if isinstance(self.state, AwaitingCode) else ""
        return self._get_listing_text(partial)

    def _get_listing_text(self, partial: str) -> StyleFragments:
        """Listing filtered to IDs starting with the typed prefix."""
        fragments: StyleFragments = []
        last_group = None
        for visible in visible_entries(partial, self.snapshot.entries):
            record = visible.entry.record
            if record.group is not last_group:
                if last_group is not None:
                    fragments.append(("", "\n"))
                fragments.append((f"class:header.{record.group.value}", f"── {record.group.title} ──\n"))
                last_group = record.group

            pad = " " * max(0, 5 - len(visible.entry.code))
            fragments.extend([
                ("", "  "),
                ("class:code.typed", visible.typed),
                ("class:code", visible.remaining + pad),
                ("", f" {record.path}"),
            ])
            summary = visible.entry.summary
            if summary.added or summary.removed:
                fragments.extend([
                    ("", " "),
                    ("class:added", f"+{summary.added}"),
                    ("class:removed", f"/-{summary.removed}"),
                ])
            fragments.append(("", "\n"))
        return fragments

    def _get_action_text(self, state: AwaitingAction) -> StyleFragments:
        fragments: StyleFragments = [
            ("class:added", "Selected: "),
            ("", f"{state.record.path}\n\n"),
            ("class:header.unstaged", "── Action ──\n"),
        ]
        shown = set()
        for key, action in ACTION_KEYS.items():
            if action in shown:
                continue
            shown.add(action)
            fragments.extend([
                ("", "  "),
                ("class:code", key),
                ("", f"  {_ACTION_LABELS[action.value]}\n"),
            ])
        fragments.extend([("", "  "), ("class:dimmed", "q"), ("", "  quit\n")])
        return fragments

    def _get_status_text(self) -> StyleFragments:
        parts: StyleFragments = []
        if isinstance(self.state, AwaitingCode):
            parts.append(("class:status", f" ID: {self.state.partial or '_'}"))
        elif isinstance(self.state, AwaitingAction):
            parts.append(("class:status", f" {self.state.code} {self.state.record.path}"))

        message = _STATUS_MESSAGES.get(self.last_signal) if self.last_signal else None
        if message:
            parts.append(("class:error", f" │ {message}"))

        parts.append(("class:dimmed", " │ type an ID, esc:back q:quit"))
        return parts

    def run(self) -> Dispatch | None:
        """Run the picker until the user dispatches an action or quits.

        Suppresses all logging output while the full-screen UI is up, then
        restores it.

        Returns:
            The Dispatch state, or None if the user quit.
        """
        logging.disable(logging.CRITICAL)
        try:
            self.app.run()
        finally:
            logging.disable(logging.NOTSET)
        return self.result
