"""Key events and their effect on a list selection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from jwctl.cli.ui.list_model import ListModel


class KeyEventKind(str, Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


class ListSelectionState(str, Enum):
    RUNNING = "running"
    SELECTED = "selected"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key from the terminal.

    ``key`` is a named key (``"up"``, ``"down"``, ``"left"``, ``"right"``,
    ``"enter"``, ``"escape"``) or a single printable character.
    """

    key: str
    ctrl: bool = False
    kind: KeyEventKind = KeyEventKind.PRESS

    @property
    def is_press(self) -> bool:
        return self.kind == KeyEventKind.PRESS


CANCEL_CHARS = frozenset({"q"})


def interpret_key(model: ListModel, event: KeyEvent) -> ListSelectionState:
    """Apply one key event to ``model`` and return the resulting loop state.

    Only presses count; repeat and release artifacts leave everything as is.
    """
    if not event.is_press:
        return ListSelectionState.RUNNING

    if event.ctrl:
        if event.key == "c":
            return ListSelectionState.CANCELLED
        return ListSelectionState.RUNNING

    if event.key in CANCEL_CHARS:
        return ListSelectionState.CANCELLED
    if event.key == "enter":
        if model.selected is None:
            return ListSelectionState.RUNNING
        return ListSelectionState.SELECTED
    if event.key == "down":
        model.next()
    elif event.key == "up":
        model.previous()
    elif event.key == "left":
        model.unselect()
    return ListSelectionState.RUNNING
