"""Pytest configuration and fixtures for all tests."""

from collections import deque
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import pytest

from jwctl.cli.ui.key_input import KeyEvent

ScriptedEvent = Union[KeyEvent, None, BaseException]


class ScriptExhausted(Exception):
    """Raised by FakeTerminal when a test polls more often than it scripted."""


class FakeTerminal:
    """In-memory terminal implementing the backend capability set.

    ``events`` is consumed one entry per poll: a KeyEvent is delivered, ``None``
    simulates a poll timeout, and an exception instance is raised.
    """

    def __init__(
        self,
        events: Iterable[ScriptedEvent] = (),
        *,
        enter_error: Optional[BaseException] = None,
        draw_error: Optional[BaseException] = None,
        leave_error: Optional[BaseException] = None,
    ) -> None:
        self.events = deque(events)
        self.enter_error = enter_error
        self.draw_error = draw_error
        self.leave_error = leave_error
        self.enter_calls = 0
        self.leave_calls = 0
        self.raw = False
        self.frames: List[Tuple[List[str], Optional[int]]] = []
        self.poll_timeouts: List[float] = []

    def enter_raw_mode(self) -> None:
        self.enter_calls += 1
        if self.enter_error is not None:
            raise self.enter_error
        self.raw = True

    def leave_raw_mode(self) -> None:
        self.leave_calls += 1
        self.raw = False
        if self.leave_error is not None:
            raise self.leave_error

    def poll_event(self, timeout: float) -> Optional[KeyEvent]:
        assert self.raw, "poll_event called outside raw mode"
        self.poll_timeouts.append(timeout)
        if not self.events:
            raise ScriptExhausted("no more scripted key events")
        event = self.events.popleft()
        if isinstance(event, BaseException):
            raise event
        return event

    def draw(self, lines: Sequence[str], highlighted_index: Optional[int]) -> None:
        assert self.raw, "draw called outside raw mode"
        if self.draw_error is not None:
            raise self.draw_error
        self.frames.append((list(lines), highlighted_index))


@pytest.fixture
def fake_terminal_factory():
    """Build FakeTerminal instances with scripted key events."""
    return FakeTerminal


@pytest.fixture(autouse=True)
def clear_selection_env(monkeypatch):
    """Keep JW_SELECT_* settings from the developer's shell out of tests."""
    for name in (
        "JW_SELECT_POLL_INTERVAL",
        "JW_SELECT_VIEWPORT_HEIGHT",
        "JW_SELECT_HIGHLIGHT_SYMBOL",
        "JW_SELECT_HIGHLIGHT_STYLE",
    ):
        monkeypatch.delenv(name, raising=False)
