"""Terminal access for the list selection widget.

The render loop only talks to a :class:`TerminalBackend`. The real backend
reads keys through prompt_toolkit and draws an inline viewport with rich;
tests substitute a fake that implements the same four methods.
"""

from __future__ import annotations

import io
import os
import time
from collections import deque
from contextlib import contextmanager
from typing import Any, Deque, Iterator, Optional, Protocol, Sequence

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys
from rich.cells import cell_len
from rich.console import Console
from rich.live import Live
from rich.text import Text

from jwctl.cli.ui.key_input import KeyEvent
from jwctl.core.config import ListSelectionConfig
from jwctl.errors import TerminalUnavailable
from jwctl.utils.log import get_logger

if os.name != "nt":
    import select
    import termios

    _RAW_MODE_ERRORS: tuple[type[BaseException], ...] = (OSError, termios.error)
else:
    _RAW_MODE_ERRORS = (OSError,)

logger = get_logger()

_NAMED_KEYS = {
    Keys.Up: "up",
    Keys.Down: "down",
    Keys.Left: "left",
    Keys.Right: "right",
    Keys.ControlM: "enter",
    Keys.ControlJ: "enter",
    Keys.Escape: "escape",
}

EMPTY_PLACEHOLDER = "(no items)"

# How long a partial escape sequence may wait for its remaining bytes.
ESCAPE_SEQUENCE_TIMEOUT = 0.1


class TerminalBackend(Protocol):
    """Minimal capability set the render loop needs from a terminal."""

    def enter_raw_mode(self) -> None: ...

    def leave_raw_mode(self) -> None: ...

    def poll_event(self, timeout: float) -> Optional[KeyEvent]: ...

    def draw(self, lines: Sequence[str], highlighted_index: Optional[int]) -> None: ...


class TerminalSession:
    """Handle for one period of exclusive raw-mode access."""

    def __init__(self, terminal: TerminalBackend) -> None:
        self.terminal = terminal
        self.active = True

    def __repr__(self) -> str:
        return f"TerminalSession(active={self.active})"


class SessionManager:
    """Acquire and release raw terminal mode with release-exactly-once semantics."""

    def __init__(self, terminal: TerminalBackend) -> None:
        self._terminal = terminal

    def acquire(self) -> TerminalSession:
        try:
            self._terminal.enter_raw_mode()
        except TerminalUnavailable:
            raise
        except (OSError, ValueError) as exc:
            raise TerminalUnavailable(f"Unable to enter raw terminal mode: {exc}") from exc
        logger.debug("[select] Raw terminal mode acquired")
        return TerminalSession(self._terminal)

    def release(self, session: TerminalSession) -> None:
        """Restore the terminal. Releasing an inactive session does nothing."""
        if not session.active:
            return
        session.active = False
        session.terminal.leave_raw_mode()
        logger.debug("[select] Raw terminal mode released")

    @contextmanager
    def session(self) -> Iterator[TerminalSession]:
        """Hold raw mode for the duration of the ``with`` block.

        When the block raises, a failing release is logged and the first
        error keeps propagating.
        """
        session = self.acquire()
        try:
            yield session
        except BaseException:
            try:
                self.release(session)
            except (OSError, ValueError, RuntimeError) as exc:
                logger.warning(
                    "[select] Failed to restore terminal: %s: %s",
                    type(exc).__name__,
                    exc,
                )
            raise
        else:
            self.release(session)


def key_event_from_press(press: KeyPress) -> KeyEvent:
    """Translate a prompt_toolkit key press into a :class:`KeyEvent`."""
    key = press.key
    if isinstance(key, Keys):
        named = _NAMED_KEYS.get(key)
        if named is not None:
            return KeyEvent(named)
        value = key.value
        if value.startswith("c-") and len(value) == 3:
            return KeyEvent(value[2], ctrl=True)
        return KeyEvent(value)
    return KeyEvent(key)


def scroll_offset(total: int, highlighted: Optional[int], height: int, offset: int) -> int:
    """Return the first visible row so that ``highlighted`` stays on screen."""
    if total <= height:
        return 0
    offset = max(0, min(offset, total - height))
    if highlighted is None:
        return offset
    if highlighted < offset:
        return highlighted
    if highlighted >= offset + height:
        return highlighted - height + 1
    return offset


def render_viewport(
    lines: Sequence[str],
    highlighted_index: Optional[int],
    *,
    offset: int,
    height: int,
    highlight_symbol: str,
    highlight_style: str,
) -> Text:
    """Build the rows shown for one frame."""
    if not lines:
        return Text(EMPTY_PLACEHOLDER, style="dim")

    padding = " " * cell_len(highlight_symbol)
    text = Text(no_wrap=True, overflow="ellipsis")
    visible = range(offset, min(len(lines), offset + height))
    for row, index in enumerate(visible):
        if row:
            text.append("\n")
        if index == highlighted_index:
            text.append(f"{highlight_symbol}{lines[index]}", style=highlight_style)
        else:
            text.append(f"{padding}{lines[index]}")
    return text


class PromptToolkitTerminal:
    """Terminal backend using prompt_toolkit for input and rich for output.

    Output goes to stderr so stdout stays available to the caller.
    """

    def __init__(
        self,
        config: Optional[ListSelectionConfig] = None,
        *,
        input: Optional[Input] = None,
        console: Optional[Console] = None,
    ) -> None:
        self._config = config or ListSelectionConfig()
        self._input = input
        self._console = console or Console(stderr=True)
        self._raw_mode: Optional[Any] = None
        self._live: Optional[Live] = None
        self._pending: Deque[KeyPress] = deque()
        self._offset = 0

    def _open_input(self) -> Input:
        if self._input is not None:
            return self._input
        try:
            self._input = create_input(always_prefer_tty=True)
        except (OSError, ValueError) as exc:
            raise TerminalUnavailable(f"No terminal input available: {exc}") from exc
        return self._input

    def enter_raw_mode(self) -> None:
        term_input = self._open_input()
        try:
            interactive = os.isatty(term_input.fileno())
        except (OSError, ValueError, io.UnsupportedOperation):
            interactive = False
        if not interactive:
            raise TerminalUnavailable("Interactive selection requires a terminal")

        raw_mode = term_input.raw_mode()
        try:
            raw_mode.__enter__()
        except _RAW_MODE_ERRORS as exc:
            raise TerminalUnavailable(f"Unable to enter raw terminal mode: {exc}") from exc
        self._raw_mode = raw_mode
        self._pending.clear()
        self._offset = 0

    def leave_raw_mode(self) -> None:
        live, self._live = self._live, None
        raw_mode, self._raw_mode = self._raw_mode, None
        try:
            if live is not None:
                # transient Live erases the rows it drew
                live.stop()
        finally:
            if raw_mode is not None:
                raw_mode.__exit__(None, None, None)

    def draw(self, lines: Sequence[str], highlighted_index: Optional[int]) -> None:
        height = self._config.viewport_height
        self._offset = scroll_offset(len(lines), highlighted_index, height, self._offset)
        renderable = render_viewport(
            lines,
            highlighted_index,
            offset=self._offset,
            height=height,
            highlight_symbol=self._config.highlight_symbol,
            highlight_style=self._config.highlight_style,
        )
        if self._live is None:
            self._live = Live(
                renderable,
                console=self._console,
                transient=True,
                auto_refresh=False,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            self._live.start(refresh=True)
        else:
            self._live.update(renderable, refresh=True)

    def poll_event(self, timeout: float) -> Optional[KeyEvent]:
        if not self._pending:
            if not self._wait_readable(timeout):
                return None
            term_input = self._open_input()
            presses = term_input.read_keys()
            if not presses and self._wait_readable(ESCAPE_SEQUENCE_TIMEOUT):
                # the rest of a split escape sequence arrived late
                presses = term_input.read_keys()
            if not presses:
                # a lone ESC stays buffered until flushed
                presses = term_input.flush_keys()
            self._pending.extend(presses)
        if not self._pending:
            return None
        return key_event_from_press(self._pending.popleft())

    def _wait_readable(self, timeout: float) -> bool:
        if os.name == "nt":
            import msvcrt

            deadline = time.monotonic() + timeout
            while not msvcrt.kbhit():
                if time.monotonic() >= deadline:
                    return False
                time.sleep(0.02)
            return True

        fd = self._open_input().fileno()
        readable, _, _ = select.select([fd], [], [], timeout)
        return bool(readable)


__all__ = [
    "EMPTY_PLACEHOLDER",
    "ESCAPE_SEQUENCE_TIMEOUT",
    "PromptToolkitTerminal",
    "SessionManager",
    "TerminalBackend",
    "TerminalSession",
    "key_event_from_press",
    "render_viewport",
    "scroll_offset",
]
