"""Interactive single-choice list for jwctl.

Usage:
    from jwctl.cli.ui.list_selection import run_list_selection

    key, label = run_list_selection([("db-1", "orders (db-1)"), ("db-2", "users (db-2)")])

Controls:
    Up/Down    - move the highlight (wraps at both ends)
    Left       - clear the highlight
    Enter      - choose the highlighted entry
    q / Ctrl+C - cancel (raises SelectionCancelled)

The loop is single threaded: each iteration draws the list, then waits at
most ``poll_interval`` seconds for a key before drawing again.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from rich.errors import ConsoleError

from jwctl.cli.ui.key_input import KeyEvent, ListSelectionState, interpret_key
from jwctl.cli.ui.list_model import Candidate, ListModel
from jwctl.cli.ui.terminal import PromptToolkitTerminal, SessionManager, TerminalBackend
from jwctl.core.config import ListSelectionConfig
from jwctl.errors import RenderFailure, SelectionCancelled
from jwctl.utils.log import get_logger

logger = get_logger()


class ListSelection:
    """State machine driving one interactive selection."""

    def __init__(
        self,
        items: Iterable[Tuple[str, str]],
        terminal: TerminalBackend,
        config: Optional[ListSelectionConfig] = None,
    ) -> None:
        self.model = ListModel(items)
        if len(self.model):
            self.model.select(0)
        self.state = ListSelectionState.RUNNING
        self._terminal = terminal
        self._config = config or ListSelectionConfig()
        self._sessions = SessionManager(terminal)

    def draw(self) -> None:
        try:
            self._terminal.draw(self.model.labels, self.model.selected)
        except RenderFailure:
            raise
        except (OSError, ValueError, RuntimeError, ConsoleError) as exc:
            raise RenderFailure(f"Failed to draw selection list: {exc}") from exc

    def handle_event(self, event: KeyEvent) -> ListSelectionState:
        if self.state is ListSelectionState.RUNNING:
            self.state = interpret_key(self.model, event)
        return self.state

    def step(self) -> ListSelectionState:
        """Run one draw + poll + dispatch iteration."""
        self.draw()
        event = self._terminal.poll_event(self._config.poll_interval)
        if event is not None:
            self.handle_event(event)
        return self.state

    def run(self) -> Candidate:
        """Block until the operator chooses an entry or cancels.

        Raises:
            SelectionCancelled: 'q' or Ctrl+C was pressed.
            TerminalUnavailable: raw mode could not be entered.
            RenderFailure: drawing failed; the terminal has been restored.
        """
        if self.state is not ListSelectionState.RUNNING:
            raise RuntimeError(f"List selection already finished ({self.state.value})")

        logger.debug(
            "[select] Starting list selection",
            extra={"candidate_count": len(self.model)},
        )
        with self._sessions.session():
            while self.step() is ListSelectionState.RUNNING:
                pass

        logger.debug("[select] List selection finished", extra={"state": self.state.value})
        selected = self.model.selected_item
        if self.state is ListSelectionState.SELECTED and selected is not None:
            return selected
        raise SelectionCancelled()


def run_list_selection(
    items: Iterable[Tuple[str, str]],
    *,
    terminal: Optional[TerminalBackend] = None,
    config: Optional[ListSelectionConfig] = None,
) -> Candidate:
    """Interactively select one (key, label) pair from ``items``."""
    config = config or ListSelectionConfig.from_env()
    if terminal is None:
        terminal = PromptToolkitTerminal(config)
    return ListSelection(items, terminal, config).run()


def select_candidate(
    items: Iterable[Tuple[str, str]],
    *,
    terminal: Optional[TerminalBackend] = None,
    config: Optional[ListSelectionConfig] = None,
) -> Optional[Candidate]:
    """Like :func:`run_list_selection` but returns ``None`` on cancel."""
    try:
        return run_list_selection(items, terminal=terminal, config=config)
    except SelectionCancelled:
        logger.info("Nothing selected")
        return None


__all__ = ["ListSelection", "run_list_selection", "select_candidate"]
