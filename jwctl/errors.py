"""Error types raised by the jwctl list selection widget."""


class ListSelectionError(Exception):
    """Base exception for all list selection errors."""

    def __str__(self) -> str:
        return self.args[0] if self.args else "List selection failed"


class TerminalUnavailable(ListSelectionError):
    """Raised when the terminal cannot be put into raw input mode."""


class SelectionCancelled(ListSelectionError):
    """Raised when the operator aborts the selection with 'q' or Ctrl+C."""

    def __str__(self) -> str:
        return self.args[0] if self.args else "Nothing selected"


class RenderFailure(ListSelectionError):
    """Raised when drawing the list fails."""


__all__ = [
    "ListSelectionError",
    "TerminalUnavailable",
    "SelectionCancelled",
    "RenderFailure",
]
