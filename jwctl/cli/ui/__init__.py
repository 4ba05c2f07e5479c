"""Terminal UI components for jwctl."""

from jwctl.cli.ui.list_model import Candidate, ListModel
from jwctl.cli.ui.list_selection import ListSelection, run_list_selection, select_candidate

__all__ = [
    "Candidate",
    "ListModel",
    "ListSelection",
    "run_list_selection",
    "select_candidate",
]
