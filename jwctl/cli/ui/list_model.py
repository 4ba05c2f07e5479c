"""Ordered candidate list with a wrapping cursor."""

from __future__ import annotations

from typing import Iterable, NamedTuple, Optional, Tuple


class Candidate(NamedTuple):
    """One selectable entry: the value handed back to the caller and its display text."""

    key: str
    label: str


class ListModel:
    """Immutable candidate sequence plus an optional selection index.

    The index is either ``None`` or within ``[0, len(items))``. Navigation
    wraps at both ends. On an empty list every navigation call is a no-op.
    """

    def __init__(self, items: Iterable[Tuple[str, str]]) -> None:
        self._items: Tuple[Candidate, ...] = tuple(Candidate(*item) for item in items)
        self._selected: Optional[int] = None

    @property
    def items(self) -> Tuple[Candidate, ...]:
        return self._items

    @property
    def selected(self) -> Optional[int]:
        return self._selected

    @property
    def selected_item(self) -> Optional[Candidate]:
        if self._selected is None:
            return None
        return self._items[self._selected]

    @property
    def labels(self) -> list[str]:
        return [item.label for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def select(self, index: Optional[int]) -> None:
        """Set the selection index explicitly; ``None`` clears it."""
        if not self._items:
            return
        if index is not None and not 0 <= index < len(self._items):
            raise IndexError(f"selection index {index} out of range for {len(self._items)} items")
        self._selected = index

    def next(self) -> None:
        if not self._items:
            return
        if self._selected is None or self._selected >= len(self._items) - 1:
            self._selected = 0
        else:
            self._selected += 1

    def previous(self) -> None:
        if not self._items:
            return
        if self._selected is None:
            self._selected = 0
        elif self._selected == 0:
            self._selected = len(self._items) - 1
        else:
            self._selected -= 1

    def unselect(self) -> None:
        self._selected = None

    def __repr__(self) -> str:
        return f"ListModel(items={len(self._items)}, selected={self._selected})"
