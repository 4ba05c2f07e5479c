"""Tests for mapping key events onto list selection transitions."""

import pytest

from jwctl.cli.ui.key_input import KeyEvent, KeyEventKind, ListSelectionState, interpret_key
from jwctl.cli.ui.list_model import ListModel


@pytest.fixture
def model():
    m = ListModel([("a", "Alpha"), ("b", "Beta"), ("c", "Gamma")])
    m.select(0)
    return m


def test_down_and_up_move_selection(model):
    assert interpret_key(model, KeyEvent("down")) is ListSelectionState.RUNNING
    assert model.selected == 1
    assert interpret_key(model, KeyEvent("up")) is ListSelectionState.RUNNING
    assert model.selected == 0


def test_left_clears_selection(model):
    interpret_key(model, KeyEvent("left"))
    assert model.selected is None


def test_enter_with_selection_selects(model):
    model.next()
    assert interpret_key(model, KeyEvent("enter")) is ListSelectionState.SELECTED
    assert model.selected == 1


def test_enter_without_selection_is_noop(model):
    model.unselect()
    assert interpret_key(model, KeyEvent("enter")) is ListSelectionState.RUNNING
    assert model.selected is None


@pytest.mark.parametrize("event", [KeyEvent("q"), KeyEvent("c", ctrl=True)])
def test_cancel_keys(model, event):
    assert interpret_key(model, event) is ListSelectionState.CANCELLED


@pytest.mark.parametrize(
    "event",
    [
        KeyEvent("c"),
        KeyEvent("Q"),
        KeyEvent("right"),
        KeyEvent("escape"),
        KeyEvent("j"),
        KeyEvent("d", ctrl=True),
        KeyEvent("<bracketed-paste>"),
    ],
)
def test_other_keys_are_ignored(model, event):
    assert interpret_key(model, event) is ListSelectionState.RUNNING
    assert model.selected == 0


@pytest.mark.parametrize("kind", [KeyEventKind.RELEASE, KeyEventKind.REPEAT])
@pytest.mark.parametrize("name, ctrl", [("down", False), ("q", False), ("c", True), ("enter", False)])
def test_non_press_events_are_ignored(model, kind, name, ctrl):
    assert interpret_key(model, KeyEvent(name, ctrl=ctrl, kind=kind)) is ListSelectionState.RUNNING
    assert model.selected == 0
