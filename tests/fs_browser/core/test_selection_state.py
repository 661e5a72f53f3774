from __future__ import annotations

import pytest

from fs_browser.core.events import EventBus, SelectionChanged
from fs_browser.core.exceptions import UnknownGroupError
from fs_browser.core.nutrient_groups import NutrientGroups
from fs_browser.core.selection_state import (
    EMPTY,
    GroupFocus,
    PointFocus,
    SelectionStateMachine,
)


def _make_machine():
    """Machine on a fresh bus plus the list collecting every SelectionChanged."""
    bus = EventBus()
    seen = []
    bus.subscribe(SelectionChanged, lambda e: seen.append(e.state))
    return SelectionStateMachine(NutrientGroups(), bus), seen


def test_initial_state_is_empty():
    machine, seen = _make_machine()

    assert machine.state == EMPTY
    assert machine.last_point_focus is None
    assert seen == []


def test_point_selected_focuses_and_remembers():
    machine, seen = _make_machine()

    state = machine.point_selected("Testland", "Protein supply")

    assert state == PointFocus("Testland", "Protein supply")
    assert machine.state == state
    assert machine.last_point_focus == state
    assert seen == [state]


def test_reselecting_same_point_is_a_noop():
    machine, seen = _make_machine()
    machine.point_selected("Testland", "Protein supply")

    machine.point_selected("Testland", "Protein supply")

    assert len(seen) == 1


def test_group_selected_preserves_point_memory():
    machine, seen = _make_machine()
    machine.point_selected("Testland", "Protein supply")

    machine.group_selected("Vitamins")

    assert machine.state == GroupFocus("Vitamins")
    assert machine.last_point_focus == PointFocus("Testland", "Protein supply")
    assert seen[-1] == GroupFocus("Vitamins")


def test_point_group_toggle_restores_original_point():
    machine, seen = _make_machine()
    original = machine.point_selected("Testland", "Protein supply")

    machine.group_selected("Minerals")
    restored = machine.group_toggled("Minerals")

    assert restored == original
    assert machine.state == original
    assert seen == [original, GroupFocus("Minerals"), original]


def test_group_toggled_on_other_group_switches_group():
    machine, _ = _make_machine()
    machine.point_selected("Testland", "Protein supply")
    machine.group_selected("Minerals")

    assert machine.group_toggled("Vitamins") == GroupFocus("Vitamins")


def test_group_toggled_from_point_selects_group():
    machine, _ = _make_machine()
    machine.point_selected("Testland", "Protein supply")

    assert machine.group_toggled("Vitamins") == GroupFocus("Vitamins")


def test_group_toggled_without_point_memory_goes_empty():
    machine, seen = _make_machine()
    machine.group_selected("Vitamins")

    assert machine.group_toggled("Vitamins") == EMPTY
    assert seen == [GroupFocus("Vitamins"), EMPTY]


def test_point_selected_clears_group():
    machine, _ = _make_machine()
    machine.point_selected("Testland", "Protein supply")
    machine.group_selected("Vitamins")

    state = machine.point_selected("Otherland", "Iron supply")

    assert state == PointFocus("Otherland", "Iron supply")
    assert machine.last_point_focus == state


def test_background_cleared_restores_point_from_group():
    machine, seen = _make_machine()
    original = machine.point_selected("Testland", "Protein supply")
    machine.group_selected("Vitamins")

    assert machine.background_cleared() == original
    assert seen[-1] == original


def test_background_cleared_on_point_is_noop():
    machine, seen = _make_machine()
    machine.point_selected("Testland", "Protein supply")

    machine.background_cleared()

    assert machine.state == PointFocus("Testland", "Protein supply")
    assert len(seen) == 1


def test_background_cleared_on_empty_without_memory_emits_nothing():
    machine, seen = _make_machine()

    assert machine.background_cleared() == EMPTY
    assert machine.state == EMPTY
    assert seen == []


@pytest.mark.parametrize("transition", ["group_selected", "group_toggled"])
def test_unknown_group_leaves_state_unchanged(transition):
    machine, seen = _make_machine()
    machine.point_selected("Testland", "Protein supply")

    with pytest.raises(UnknownGroupError):
        getattr(machine, transition)("Sugars")

    assert machine.state == PointFocus("Testland", "Protein supply")
    assert len(seen) == 1


def test_reset_seeds_point_memory():
    machine, seen = _make_machine()

    machine.reset(PointFocus("Testland", "Protein supply"))
    machine.group_selected("Vitamins")

    assert machine.background_cleared() == PointFocus("Testland", "Protein supply")
    assert len(seen) == 3


def test_machine_without_bus_gets_its_own():
    machine = SelectionStateMachine(NutrientGroups())

    assert isinstance(machine.bus, EventBus)
    assert machine.point_selected("A", "B") == PointFocus("A", "B")
