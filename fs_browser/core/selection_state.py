from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .events import EventBus, SelectionChanged
from .exceptions import UnknownGroupError
from .nutrient_groups import NutrientGroups

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointFocus:
    """A single (country, indicator) pair is focused."""
    area: str
    indicator: str


@dataclass(frozen=True)
class GroupFocus:
    """A nutrient group is focused across all countries."""
    group: str


@dataclass(frozen=True)
class Empty:
    """No focus; only seen before data is loaded."""
    pass


EMPTY = Empty()

SelectionState = Union[PointFocus, GroupFocus, Empty]


class SelectionStateMachine:
    """
    Owns the single active focus and the memory of the last point focus.

    Transitions:
    - point_selected: any -> PointFocus, remembers it
    - group_selected: any -> GroupFocus, point memory untouched
    - group_toggled: same GroupFocus -> last PointFocus (or Empty), else as group_selected
    - background_cleared: GroupFocus -> last PointFocus (or Empty), else no-op

    Every transition that changes the state publishes SelectionChanged on the bus;
    no-op transitions publish nothing.
    """

    def __init__(self, groups: NutrientGroups, bus: Optional[EventBus] = None):
        self.groups = groups
        self.bus = bus if bus is not None else EventBus()
        self._state: SelectionState = EMPTY
        self._last_point: Optional[PointFocus] = None

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def last_point_focus(self) -> Optional[PointFocus]:
        return self._last_point

    def _restore_point(self) -> SelectionState:
        return self._last_point if self._last_point is not None else EMPTY

    def _transition(self, new_state: SelectionState, trigger: str) -> SelectionState:
        old_state = self._state
        if new_state == old_state:
            logger.debug("Selection unchanged", extra={"trigger": trigger, "state": repr(old_state)})
            return old_state

        self._state = new_state
        logger.debug(
            "Selection changed",
            extra={"trigger": trigger, "from": repr(old_state), "to": repr(new_state)},
        )
        self.bus.publish(SelectionChanged(new_state))
        return new_state

    def _require_group(self, group: str) -> None:
        if group not in self.groups:
            raise UnknownGroupError(group)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------
    def reset(self, initial: SelectionState) -> SelectionState:
        """Seed the machine (at load time). A PointFocus also seeds the point memory."""
        if isinstance(initial, PointFocus):
            self._last_point = initial
        return self._transition(initial, "reset")

    def point_selected(self, area: str, indicator: str) -> SelectionState:
        focus = PointFocus(area, indicator)
        self._last_point = focus
        return self._transition(focus, "point_selected")

    def group_selected(self, group: str) -> SelectionState:
        """
        Raises:
            UnknownGroupError: if the group is not configured; state is left unchanged
        """
        self._require_group(group)
        return self._transition(GroupFocus(group), "group_selected")

    def group_toggled(self, group: str) -> SelectionState:
        """
        Raises:
            UnknownGroupError: if the group is not configured; state is left unchanged
        """
        self._require_group(group)
        if self._state == GroupFocus(group):
            return self._transition(self._restore_point(), "group_toggled")
        return self._transition(GroupFocus(group), "group_toggled")

    def background_cleared(self) -> SelectionState:
        if isinstance(self._state, GroupFocus):
            return self._transition(self._restore_point(), "background_cleared")
        return self._state
