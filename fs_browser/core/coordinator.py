from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional

import pandas as pd

from .aggregation import AggregationEngine
from .dataset import DatasetStore, Record
from .dataset_loader import read_food_supply_csv, records_from_frame
from .events import (
    BackgroundClicked,
    DropdownChanged,
    EventBus,
    GroupClicked,
    INBOUND_EVENTS,
    PointClicked,
    ProjectionsReady,
)
from .exceptions import NotReadyError, UnknownGroupError
from .nutrient_groups import NutrientGroups
from .projections import ProjectionBuilder, ViewProjections
from .selection_state import PointFocus, SelectionState, SelectionStateMachine

logger = logging.getLogger(__name__)


class DashboardCoordinator:
    """
    Cross-view selection and aggregation coordinator.

    Owns the canonical DatasetStore, the SelectionStateMachine and the
    ProjectionBuilder, and relays events over a single EventBus:

        renderer --(PointClicked/GroupClicked/BackgroundClicked/DropdownChanged)--> bus
        bus --> coordinator --> state machine --(SelectionChanged)--> bus
        on change: coordinator rebuilds projections --(ProjectionsReady)--> bus --> renderers

    Inbound events before `load` completes are rejected with NotReadyError;
    events naming unknown groups are rejected with UnknownGroupError. On the
    bus path both are logged and dropped, leaving state unchanged.
    """

    def __init__(self, groups: Optional[NutrientGroups] = None, bus: Optional[EventBus] = None):
        self.groups = groups if groups is not None else NutrientGroups()
        self.bus = bus if bus is not None else EventBus()
        self.store = DatasetStore()
        self.engine = AggregationEngine(self.store, self.groups)
        self.builder = ProjectionBuilder(self.engine)
        self.machine = SelectionStateMachine(self.groups, self.bus)
        self._ready = False

        for event_type in INBOUND_EVENTS:
            self.bus.subscribe(event_type, self._on_inbound)

    # -------------------------------------------------------------------------
    # Load (the only suspension point)
    # -------------------------------------------------------------------------
    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def state(self) -> SelectionState:
        return self.machine.state

    def load(self, records: Iterable[Record]) -> None:
        """
        Populate the store once, focus the first record and announce the
        initial selection and projections.

        Raises:
            EmptyDatasetError: if there are no usable records
        """
        self.store.load(records)
        first = self.store.first_record()
        self._ready = True

        logger.info(
            "Coordinator ready",
            extra={"n_records": len(self.store), "initial_area": first.area, "initial_indicator": first.indicator},
        )
        self.machine.reset(PointFocus(first.area, first.indicator))
        self._publish_projections()

    def load_frame(self, df: pd.DataFrame) -> None:
        self.load(records_from_frame(df))

    def load_csv(self, path: Path) -> None:
        self.load(read_food_supply_csv(path))

    async def load_async(self, fetch: Callable[[], Awaitable[Iterable[Record]]]) -> None:
        """Await a one-shot fetch of the records, then load them."""
        records = await fetch()
        self.load(records)

    # -------------------------------------------------------------------------
    # Inbound events
    # -------------------------------------------------------------------------
    def handle(self, event: Any) -> SelectionState:
        """
        Apply one renderer event to the state machine.

        Raises:
            NotReadyError: if the dataset has not been loaded yet
            UnknownGroupError: if the event names an unconfigured group
            TypeError: for events that are not renderer events
        """
        if not self._ready:
            raise NotReadyError(f"Dropping {type(event).__name__}: dataset not loaded")

        before = self.machine.state
        after = self._apply(event)
        if after != before:
            self._publish_projections()
        return after

    def _apply(self, event: Any) -> SelectionState:
        machine = self.machine
        if isinstance(event, PointClicked):
            return machine.point_selected(event.area, event.indicator)
        if isinstance(event, GroupClicked):
            return machine.group_toggled(event.group)
        if isinstance(event, BackgroundClicked):
            return machine.background_cleared()
        if isinstance(event, DropdownChanged):
            return self._dropdown_changed(event.value)
        raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def _on_inbound(self, event: Any) -> None:
        try:
            self.handle(event)
        except NotReadyError as e:
            logger.warning("Event dropped before load", extra={"event": repr(event), "error": str(e)})
        except UnknownGroupError as e:
            logger.warning("Event ignored: unknown group", extra={"event": repr(event), "group": e.group})

    def focused_point(self) -> Optional[PointFocus]:
        """The current PointFocus, else the remembered one (e.g. under GroupFocus)."""
        state = self.machine.state
        if isinstance(state, PointFocus):
            return state
        return self.machine.last_point_focus

    def _anchor_point(self) -> PointFocus:
        focus = self.focused_point()
        if focus is not None:
            return focus
        first = self.store.first_record()
        return PointFocus(first.area, first.indicator)

    def _dropdown_changed(self, value: str) -> SelectionState:
        anchor = self._anchor_point()
        if value in self.store.indicators():
            return self.machine.point_selected(anchor.area, value)
        if value in self.store.areas():
            return self.machine.point_selected(value, anchor.indicator)

        logger.warning("Dropdown value is neither an indicator nor a country", extra={"value": value})
        return self.machine.state

    # -------------------------------------------------------------------------
    # Outbound
    # -------------------------------------------------------------------------
    def projections(self) -> ViewProjections:
        """Projections for the current selection, computed on demand."""
        return self.builder.build(self.machine.state)

    def _publish_projections(self) -> None:
        self.bus.publish(ProjectionsReady(self.projections()))
