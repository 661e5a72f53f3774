from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import pandas as pd

from .aggregation import (
    PAIRED_COLUMNS,
    RANKED_COLUMNS,
    SCATTER_COLUMNS,
    SERIES_COLUMNS,
    AggregationEngine,
)
from .exceptions import MissingRecordError
from .selection_state import EMPTY, GroupFocus, PointFocus, SelectionState

logger = logging.getLogger(__name__)

BARS_FOOD_GROUP = "food_group"
BARS_GROUP_AVERAGE = "group_average"


def _empty(columns) -> pd.DataFrame:
    return pd.DataFrame(columns=list(columns))


@dataclass(eq=False)
class ViewProjections:
    """
    The record sets every view needs for one SelectionState.

    Fields:

    - ranked_bars: food_group/value rows (PointFocus) or indicator/value rows (GroupFocus)
    - time_series: year/value rows, NaN where the source value is missing
    - paired_comparison: dumbbell rows, empty unless a PointFocus has a nutrient group
    - scatter_points: country-total points of the focused indicator (PointFocus)
      or of every indicator in the group (GroupFocus)
    - bars_mode: which shape ranked_bars has, None when empty
    - group: nutrient group of the focus, if any
    """
    state: SelectionState = EMPTY
    ranked_bars: pd.DataFrame = field(default_factory=lambda: _empty(RANKED_COLUMNS))
    time_series: pd.DataFrame = field(default_factory=lambda: _empty(SERIES_COLUMNS))
    paired_comparison: pd.DataFrame = field(default_factory=lambda: _empty(PAIRED_COLUMNS))
    scatter_points: pd.DataFrame = field(default_factory=lambda: _empty(SCATTER_COLUMNS))
    bars_mode: Optional[str] = None
    group: Optional[str] = None

    FRAMES = ("ranked_bars", "time_series", "paired_comparison", "scatter_points")

    def equals(self, other: ViewProjections) -> bool:
        """NaN-aware equality of state, metadata and all frames."""
        if not isinstance(other, ViewProjections):
            return False
        if (self.state, self.bars_mode, self.group) != (other.state, other.bars_mode, other.group):
            return False
        return all(getattr(self, name).equals(getattr(other, name)) for name in self.FRAMES)

    def as_dict(self) -> dict:
        return {
            "rankedBars": self.ranked_bars,
            "timeSeries": self.time_series,
            "pairedComparison": self.paired_comparison,
        }


class ProjectionBuilder:
    """
    Stateless: projections are a pure function of (store contents, SelectionState).
    """

    def __init__(self, engine: AggregationEngine):
        self.engine = engine

    def _or_empty(self, view: str, compute: Callable[[], pd.DataFrame], columns) -> pd.DataFrame:
        try:
            return compute()
        except MissingRecordError as e:
            logger.warning(
                "Missing record for view; rendering empty projection",
                extra={"view": view, "error": str(e)},
            )
            return _empty(columns)

    def build(self, state: SelectionState) -> ViewProjections:
        if isinstance(state, PointFocus):
            return self._build_point(state)
        if isinstance(state, GroupFocus):
            return self._build_group(state)
        return ViewProjections(state=state)

    def _build_point(self, state: PointFocus) -> ViewProjections:
        engine = self.engine
        group = engine.groups.group_of(state.indicator)

        ranked = self._or_empty(
            "ranked_bars",
            lambda: engine.ranked_by_food_group(state.area, state.indicator),
            RANKED_COLUMNS,
        )
        series = self._or_empty(
            "time_series",
            lambda: engine.time_series(state.area, state.indicator),
            SERIES_COLUMNS,
        )
        if group is not None:
            paired = self._or_empty(
                "paired_comparison",
                lambda: engine.paired_comparison(group, state.area),
                PAIRED_COLUMNS,
            )
        else:
            paired = _empty(PAIRED_COLUMNS)

        return ViewProjections(
            state=state,
            ranked_bars=ranked,
            time_series=series,
            paired_comparison=paired,
            scatter_points=engine.scatter_points([state.indicator]),
            bars_mode=BARS_FOOD_GROUP,
            group=group,
        )

    def _build_group(self, state: GroupFocus) -> ViewProjections:
        engine = self.engine
        return ViewProjections(
            state=state,
            ranked_bars=engine.group_average_across_countries(state.group),
            time_series=engine.group_time_series(state.group),
            paired_comparison=_empty(PAIRED_COLUMNS),
            scatter_points=engine.scatter_points(engine.groups.indicators(state.group)),
            bars_mode=BARS_GROUP_AVERAGE,
            group=state.group,
        )

