from __future__ import annotations

import logging
from typing import Iterable

import numpy as np
import pandas as pd

from .dataset import FIRST_YEAR, LATEST_YEAR, TOTAL_FOOD_GROUP, YEARS, DatasetStore
from .exceptions import MissingRecordError
from .nutrient_groups import NutrientGroups, short_name

logger = logging.getLogger(__name__)

RANKED_COLUMNS = ["food_group", "value"]
GROUP_AVERAGE_COLUMNS = ["indicator", "value"]
SERIES_COLUMNS = ["year", "value"]
PAIRED_COLUMNS = [
    "indicator",
    "short_name",
    "unit",
    "area",
    "value_2010",
    "value_2022",
    "change",
    "percent_change",
    "direction",
]
SCATTER_COLUMNS = ["area", "indicator", "group", "value_2010", "value_2022"]

# Absolute change below which a paired row counts as unchanged
CHANGE_TOLERANCE = 0.01


def change_direction(change: float) -> str:
    if change > CHANGE_TOLERANCE:
        return "increase"
    if change < -CHANGE_TOLERANCE:
        return "decrease"
    return "neutral"


def _sort_desc(df: pd.DataFrame, column: str) -> pd.DataFrame:
    # mergesort keeps input order for ties; NaN sinks to the bottom
    return df.sort_values(
        column, ascending=False, kind="mergesort", na_position="last"
    ).reset_index(drop=True)


def _series_frame(values) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "year": np.array(YEARS, dtype=int),
            "value": np.asarray(values, dtype=float),
        },
        columns=SERIES_COLUMNS,
    )


class AggregationEngine:
    """
    Pure projections over a loaded DatasetStore.

    Every method is deterministic given the store contents and returns a fresh
    DataFrame; nothing is cached or mutated. "Latest" values are the values at
    the last configured year (2022), NaN when absent.
    """

    def __init__(self, store: DatasetStore, groups: NutrientGroups):
        self.store = store
        self.groups = groups

    def _totals(self) -> pd.DataFrame:
        df = self.store.frame
        return df[df["food_group"] == TOTAL_FOOD_GROUP]

    # -------------------------------------------------------------------------
    # Bars
    # -------------------------------------------------------------------------
    def ranked_by_food_group(self, area: str, indicator: str) -> pd.DataFrame:
        """
        Latest value per food group for one area/indicator, excluding the
        'All food groups' row, sorted descending (stable on ties).
        """
        df = self.store.frame
        rows = df[
            (df["area"] == area)
            & (df["indicator"] == indicator)
            & (df["food_group"] != TOTAL_FOOD_GROUP)
        ]

        out = pd.DataFrame(
            {
                "food_group": rows["food_group"].to_numpy(dtype=object),
                "value": rows[LATEST_YEAR].to_numpy(dtype=float),
            },
            columns=RANKED_COLUMNS,
        )
        return _sort_desc(out, "value")

    def group_average_across_countries(self, group: str) -> pd.DataFrame:
        """
        Mean latest value per indicator of `group`, across every country's
        'All food groups' row. Indicators without a single non-NaN value are
        omitted.

        Raises:
            UnknownGroupError: if the group is not configured
        """
        indicators = self.groups.indicators(group)
        totals = self._totals()
        rows = totals[totals["indicator"].isin(indicators)]

        means = rows.groupby("indicator", sort=False)[LATEST_YEAR].mean().dropna()
        ordered = [i for i in indicators if i in means.index]

        out = pd.DataFrame(
            {
                "indicator": np.array(ordered, dtype=object),
                "value": means.reindex(ordered).to_numpy(dtype=float),
            },
            columns=GROUP_AVERAGE_COLUMNS,
        )
        return _sort_desc(out, "value")

    # -------------------------------------------------------------------------
    # Lines
    # -------------------------------------------------------------------------
    def time_series(self, area: str, indicator: str) -> pd.DataFrame:
        """
        Year-by-year values of the area's 'All food groups' row. Missing years
        stay NaN so consumers can detect and skip them.

        Raises:
            MissingRecordError: if the area has no such row
        """
        record = self.store.find_record(area, indicator, TOTAL_FOOD_GROUP)
        if record is None:
            raise MissingRecordError(area, indicator, TOTAL_FOOD_GROUP)
        return _series_frame([record.value(year) for year in YEARS])

    def group_time_series(self, group: str) -> pd.DataFrame:
        """
        Per-year mean over every (country, indicator) 'All food groups' row
        of the group. NaN cells are skipped; a year with no values stays NaN.

        Raises:
            UnknownGroupError: if the group is not configured
        """
        indicators = self.groups.indicators(group)
        totals = self._totals()
        rows = totals[totals["indicator"].isin(indicators)]

        if rows.empty:
            logger.debug("No rows for nutrient group", extra={"group": group})
            return _series_frame([np.nan] * len(YEARS))

        means = rows[list(YEARS)].mean(axis=0, skipna=True)
        return _series_frame(means.to_numpy(dtype=float))

    # -------------------------------------------------------------------------
    # Dumbbell
    # -------------------------------------------------------------------------
    def paired_comparison(self, group: str, area: str) -> pd.DataFrame:
        """
        First vs latest year for every indicator of `group` present in the
        area's 'All food groups' rows, sorted by the latest value descending.

        percent_change is 0 whenever the first-year value is 0 or either
        endpoint is missing, never NaN/inf.

        Raises:
            UnknownGroupError: if the group is not configured
        """
        indicators = self.groups.indicators(group)
        totals = self._totals()
        rows = totals[(totals["area"] == area) & (totals["indicator"].isin(indicators))]

        first = rows[FIRST_YEAR].to_numpy(dtype=float)
        latest = rows[LATEST_YEAR].to_numpy(dtype=float)
        change = latest - first

        with np.errstate(divide="ignore", invalid="ignore"):
            pct = np.where(first != 0, change / first * 100.0, 0.0)
        pct = np.where(np.isfinite(pct), pct, 0.0)

        out = pd.DataFrame(
            {
                "indicator": rows["indicator"].to_numpy(dtype=object),
                "short_name": np.array([short_name(i) for i in rows["indicator"]], dtype=object),
                "unit": rows["unit"].to_numpy(dtype=object),
                "area": rows["area"].to_numpy(dtype=object),
                "value_2010": first,
                "value_2022": latest,
                "change": change,
                "percent_change": pct.astype(float),
                "direction": np.array([change_direction(c) for c in change], dtype=object),
            },
            columns=PAIRED_COLUMNS,
        )
        return _sort_desc(out, "value_2022")

    # -------------------------------------------------------------------------
    # Scatter
    # -------------------------------------------------------------------------
    def scatter_points(self, indicators: Iterable[str]) -> pd.DataFrame:
        """
        One point per 'All food groups' record of the given indicators: first
        vs latest year value, tagged with the indicator's nutrient group
        ('Other' when unlisted). Rows keep store order.
        """
        totals = self._totals()
        totals = totals[totals["indicator"].isin(list(indicators))]
        return pd.DataFrame(
            {
                "area": totals["area"].to_numpy(dtype=object),
                "indicator": totals["indicator"].to_numpy(dtype=object),
                "group": np.array(
                    [self.groups.classify(i) for i in totals["indicator"]], dtype=object
                ),
                "value_2010": totals[FIRST_YEAR].to_numpy(dtype=float),
                "value_2022": totals[LATEST_YEAR].to_numpy(dtype=float),
            },
            columns=SCATTER_COLUMNS,
        )
