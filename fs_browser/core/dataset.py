from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from .exceptions import EmptyDatasetError, FsBrowserError

logger = logging.getLogger(__name__)

YEARS: Tuple[int, ...] = tuple(range(2010, 2023))
FIRST_YEAR = YEARS[0]
LATEST_YEAR = YEARS[-1]

# Food group value of the per-country aggregate row
TOTAL_FOOD_GROUP = "All food groups"

KEY_COLUMNS = ["area", "food_group", "indicator", "unit"]


def _as_float(value) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


@dataclass(frozen=True)
class Record:
    """
    One (area, food group, indicator) observation with its 2010-2022 series.

    `year_values` is normalised on construction to a read-only mapping over
    every configured year; missing or unparseable values are NaN.
    Records hash on (area, food_group, indicator, unit) so they can go into sets.
    """
    area: str
    food_group: str
    indicator: str
    unit: str = ""
    year_values: Mapping[int, float] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        normalised = {year: _as_float(self.year_values.get(year)) for year in YEARS}
        object.__setattr__(self, "year_values", MappingProxyType(normalised))

    @property
    def key(self) -> Tuple[str, str, str]:
        return self.area, self.food_group, self.indicator

    @property
    def is_country_total(self) -> bool:
        return self.food_group == TOTAL_FOOD_GROUP

    @property
    def latest_value(self) -> float:
        return self.year_values[LATEST_YEAR]

    def value(self, year: int) -> float:
        return self.year_values.get(year, math.nan)


class DatasetStore:
    """
    Write-once holder of the canonical record set.

    Includes:
    - Atomic load with validation and de-duplication
    - Lookup index keyed by (area, food_group, indicator)
    - A wide pandas frame (one row per record, one column per year) that the
      aggregation engine works on
    """

    def __init__(self) -> None:
        self._records: Tuple[Record, ...] = ()
        self._index: Dict[Tuple[str, str, str], Record] = {}
        self._frame: Optional[pd.DataFrame] = None

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------
    def load(self, records: Iterable[Record]) -> None:
        """
        Replace the (empty) store contents with the given records.

        Records with an empty area or indicator are dropped; duplicates of an
        already seen (area, food_group, indicator) key are dropped, first wins.

        Raises:
            FsBrowserError: if the store was already loaded
            EmptyDatasetError: if no usable records remain
        """
        if self.is_loaded:
            raise FsBrowserError("DatasetStore is write-once and already loaded")

        kept: List[Record] = []
        index: Dict[Tuple[str, str, str], Record] = {}
        n_invalid = 0
        n_duplicate = 0

        for record in records:
            if not record.area or not record.indicator:
                n_invalid += 1
                continue
            if record.key in index:
                n_duplicate += 1
                continue
            index[record.key] = record
            kept.append(record)

        if n_invalid or n_duplicate:
            logger.warning(
                "Dropped unusable records during load",
                extra={"n_invalid": n_invalid, "n_duplicate": n_duplicate},
            )

        if not kept:
            raise EmptyDatasetError("Dataset load produced zero usable records")

        self._records = tuple(kept)
        self._index = index
        self._frame = self._build_frame(self._records)

        logger.info(
            "Dataset loaded",
            extra={
                "n_records": len(kept),
                "n_areas": len(self.areas()),
                "n_indicators": len(self.indicators()),
            },
        )

    @staticmethod
    def _build_frame(records: Tuple[Record, ...]) -> pd.DataFrame:
        keys = pd.DataFrame(
            [[r.area, r.food_group, r.indicator, r.unit] for r in records],
            columns=KEY_COLUMNS,
        )
        values = pd.DataFrame(
            np.array([[r.year_values[y] for y in YEARS] for r in records], dtype=float),
            columns=list(YEARS),
        )
        frame = pd.concat([keys, values], axis=1)
        return frame

    # -------------------------------------------------------------------------
    # Read API
    # -------------------------------------------------------------------------
    @property
    def is_loaded(self) -> bool:
        return self._frame is not None

    def all_records(self) -> Tuple[Record, ...]:
        return self._records

    def find_record(
        self, area: str, indicator: str, food_group: str = TOTAL_FOOD_GROUP
    ) -> Optional[Record]:
        """Return the matching record, or None when the combination does not exist."""
        return self._index.get((area, food_group, indicator))

    def first_record(self) -> Optional[Record]:
        return self._records[0] if self._records else None

    def areas(self) -> List[str]:
        return sorted({r.area for r in self._records})

    def indicators(self) -> List[str]:
        return sorted({r.indicator for r in self._records})

    @property
    def frame(self) -> pd.DataFrame:
        """
        Wide frame with columns area, food_group, indicator, unit, 2010..2022.
        Callers get a copy so the canonical frame can't be mutated.
        """
        if self._frame is None:
            return pd.DataFrame(columns=KEY_COLUMNS + list(YEARS))
        return self._frame.copy()

    def __len__(self) -> int:
        return len(self._records)
