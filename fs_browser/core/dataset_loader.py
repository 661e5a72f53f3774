from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from fs_browser.core.dataset import YEARS, Record

logger = logging.getLogger(__name__)


class DatasetFileError(ValueError):
    """
    Raised when an input table is structurally unusable (missing columns, unreadable file).
    """
    pass


# Accepted header spellings -> Record field. First match wins.
COLUMN_ALIASES: Dict[str, List[str]] = {
    "area": ["Area"],
    "food_group": ["Food Group", "Item"],
    "indicator": ["Indicator", "Element"],
    "unit": ["Unit"],
}


def _year_column(year: int) -> str:
    return f"Y{year}"


def _resolve_columns(df: pd.DataFrame, source: str) -> Dict[str, str]:
    resolved: Dict[str, str] = {}
    for field_name, aliases in COLUMN_ALIASES.items():
        column = next((c for c in aliases if c in df.columns), None)
        if column is None:
            if field_name == "unit":
                continue
            msg = f"{source}: none of the columns {aliases} found for '{field_name}'"
            logger.error(msg, extra={"source": source, "columns": list(map(str, df.columns))})
            raise DatasetFileError(msg)
        resolved[field_name] = column
    return resolved


def records_from_frame(df: pd.DataFrame, source: str = "<frame>") -> List[Record]:
    """
    Map a raw FAOSTAT-style table (Area, Food Group/Item, Indicator/Element,
    Unit, Y2010..Y2022) into Records.

    - Year columns that are absent yield NaN for that year.
    - Unparseable numeric cells yield NaN, never a loader failure.
    """
    columns = _resolve_columns(df, source)
    df = df.reset_index(drop=True)

    missing_years = [y for y in YEARS if _year_column(y) not in df.columns]
    if missing_years:
        logger.warning(
            "Year columns missing from input; values will be NaN",
            extra={"source": source, "missing_years": missing_years},
        )

    values = pd.DataFrame(index=df.index)
    for year in YEARS:
        col = _year_column(year)
        values[year] = pd.to_numeric(df[col], errors="coerce") if col in df.columns else float("nan")

    def text(field_name: str) -> pd.Series:
        column = columns.get(field_name)
        if column is None:
            return pd.Series("", index=df.index)
        return df[column].fillna("").astype(str).str.strip()

    areas = text("area")
    food_groups = text("food_group")
    indicators = text("indicator")
    units = text("unit")

    records: List[Record] = []
    for idx in df.index:
        records.append(
            Record(
                area=areas[idx],
                food_group=food_groups[idx],
                indicator=indicators[idx],
                unit=units[idx],
                year_values={year: values.at[idx, year] for year in YEARS},
            )
        )
    return records


def read_food_supply_csv(path: Path) -> List[Record]:
    """
    Read a food-supply CSV from disk and map it into Records.
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetFileError(f"Data file not found at {path}.")

    logger.info("Reading food supply table", extra={"path": str(path)})
    df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    records = records_from_frame(df, source=str(path))

    logger.info(
        "Food supply table parsed",
        extra={"path": str(path), "n_rows": len(df), "n_records": len(records)},
    )
    return records
