from __future__ import annotations

import math

import pytest

from fs_browser.core.dataset import LATEST_YEAR, TOTAL_FOOD_GROUP, YEARS, DatasetStore, Record
from fs_browser.core.exceptions import EmptyDatasetError, FsBrowserError


def _make_records():
    """
    Tiny dataset:
    - Testland: country total + two food groups for Protein supply
    - Otherland: country total for Protein supply
    """
    return [
        Record("Testland", TOTAL_FOOD_GROUP, "Protein supply", "g/cap/d", {2010: 10, 2022: 15}),
        Record("Testland", "Cereals", "Protein supply", "g/cap/d", {2022: 5}),
        Record("Testland", "Meat", "Protein supply", "g/cap/d", {2022: 7}),
        Record("Otherland", TOTAL_FOOD_GROUP, "Protein supply", "g/cap/d", {2010: 20, 2022: 25}),
        Record("Otherland", TOTAL_FOOD_GROUP, "Energy supply", "kcal/cap/d", {2022: 2500}),
    ]


def test_record_normalises_year_values():
    rec = Record("A", TOTAL_FOOD_GROUP, "Protein supply", "g", {2010: "12.5", 2011: "n/a", 2022: None, 1999: 3})

    assert list(rec.year_values) == list(YEARS)
    assert rec.value(2010) == 12.5
    assert math.isnan(rec.value(2011))
    assert math.isnan(rec.latest_value)
    # years outside the configured range are dropped
    assert math.isnan(rec.value(1999))
    assert rec.is_country_total
    assert rec.key == ("A", TOTAL_FOOD_GROUP, "Protein supply")


def test_record_year_values_are_read_only():
    rec = Record("A", "Cereals", "Protein supply", "g", {2010: 1})

    with pytest.raises(TypeError):
        rec.year_values[2010] = 2.0


def test_records_are_hashable():
    a = Record("A", TOTAL_FOOD_GROUP, "Protein supply", "g", {2010: 1, 2022: 2})
    same = Record("A", TOTAL_FOOD_GROUP, "Protein supply", "g", {2010: 1, 2022: 2})
    other = Record("B", TOTAL_FOOD_GROUP, "Protein supply", "g", {2010: 1, 2022: 2})

    assert hash(a) == hash(same)
    assert len({a, same, other}) == 2


def test_load_and_lookup():
    store = DatasetStore()
    assert not store.is_loaded

    store.load(_make_records())

    assert store.is_loaded
    assert len(store) == 5
    assert store.areas() == ["Otherland", "Testland"]
    assert store.indicators() == ["Energy supply", "Protein supply"]

    rec = store.find_record("Testland", "Protein supply")
    assert rec is not None
    assert rec.latest_value == 15

    meat = store.find_record("Testland", "Protein supply", "Meat")
    assert meat is not None and meat.latest_value == 7

    assert store.find_record("Testland", "Energy supply") is None
    assert store.find_record("Nowhere", "Protein supply") is None


def test_first_record_follows_input_order():
    store = DatasetStore()
    store.load(_make_records())

    first = store.first_record()
    assert (first.area, first.indicator) == ("Testland", "Protein supply")


def test_load_drops_invalid_and_duplicate_records():
    records = _make_records() + [
        Record("", TOTAL_FOOD_GROUP, "Protein supply", "g", {2022: 1}),
        Record("Testland", TOTAL_FOOD_GROUP, "", "g", {2022: 1}),
        # duplicate key -> first occurrence wins
        Record("Testland", TOTAL_FOOD_GROUP, "Protein supply", "g", {2022: 999}),
    ]
    store = DatasetStore()
    store.load(records)

    assert len(store) == 5
    assert store.find_record("Testland", "Protein supply").latest_value == 15


def test_load_empty_raises():
    with pytest.raises(EmptyDatasetError):
        DatasetStore().load([])


def test_load_only_invalid_raises():
    with pytest.raises(EmptyDatasetError):
        DatasetStore().load([Record("", TOTAL_FOOD_GROUP, "", "", {})])


def test_store_is_write_once():
    store = DatasetStore()
    store.load(_make_records())

    with pytest.raises(FsBrowserError):
        store.load(_make_records())


def test_frame_is_wide_and_a_copy():
    store = DatasetStore()
    store.load(_make_records())

    df = store.frame
    assert list(df.columns) == ["area", "food_group", "indicator", "unit"] + list(YEARS)
    assert len(df) == 5
    assert df.loc[0, LATEST_YEAR] == 15

    df.loc[0, LATEST_YEAR] = -1
    assert store.frame.loc[0, LATEST_YEAR] == 15


def test_frame_before_load_is_empty():
    df = DatasetStore().frame
    assert df.empty
    assert "area" in df.columns
