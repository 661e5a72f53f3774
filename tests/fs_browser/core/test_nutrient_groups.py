from __future__ import annotations

import pytest

from fs_browser.core.exceptions import ConfigError, UnknownGroupError
from fs_browser.core.nutrient_groups import OTHER_GROUP, NutrientGroups, short_name


def test_default_groups():
    groups = NutrientGroups()

    assert groups.names == ["Macronutrients", "Vitamins", "Minerals", "Fatty acids", "Omega-3s"]
    assert "Protein supply" in groups.indicators("Macronutrients")
    assert groups.group_of("Protein supply") == "Macronutrients"
    assert groups.classify("Iron supply") == "Minerals"


def test_unlisted_indicator_is_other():
    groups = NutrientGroups()

    assert groups.group_of("Alcohol supply") is None
    assert groups.classify("Alcohol supply") == OTHER_GROUP


def test_unknown_group_raises():
    with pytest.raises(UnknownGroupError) as exc:
        NutrientGroups().indicators("Sugars")
    assert exc.value.group == "Sugars"


def test_indicator_in_two_groups_is_rejected():
    with pytest.raises(ConfigError):
        NutrientGroups({"A": ["Iron supply"], "B": ["Iron supply"]})


def test_group_members_must_be_a_list():
    with pytest.raises(ConfigError):
        NutrientGroups({"A": "Iron supply"})


def test_repeated_indicator_in_one_group_is_listed_once():
    groups = NutrientGroups({"Minerals": ["Iron supply", "Zinc supply", "Iron supply"]})

    assert groups.indicators("Minerals") == ("Iron supply", "Zinc supply")
    assert groups.group_of("Iron supply") == "Minerals"


def test_custom_groups_replace_defaults():
    groups = NutrientGroups({"Only": ["X", "Y"]})

    assert groups.names == ["Only"]
    assert "Macronutrients" not in groups
    assert groups.to_dict() == {"Only": ["X", "Y"]}


@pytest.mark.parametrize(
    "indicator, expected",
    [
        ("Protein supply", "Protein"),
        ("Vitamin A supply (retinol activity equivalents)", "Vitamin A (RAE)"),
        ("Vitamin A supply (retinol equivalents)", "Vitamin A (RE)"),
        ("Total omega-3 fatty acids supply", "omega-3"),
        ("Total saturated fatty acids supply", "saturated"),
        ("Eicosapentaenoic acid supply", "EPA"),
        ("Docosahexaenoic acid supply", "DHA"),
        ("Carbohydrate (available) supply", "Carbohydrates"),
        ("Something else", "Something else"),
    ],
)
def test_short_name(indicator, expected):
    assert short_name(indicator) == expected


def test_short_name_replaces_first_occurrence_only():
    assert short_name("Iron supply supply") == "Iron supply"
