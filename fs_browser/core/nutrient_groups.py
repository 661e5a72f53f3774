from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .exceptions import ConfigError, UnknownGroupError

logger = logging.getLogger(__name__)

OTHER_GROUP = "Other"

DEFAULT_NUTRIENT_GROUPS: Dict[str, List[str]] = {
    "Macronutrients": [
        "Energy supply",
        "Protein supply",
        "Fat supply",
        "Carbohydrate (available) supply",
        "Dietary fiber supply",
    ],
    "Vitamins": [
        "Vitamin A supply (retinol activity equivalents)",
        "Vitamin A supply (retinol equivalents)",
        "Thiamin supply",
        "Riboflavin supply",
        "Niacin supply",
        "Vitamin B6 supply",
        "Folate supply",
        "Vitamin B12 supply",
        "Vitamin C supply",
    ],
    "Minerals": [
        "Calcium supply",
        "Iron supply",
        "Magnesium supply",
        "Phosphorus supply",
        "Potassium supply",
        "Zinc supply",
    ],
    "Fatty acids": [
        "Total saturated fatty acids supply",
        "Total monounsaturated fatty acids supply",
        "Total polyunsaturated fatty acids supply",
    ],
    "Omega-3s": [
        "Total omega-3 fatty acids supply",
        "Alpha-linolenic acid supply",
        "Eicosapentaenoic acid supply",
        "Docosahexaenoic acid supply",
    ],
}

# Applied in order; later entries may act on the output of earlier ones.
# Each replaces the first occurrence only.
SHORT_NAME_SUBSTITUTIONS: Tuple[Tuple[str, str], ...] = (
    (" supply", ""),
    (" (retinol activity equivalents)", " (RAE)"),
    (" (retinol equivalents)", " (RE)"),
    ("Total ", ""),
    (" fatty acids", ""),
    ("Eicosapentaenoic acid", "EPA"),
    ("Docosahexaenoic acid", "DHA"),
    ("Carbohydrate (available)", "Carbohydrates"),
)


def short_name(indicator: str) -> str:
    """Compact axis label for an indicator name, e.g. 'Vitamin A supply (retinol equivalents)' -> 'Vitamin A (RE)'."""
    name = indicator
    for old, new in SHORT_NAME_SUBSTITUTIONS:
        name = name.replace(old, new, 1)
    return name


class NutrientGroups:
    """
    Static mapping of nutrient group name -> indicator names.

    Invariants:
    - group order is the declaration order (drives legend / button order)
    - an indicator belongs to at most one group
    - indicators matching no group classify as 'Other'
    """

    def __init__(self, groups: Optional[Mapping[str, Sequence[str]]] = None):
        raw = DEFAULT_NUTRIENT_GROUPS if groups is None else groups

        self._groups: Dict[str, Tuple[str, ...]] = {}
        self._group_by_indicator: Dict[str, str] = {}

        for name, indicators in raw.items():
            if isinstance(indicators, str) or not isinstance(indicators, Iterable):
                raise ConfigError(f"Nutrient group '{name}' must list indicator names")

            name = str(name)
            listed = [str(i) for i in indicators]
            # repeats within a group collapse to the first listing
            members = tuple(dict.fromkeys(listed))
            if len(members) != len(listed):
                logger.warning(
                    "Duplicate indicators in nutrient group collapsed",
                    extra={"group": name, "n_listed": len(listed), "n_unique": len(members)},
                )

            for indicator in members:
                owner = self._group_by_indicator.get(indicator)
                if owner is not None:
                    raise ConfigError(
                        f"Indicator '{indicator}' is listed in both '{owner}' and '{name}'"
                    )
                self._group_by_indicator[indicator] = name
            self._groups[name] = members

    @property
    def names(self) -> List[str]:
        return list(self._groups)

    def __contains__(self, group: object) -> bool:
        return group in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def indicators(self, group: str) -> Tuple[str, ...]:
        """
        Indicators configured for a group.

        Raises:
            UnknownGroupError: if the group is not configured
        """
        try:
            return self._groups[group]
        except KeyError:
            raise UnknownGroupError(group) from None

    def group_of(self, indicator: str) -> Optional[str]:
        """Configured group for an indicator, or None when it belongs to none."""
        return self._group_by_indicator.get(indicator)

    def classify(self, indicator: str) -> str:
        return self._group_by_indicator.get(indicator, OTHER_GROUP)

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: list(members) for name, members in self._groups.items()}
