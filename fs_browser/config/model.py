from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from fs_browser.core.nutrient_groups import NutrientGroups


@dataclass
class GlobalConfig:
    """
    Parsed global.json.

    - ui_title: title for the Dash page
    - data_file: resolved path of the food supply CSV
    - nutrient_groups: group -> indicator config (built-in defaults unless overridden)
    - raw: the untouched JSON, for keys only the UI cares about
    """
    ui_title: str
    data_file: Path
    nutrient_groups: NutrientGroups = field(default_factory=NutrientGroups)
    raw: Dict[str, Any] = field(default_factory=dict)
