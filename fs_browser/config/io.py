from __future__ import annotations

import json
import logging
from pathlib import Path

from fs_browser.config.model import GlobalConfig
from fs_browser.core.exceptions import ConfigError
from fs_browser.core.nutrient_groups import NutrientGroups

logger = logging.getLogger(__name__)

DEFAULT_UI_TITLE = "Food Supply Explorer"
DEFAULT_DATA_FILE = "data/FoodSupply.csv"


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a config directory.

    Expected structure:

        root/
            global.json

    global.json keys:

    - ui_title: title for UI, defaults to 'Food Supply Explorer'
    - data_file: food supply CSV; relative paths are resolved against 'root'
    - nutrient_groups: optional {group: [indicator, ...]} replacing the built-in groups

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if global.json is not valid JSON or the groups are malformed.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    # Resolve data_file properly:
    # - Absolute paths are used as-is.
    # - Relative paths are resolved relative to the config root directory.
    data_file = Path(raw.get("data_file", DEFAULT_DATA_FILE))
    if not data_file.is_absolute():
        data_file = (root / data_file).resolve()

    raw_groups = raw.get("nutrient_groups")
    if raw_groups is None:
        groups = NutrientGroups()
    elif isinstance(raw_groups, dict):
        groups = NutrientGroups(raw_groups)
    else:
        raise ConfigError("'nutrient_groups' must map group names to indicator lists")

    cfg = GlobalConfig(
        ui_title=raw.get("ui_title", DEFAULT_UI_TITLE),
        data_file=data_file,
        nutrient_groups=groups,
        raw=raw,
    )

    logger.info(
        "Global config loaded",
        extra={"data_file": str(cfg.data_file), "nutrient_groups": groups.names},
    )
    return cfg
