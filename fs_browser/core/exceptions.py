class FsBrowserError(Exception):
    """Base exception for all fs_browser errors"""
    pass

class ConfigError(FsBrowserError):
    """Invalid or inconsistent global.json / nutrient group config"""
    pass

class EmptyDatasetError(FsBrowserError):
    """
    Load produced zero usable records.
    Fatal to dashboard startup.
    """
    pass

class UnknownGroupError(FsBrowserError):
    """An interaction or query references a nutrient group absent from config"""

    def __init__(self, group: str):
        self.group = group
        super().__init__(f"Unknown nutrient group '{group}'")

class NotReadyError(FsBrowserError):
    """An interaction event arrived before the dataset load completed"""
    pass

class MissingRecordError(FsBrowserError):
    """A requested area/indicator/food group combination does not exist"""

    def __init__(self, area: str, indicator: str, food_group: str):
        self.area = area
        self.indicator = indicator
        self.food_group = food_group
        super().__init__(
            f"No record for area='{area}', indicator='{indicator}', food_group='{food_group}'"
        )
