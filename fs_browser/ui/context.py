from __future__ import annotations

from dataclasses import dataclass

from fs_browser.config.model import GlobalConfig
from fs_browser.core.coordinator import DashboardCoordinator
from fs_browser.core.view_registry import ViewRegistry


@dataclass
class AppContext:
    """
    Holds shared state for the Dash app: config, the coordinator and the view
    registry. This is passed into layout + callback registration functions
    instead of using module-level globals.
    """
    global_config: GlobalConfig
    coordinator: DashboardCoordinator
    registry: ViewRegistry
