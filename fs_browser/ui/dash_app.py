from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from fs_browser.config.io import load_global_config
from fs_browser.core.coordinator import DashboardCoordinator
from fs_browser.core.nutrient_groups import NutrientGroups
from fs_browser.core.view_registry import ViewRegistry
from fs_browser.ui.callbacks import register_callbacks
from fs_browser.ui.context import AppContext
from fs_browser.ui.layout import build_layout

logger = logging.getLogger(__name__)


def _build_view_registry(groups: NutrientGroups) -> ViewRegistry:
    from fs_browser.views import BarView, DumbbellView, LineView, ScatterView

    registry = ViewRegistry(groups)
    registry.register(ScatterView)
    registry.register(BarView)
    registry.register(LineView)
    registry.register(DumbbellView)
    return registry


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load config
    global_config = load_global_config(config_root)

    # 2) Coordinator + dataset (EmptyDatasetError / DatasetFileError are fatal here)
    coordinator = DashboardCoordinator(groups=global_config.nutrient_groups)
    coordinator.load_csv(global_config.data_file)

    # 3) App context
    ctx = AppContext(
        global_config=global_config,
        coordinator=coordinator,
        registry=_build_view_registry(coordinator.groups),
    )

    app = Dash(__name__, external_stylesheets=[dbc.themes.FLATLY])
    app.title = global_config.ui_title
    app.layout = build_layout(ctx)

    register_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"config_root": str(config_root), "data_file": str(global_config.data_file)},
    )
    return app
