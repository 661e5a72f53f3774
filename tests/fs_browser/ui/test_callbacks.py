from __future__ import annotations

import json

import plotly.graph_objs as go
from dash import Dash, no_update

from fs_browser.config.model import GlobalConfig
from fs_browser.core.coordinator import DashboardCoordinator
from fs_browser.core.dataset import TOTAL_FOOD_GROUP, Record
from fs_browser.core.events import BackgroundClicked, DropdownChanged, GroupClicked, PointClicked
from fs_browser.core.selection_state import PointFocus
from fs_browser.core.view_registry import ViewRegistry
from fs_browser.ui.callbacks import dropdown_values, event_from_trigger, register_callbacks, render_all
from fs_browser.ui.context import AppContext
from fs_browser.ui.dash_app import create_dash_app
from fs_browser.ui.ids import IDs, graph_id, group_button_id
from fs_browser.views import BarView, DumbbellView, LineView, ScatterView


def _make_ctx(tmp_path) -> AppContext:
    coordinator = DashboardCoordinator()
    coordinator.load(
        [
            Record("Testland", TOTAL_FOOD_GROUP, "Protein supply", "g/cap/d", {2010: 10, 2022: 15}),
            Record("Testland", "Cereals", "Protein supply", "g/cap/d", {2022: 6}),
        ]
    )
    registry = ViewRegistry(coordinator.groups)
    for cls in (ScatterView, BarView, LineView, DumbbellView):
        registry.register(cls)
    return AppContext(
        global_config=GlobalConfig(ui_title="Test", data_file=tmp_path / "x.csv"),
        coordinator=coordinator,
        registry=registry,
    )


def test_initial_render_has_no_event():
    assert event_from_trigger(None, {}) is None


def test_dropdowns_map_to_dropdown_changed():
    inputs = {"indicator": "Iron supply", "country": "Testland"}

    assert event_from_trigger(IDs.Control.INDICATOR_SELECT, inputs) == DropdownChanged("Iron supply")
    assert event_from_trigger(IDs.Control.COUNTRY_SELECT, inputs) == DropdownChanged("Testland")
    assert event_from_trigger(IDs.Control.COUNTRY_SELECT, {"country": None}) is None


def test_clear_button_maps_to_background_click():
    assert event_from_trigger(IDs.Control.CLEAR_BTN, {}) == BackgroundClicked()


def test_group_button_maps_to_group_click():
    assert event_from_trigger(group_button_id("Vitamins"), {}) == GroupClicked("Vitamins")


def test_graph_clicks_map_to_point_click():
    click = {"points": [{"x": 10, "y": 15, "customdata": ["Testland", "Protein supply"]}]}
    inputs = {"clicks": {"scatter": click, "bar": click}}

    assert event_from_trigger(graph_id("scatter"), inputs) == PointClicked("Testland", "Protein supply")
    # bar clicks carry no point identity
    assert event_from_trigger(graph_id("bar"), inputs) is None
    assert event_from_trigger(graph_id("dumbbell"), {"clicks": {"dumbbell": {"points": []}}}) is None


def test_render_all_returns_one_figure_per_view(tmp_path):
    ctx = _make_ctx(tmp_path)

    figures = render_all(ctx, ctx.coordinator.projections())

    assert len(figures) == 4
    assert all(isinstance(f, go.Figure) for f in figures)


def test_dropdown_values_follow_focus():
    assert dropdown_values(PointFocus("Testland", "Protein supply")) == ("Protein supply", "Testland")
    assert dropdown_values(None) == (no_update, no_update)


def test_relay_callback_drives_dropdowns(tmp_path):
    app = Dash(__name__)
    register_callbacks(app, _make_ctx(tmp_path))

    (outputs,) = app.callback_map.keys()
    assert f"{IDs.Control.INDICATOR_SELECT}.value" in outputs
    assert f"{IDs.Control.COUNTRY_SELECT}.value" in outputs
    assert f"{IDs.Control.STATUS_BAR}.children" in outputs


def test_create_dash_app(tmp_path):
    data = tmp_path / "FoodSupply.csv"
    data.write_text(
        "Area,Food Group,Indicator,Unit,Y2010,Y2022\n"
        "Testland,All food groups,Protein supply,g/cap/d,10,15\n",
        encoding="utf-8",
    )
    (tmp_path / "global.json").write_text(
        json.dumps({"ui_title": "Test Explorer", "data_file": "FoodSupply.csv"}),
        encoding="utf-8",
    )

    app = create_dash_app(tmp_path)

    assert isinstance(app, Dash)
    assert app.title == "Test Explorer"
