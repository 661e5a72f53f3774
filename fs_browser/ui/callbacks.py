from __future__ import annotations

import logging
from typing import Any, List, Optional

import dash
import plotly.graph_objs as go
from dash import ALL, Input, Output, html

from fs_browser.core.events import BackgroundClicked, DropdownChanged, GroupClicked, PointClicked
from fs_browser.core.projections import ViewProjections
from fs_browser.core.selection_state import GroupFocus, PointFocus
from fs_browser.ui.context import AppContext
from fs_browser.ui.ids import IDs

logger = logging.getLogger(__name__)

# Views whose points carry (area, indicator) customdata
CLICKABLE_VIEWS = {"scatter", "dumbbell"}


def _clicked_point(click_data: Optional[dict]) -> Optional[PointClicked]:
    if not click_data:
        return None
    points = click_data.get("points") or []
    if not points:
        return None
    custom = points[0].get("customdata")
    if not custom or len(custom) < 2:
        return None
    return PointClicked(area=str(custom[0]), indicator=str(custom[1]))


def event_from_trigger(triggered_id: Any, inputs: dict[str, Any]) -> Optional[Any]:
    """
    Pure helper translating the Dash input that fired into an inbound event.

    `inputs` carries:
    - "indicator", "country": dropdown values
    - "clicks": {view_id: clickData}
    Returns None when the trigger maps to no event (initial render, non-clickable views).
    """
    if triggered_id is None:
        return None

    if triggered_id == IDs.Control.INDICATOR_SELECT:
        value = inputs.get("indicator")
        return DropdownChanged(value) if value else None

    if triggered_id == IDs.Control.COUNTRY_SELECT:
        value = inputs.get("country")
        return DropdownChanged(value) if value else None

    if triggered_id == IDs.Control.CLEAR_BTN:
        return BackgroundClicked()

    if isinstance(triggered_id, dict):
        kind = triggered_id.get("type")
        index = triggered_id.get("index")
        if kind == IDs.Pattern.GROUP_BUTTON:
            return GroupClicked(index)
        if kind == IDs.Pattern.GRAPH and index in CLICKABLE_VIEWS:
            return _clicked_point(inputs.get("clicks", {}).get(index))

    return None


def render_all(ctx: AppContext, projections: ViewProjections) -> List[go.Figure]:
    figures = []
    for view in ctx.registry.views():
        try:
            figures.append(view.render_figure(projections))
        except Exception:
            logger.exception("Failed to render view", extra={"view_id": view.id})
            figures.append(view.empty_figure("Something went wrong while rendering this view."))
    return figures


def _status(projections: ViewProjections) -> html.Span:
    state = projections.state
    if isinstance(state, PointFocus):
        return html.Span([html.Strong("Focus: "), f"{state.indicator} • {state.area}"])
    if isinstance(state, GroupFocus):
        return html.Span([html.Strong("Group filter: "), state.group])
    return html.Span([html.Strong("Status: "), "No data loaded"])


def dropdown_values(focus: Optional[PointFocus]) -> tuple:
    """(indicator, country) dropdown values for a focus; no_update for both when there is none."""
    if focus is None:
        return dash.no_update, dash.no_update
    return focus.indicator, focus.area


def register_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    view_ids = ctx.registry.ids()

    # ---------------------------------------------------------
    # UI interaction -> event bus -> projections -> figures
    # (dropdowns are both inputs and outputs so they follow point clicks)
    # ---------------------------------------------------------
    @app.callback(
        Output({"type": IDs.Pattern.GRAPH, "index": ALL}, "figure"),
        Output(IDs.Control.STATUS_BAR, "children"),
        Output(IDs.Control.INDICATOR_SELECT, "value"),
        Output(IDs.Control.COUNTRY_SELECT, "value"),
        Input(IDs.Control.INDICATOR_SELECT, "value"),
        Input(IDs.Control.COUNTRY_SELECT, "value"),
        Input(IDs.Control.CLEAR_BTN, "n_clicks"),
        Input({"type": IDs.Pattern.GROUP_BUTTON, "index": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.GRAPH, "index": ALL}, "clickData"),
    )
    def relay_interaction(indicator, country, _clear, _group_clicks, click_data):
        inputs = {
            "indicator": indicator,
            "country": country,
            "clicks": dict(zip(view_ids, click_data or [])),
        }
        event = event_from_trigger(dash.ctx.triggered_id, inputs)
        if event is not None:
            logger.info("UI event", extra={"event": repr(event)})
            ctx.coordinator.bus.publish(event)

        projections = ctx.coordinator.projections()
        indicator_value, country_value = dropdown_values(ctx.coordinator.focused_point())
        return render_all(ctx, projections), _status(projections), indicator_value, country_value
