from __future__ import annotations

import plotly.graph_objects as go

from fs_browser.core.base_view import BaseView
from fs_browser.core.projections import ViewProjections
from fs_browser.core.selection_state import GroupFocus, PointFocus

POINT_LINE_COLOR = "#f28e2b"


class LineView(BaseView):
    """
    2010-2022 trend. Missing years are NaN in the projection and are drawn as gaps.
    """

    id = "line"
    label = "2010-2022 Trend"

    def render_figure(self, projections: ViewProjections) -> go.Figure:
        data = projections.time_series
        state = projections.state
        if data is None or data.empty or data["value"].isna().all():
            return self.empty_figure("No trend available for this selection")

        if isinstance(state, GroupFocus):
            color = self.group_color(state.group)
            title = f"Average 2010-2022 Trend (All Countries)<br><sup>{state.group}</sup>"
        else:
            color = POINT_LINE_COLOR
            subtitle = f"{state.indicator} - {state.area}" if isinstance(state, PointFocus) else ""
            title = f"2010-2022 Trend (All Food Groups)<br><sup>{subtitle}</sup>"

        fig = go.Figure(
            go.Scatter(
                x=data["year"],
                y=data["value"],
                mode="lines+markers",
                connectgaps=False,
                line={"color": color, "width": 2},
                marker={"size": 6, "color": color},
            )
        )
        fig.update_layout(
            title=title,
            margin=dict(l=60, r=20, t=60, b=40),
            xaxis={"tickvals": [2010, 2014, 2018, 2022]},
            yaxis={"rangemode": "tozero"},
        )
        return fig
