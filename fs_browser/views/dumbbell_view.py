from __future__ import annotations

import plotly.graph_objects as go

from fs_browser.core.base_view import BaseView
from fs_browser.core.projections import ViewProjections
from fs_browser.core.selection_state import PointFocus

DIRECTION_COLORS = {
    "increase": "#2e7d32",
    "decrease": "#c62828",
    "neutral": "#757575",
}
DOT_2010_COLOR = "#888"


class DumbbellView(BaseView):
    """
    2010 -> 2022 change per indicator of the focused point's nutrient group,
    for the focused country. Each row is clickable (customdata = area, indicator).
    """

    id = "dumbbell"
    label = "Nutrient Group Breakdown"

    def render_figure(self, projections: ViewProjections) -> go.Figure:
        data = projections.paired_comparison
        if data is None or data.empty:
            return self.empty_figure("Select a point to see its nutrient group breakdown")

        fig = go.Figure()

        for row in data.itertuples(index=False):
            color = DIRECTION_COLORS.get(row.direction, DIRECTION_COLORS["neutral"])
            fig.add_trace(
                go.Scatter(
                    x=[row.value_2010, row.value_2022],
                    y=[row.short_name, row.short_name],
                    mode="lines",
                    line={"color": color, "width": 3},
                    opacity=0.7,
                    hoverinfo="skip",
                    showlegend=False,
                )
            )

        customdata = data[["area", "indicator"]].to_numpy()
        hover = (
            "%{customdata[1]}<br>2010: %{text}<br>2022: %{x:.1f}<extra></extra>"
        )
        fig.add_trace(
            go.Scatter(
                x=data["value_2010"],
                y=data["short_name"],
                mode="markers",
                name="2010",
                marker={"color": DOT_2010_COLOR, "size": 11},
                customdata=customdata,
                hoverinfo="skip",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=data["value_2022"],
                y=data["short_name"],
                mode="markers",
                name="2022",
                marker={
                    "color": [DIRECTION_COLORS.get(d, DIRECTION_COLORS["neutral"]) for d in data["direction"]],
                    "size": 11,
                },
                customdata=customdata,
                text=[f"{v:.1f}" for v in data["value_2010"]],
                hovertemplate=hover,
            )
        )

        state = projections.state
        area = state.area if isinstance(state, PointFocus) else ""
        fig.update_layout(
            title=f"{projections.group} Breakdown<br><sup>{area}</sup>",
            margin=dict(l=160, r=20, t=60, b=40),
            yaxis={"autorange": "reversed"},
            showlegend=False,
        )
        return fig
