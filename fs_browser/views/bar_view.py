from __future__ import annotations

import plotly.graph_objects as go

from fs_browser.core.base_view import BaseView
from fs_browser.core.projections import BARS_GROUP_AVERAGE, ViewProjections
from fs_browser.core.selection_state import GroupFocus, PointFocus

BAR_COLOR = "#4e79a7"


class BarView(BaseView):
    """
    Ranked horizontal bars: 2022 supply by food group for the focused point,
    or the cross-country average per indicator for a focused nutrient group.
    """

    id = "bar"
    label = "2022 Supply Ranking"

    def render_figure(self, projections: ViewProjections) -> go.Figure:
        data = projections.ranked_bars
        state = projections.state
        if data is None or data.empty:
            return self.empty_figure("No breakdown available for this selection")

        if projections.bars_mode == BARS_GROUP_AVERAGE and isinstance(state, GroupFocus):
            labels = data["indicator"]
            color = self.group_color(state.group)
            title = "Average 2022 Supply by Nutrient (All Countries)"
            subtitle = state.group
        else:
            labels = data["food_group"]
            color = BAR_COLOR
            title = "2022 Supply by Food Group"
            subtitle = f"{state.indicator} - {state.area}" if isinstance(state, PointFocus) else ""

        fig = go.Figure(
            go.Bar(
                x=data["value"],
                y=labels,
                orientation="h",
                marker_color=color,
            )
        )
        fig.update_layout(
            title=f"{title}<br><sup>{subtitle}</sup>",
            margin=dict(l=160, r=20, t=60, b=40),
            yaxis={"autorange": "reversed"},
        )
        return fig
