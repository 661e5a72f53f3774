from __future__ import annotations

import math

import plotly.graph_objects as go

from fs_browser.core.base_view import BaseView
from fs_browser.core.nutrient_groups import short_name
from fs_browser.core.projections import ViewProjections
from fs_browser.core.selection_state import GroupFocus, PointFocus


class ScatterView(BaseView):
    """
    2010 vs 2022 supply, one marker per country total.

    - PointFocus: every country for the focused indicator, the focused country enlarged
    - GroupFocus: every country for each indicator of the group, one trace per indicator
    - customdata carries (area, indicator) for click handling
    """

    id = "scatter"
    label = "2010 vs 2022 Supply"

    def render_figure(self, projections: ViewProjections) -> go.Figure:
        data = projections.scatter_points
        if data is None or data.empty:
            return self.empty_figure("No data loaded")

        state = projections.state
        by_indicator = isinstance(state, GroupFocus)
        fig = go.Figure()

        for key, rows in data.groupby("indicator" if by_indicator else "group", sort=False):
            sizes = [
                12 if isinstance(state, PointFocus)
                and (area, indicator) == (state.area, state.indicator)
                else 6
                for area, indicator in zip(rows["area"], rows["indicator"])
            ]
            marker = {"size": sizes, "opacity": 0.8}
            if not by_indicator:
                marker["color"] = self.group_color(key)

            fig.add_trace(
                go.Scatter(
                    x=rows["value_2010"],
                    y=rows["value_2022"],
                    mode="markers",
                    name=short_name(key) if by_indicator else key,
                    marker=marker,
                    customdata=rows[["area", "indicator"]].to_numpy(),
                    hovertemplate="%{customdata[0]}<br>%{customdata[1]}"
                                  "<br>2010: %{x}<br>2022: %{y}<extra></extra>",
                )
            )

        max_val = float(data[["value_2010", "value_2022"]].max().max())
        if not math.isnan(max_val):
            fig.add_shape(
                type="line", x0=0, y0=0, x1=max_val, y1=max_val,
                line={"color": "#999", "dash": "dash"},
            )

        if isinstance(state, PointFocus):
            title = f"{state.indicator}: 2010 vs 2022"
        elif by_indicator:
            title = f"{state.group}: 2010 vs 2022"
        else:
            title = None

        fig.update_layout(
            title=title,
            margin=dict(l=60, r=20, t=40, b=50),
            xaxis_title="2010 Supply Value",
            yaxis_title="2022 Supply Value",
            legend_title="Indicator" if by_indicator else "Nutrient group",
            clickmode="event",
        )
        return fig
