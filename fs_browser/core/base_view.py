from __future__ import annotations

from abc import ABC, abstractmethod

import plotly.graph_objs as go

from .nutrient_groups import NutrientGroups
from .projections import ViewProjections


class BaseView(ABC):
    """
    Abstract base class for all chart views.

    Views are thin renderers: they never query the dataset, they only turn the
    coordinator's ViewProjections into a figure.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally (graph ids, registry keys)
    - expose a 'label' - used for UI/human-readable applications
    - implement 'render_figure' - build the Plotly figure for the given projections
    """

    id: str = None
    label: str = None

    def __init__(self, groups: NutrientGroups):
        self.groups = groups

    @abstractmethod
    def render_figure(self, projections: ViewProjections) -> go.Figure:
        """
        Render the figure for the current projections
        :param projections: the {@link ViewProjections} for the current selection
        :return: the Plotly figure
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def group_color(self, group: str) -> str:
        """Stable colour per nutrient group (declaration order), grey for 'Other'."""
        names = self.groups.names
        if group not in names:
            return OTHER_COLOR
        return GROUP_PALETTE[names.index(group) % len(GROUP_PALETTE)]

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig


# Tableau 10
GROUP_PALETTE = [
    "#4e79a7", "#f28e2b", "#e15759", "#76b7b2", "#59a14f",
    "#edc948", "#b07aa1", "#ff9da7", "#9c755f", "#bab0ac",
]
OTHER_COLOR = "#9e9e9e"
