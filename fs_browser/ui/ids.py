from __future__ import annotations

__all__ = ["IDs", "group_button_id", "graph_id"]


class IDs:
    class Control:
        INDICATOR_SELECT = "indicator-select"
        COUNTRY_SELECT = "country-select"
        CLEAR_BTN = "clear-btn"
        STATUS_BAR = "status-bar"

    class Pattern:
        # pattern-matching "type" strings
        GROUP_BUTTON = "group-button"
        GRAPH = "view-graph"


def group_button_id(group: str) -> dict:
    return {"type": IDs.Pattern.GROUP_BUTTON, "index": group}


def graph_id(view_id: str) -> dict:
    return {"type": IDs.Pattern.GRAPH, "index": view_id}
