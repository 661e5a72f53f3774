from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from fs_browser.core.base_view import BaseView
from fs_browser.ui.context import AppContext
from fs_browser.ui.ids import IDs, graph_id, group_button_id


def _build_controls(ctx: AppContext) -> dbc.Card:
    store = ctx.coordinator.store
    focus = ctx.coordinator.focused_point()

    group_buttons = [
        dbc.Button(group, id=group_button_id(group), color="secondary", outline=True, size="sm")
        for group in ctx.coordinator.groups.names
    ]

    return dbc.Card(
        dbc.CardBody(
            dbc.Row(
                [
                    dbc.Col(
                        [
                            dbc.Label("Indicator"),
                            dcc.Dropdown(
                                id=IDs.Control.INDICATOR_SELECT,
                                options=[{"label": i, "value": i} for i in store.indicators()],
                                value=focus.indicator if focus else None,
                                clearable=False,
                            ),
                        ],
                        md=4,
                    ),
                    dbc.Col(
                        [
                            dbc.Label("Country"),
                            dcc.Dropdown(
                                id=IDs.Control.COUNTRY_SELECT,
                                options=[{"label": a, "value": a} for a in store.areas()],
                                value=focus.area if focus else None,
                                clearable=False,
                            ),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        [
                            dbc.Label("Nutrient group"),
                            html.Div(
                                [
                                    dbc.ButtonGroup(group_buttons, size="sm"),
                                    dbc.Button(
                                        "Clear",
                                        id=IDs.Control.CLEAR_BTN,
                                        color="link",
                                        size="sm",
                                        className="ms-2",
                                    ),
                                ],
                                className="d-flex align-items-center",
                            ),
                        ],
                        md=5,
                    ),
                ]
            ),
            className="p-2",
        ),
        className="mb-3",
    )


def _build_graph_card(view: BaseView) -> dbc.Col:
    return dbc.Col(
        dbc.Card(
            [
                dbc.CardHeader(html.Strong(view.label), className="p-2"),
                dbc.CardBody(
                    dcc.Graph(
                        id=graph_id(view.id),
                        style={"height": "380px"},
                        config={"responsive": True},
                    )
                ),
            ]
        ),
        md=6,
        className="mb-3",
    )


def build_layout(ctx: AppContext) -> dbc.Container:
    cards = [_build_graph_card(view) for view in ctx.registry.views()]

    return dbc.Container(
        [
            html.H3(ctx.global_config.ui_title, className="my-3"),
            _build_controls(ctx),
            html.Div(id=IDs.Control.STATUS_BAR, className="mb-2 text-muted"),
            dbc.Row(cards),
        ],
        fluid=True,
    )
