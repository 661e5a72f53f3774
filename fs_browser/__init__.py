"""
Top-level package for the food-supply browser.

This package exposes the coordinator core (dataset, aggregation, selection,
projections, event bus) plus thin rendering adapters.
Most code should import from submodules such as:
    fs_browser.core
    fs_browser.views
    fs_browser.ui
"""

__all__: list[str] = []
