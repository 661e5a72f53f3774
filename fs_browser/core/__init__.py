"""
Core domain layer: dataset store, aggregation engine, selection state
machine, projection builder, event bus and the coordinator wiring them
"""

from .aggregation import AggregationEngine
from .coordinator import DashboardCoordinator
from .dataset import DatasetStore, Record
from .events import EventBus
from .nutrient_groups import NutrientGroups
from .projections import ProjectionBuilder, ViewProjections
from .selection_state import EMPTY, GroupFocus, PointFocus, SelectionStateMachine

__all__ = [
    "AggregationEngine",
    "DashboardCoordinator",
    "DatasetStore",
    "Record",
    "EventBus",
    "NutrientGroups",
    "ProjectionBuilder",
    "ViewProjections",
    "EMPTY",
    "GroupFocus",
    "PointFocus",
    "SelectionStateMachine",
]
