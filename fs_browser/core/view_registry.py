from __future__ import annotations
from typing import Dict, List, Type

from .base_view import BaseView
from .nutrient_groups import NutrientGroups


class ViewRegistry:
    """
    Ordered set of dashboard views, each built once against the nutrient group config

    The layout creates one graph panel per registered view and the relay callback renders
    every view from the same ViewProjections, so all panels always show one selection.

    Invariants:
        * only {@link BaseView} subclasses can be registered
        * each view 'id' is unique across the registry
        * iteration follows registration order (panel order on the page)
    """

    def __init__(self, groups: NutrientGroups):
        self.groups = groups
        self._views: Dict[str, BaseView] = {}

    def register(self, view_cls: Type[BaseView]) -> BaseView:
        """
        Instantiate and register a view

        Raises:
            TypeError: if view_cls is not a subclass of {@link BaseView}
            ValueError: if a view with same 'id' already exists
        """
        if not isinstance(view_cls, type) or not issubclass(view_cls, BaseView):
            raise TypeError(f"View '{getattr(view_cls, 'id', view_cls)}' must be a subclass of BaseView")

        if view_cls.id in self._views:
            raise ValueError(f"View '{view_cls.id}' already registered")

        view = view_cls(self.groups)
        self._views[view_cls.id] = view
        return view

    def get(self, view_id: str) -> BaseView:
        try:
            return self._views[view_id]
        except KeyError:
            raise KeyError(f"View '{view_id}' not found") from None

    def ids(self) -> List[str]:
        return list(self._views)

    def views(self) -> List[BaseView]:
        return list(self._views.values())

    def __len__(self) -> int:
        return len(self._views)
