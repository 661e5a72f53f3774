from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Type

if TYPE_CHECKING:
    from fs_browser.core.projections import ViewProjections
    from fs_browser.core.selection_state import SelectionState

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


# -----------------------------------------------------------------------------
# Inbound: renderer -> coordinator
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PointClicked:
    area: str
    indicator: str


@dataclass(frozen=True)
class GroupClicked:
    group: str


@dataclass(frozen=True)
class BackgroundClicked:
    pass


@dataclass(frozen=True)
class DropdownChanged:
    """Dropdown value: either an indicator name or a country name."""
    value: str


# -----------------------------------------------------------------------------
# Outbound: coordinator -> renderers
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SelectionChanged:
    state: SelectionState


@dataclass(frozen=True, eq=False)
class ProjectionsReady:
    projections: ViewProjections


INBOUND_EVENTS = (PointClicked, GroupClicked, BackgroundClicked, DropdownChanged)


class EventBus:
    """
    Minimal synchronous publish/subscribe relay.

    Design Notes:
    - handlers are keyed by the exact event class; `publish` calls them in
      subscription order, on the caller's stack
    - a handler may publish again; nested events are delivered depth-first
    - handler exceptions propagate to whoever called `publish`
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[Any], List[Handler]] = {}
        self._taps: List[Handler] = []

    def subscribe(self, event_type: Type[Any], handler: Handler) -> Callable[[], None]:
        """
        Register `handler` for events of exactly `event_type`.
        :return: a callable that removes the subscription again
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Register a tap that sees every published event before typed handlers."""
        self._taps.append(handler)

        def unsubscribe() -> None:
            if handler in self._taps:
                self._taps.remove(handler)

        return unsubscribe

    def publish(self, event: Any) -> None:
        # Snapshot so (un)subscribing inside a handler doesn't affect this delivery
        taps = list(self._taps)
        handlers = list(self._handlers.get(type(event), ()))

        if not taps and not handlers:
            logger.debug("No subscribers for event", extra={"event": type(event).__name__})
            return

        for handler in taps:
            handler(event)
        for handler in handlers:
            handler(event)
