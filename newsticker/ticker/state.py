"""
Ticker State

Process-local state of one ticker widget and its transitions. Nothing in this
module touches the network, the cache or a display surface; the rendering
adapter subscribes to the events emitted here.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from newsticker.common.error_handler import safe_execute
from newsticker.models import Headline, ServiceOption, SERVICE_CYCLE

logger = logging.getLogger(__name__)


class TickerEvent(Enum):
    """State changes a rendering adapter can react to."""
    HEADLINES_CHANGED = "headlines_changed"
    SERVICE_CHANGED = "service_changed"
    VISIBILITY_CHANGED = "visibility_changed"
    PAUSE_CHANGED = "pause_changed"
    OFFLINE_CHANGED = "offline_changed"
    POSITION_CHANGED = "position_changed"
    DIRECTION_CHANGED = "direction_changed"


class Activation(Enum):
    """Outcome of a click on the service button."""
    VISIBILITY_TOGGLED = "visibility_toggled"
    SERVICE_ADVANCED = "service_advanced"


Listener = Callable[['TickerState', TickerEvent], None]


@dataclass
class TickerState:
    """State of a single ticker widget instance."""
    headlines: List[Headline] = field(default_factory=list)
    current_service_index: int = 0
    is_paused: bool = False
    offline_mode: bool = False
    current_position: float = 0.0
    visibility_hidden: bool = False
    direction: str = 'ltr'
    last_update: Optional[int] = None
    service_cycle: Tuple[ServiceOption, ...] = SERVICE_CYCLE
    _listeners: List[Listener] = field(default_factory=list, repr=False, compare=False)

    @property
    def current_option(self) -> ServiceOption:
        return self.service_cycle[self.current_service_index]

    @property
    def current_service(self) -> str:
        return self.current_option.service

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, event: TickerEvent) -> None:
        for listener in list(self._listeners):
            safe_execute(
                lambda: listener(self, event),
                f"Ticker listener failed on {event.value}",
                logger,
            )

    def replace_headlines(self, headlines: Sequence[Headline], max_headlines: int) -> None:
        """Replace the headline list, truncated to max_headlines, keeping order."""
        self.headlines = list(headlines)[:max_headlines]
        self.notify(TickerEvent.HEADLINES_CHANGED)

    def advance_service(self) -> ServiceOption:
        """Move to the next service in the fixed cycle."""
        self.current_service_index = (self.current_service_index + 1) % len(self.service_cycle)
        self.notify(TickerEvent.SERVICE_CHANGED)
        return self.current_option

    def toggle_visibility(self) -> bool:
        """Flip the hidden flag; returns the new value."""
        self.visibility_hidden = not self.visibility_hidden
        self.notify(TickerEvent.VISIBILITY_CHANGED)
        return self.visibility_hidden

    def activate(self) -> Activation:
        """
        Single activation of the service button.

        While the content is hidden a click only brings it back; otherwise it
        advances the service.
        """
        if self.visibility_hidden:
            self.toggle_visibility()
            return Activation.VISIBILITY_TOGGLED
        self.advance_service()
        return Activation.SERVICE_ADVANCED

    def double_activate(self) -> Activation:
        """Double activation always toggles visibility and never changes the service."""
        self.toggle_visibility()
        return Activation.VISIBILITY_TOGGLED

    def set_paused(self, paused: bool) -> None:
        if self.is_paused == paused:
            return
        self.is_paused = paused
        self.notify(TickerEvent.PAUSE_CHANGED)

    def set_offline(self, offline: bool) -> None:
        self.offline_mode = offline
        self.notify(TickerEvent.OFFLINE_CHANGED)

    def set_position(self, position: float) -> None:
        self.current_position = position
        self.notify(TickerEvent.POSITION_CHANGED)

    def set_direction(self, direction: str) -> None:
        self.direction = direction
        self.notify(TickerEvent.DIRECTION_CHANGED)
