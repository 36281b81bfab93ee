"""Event bus for plot state notifications.

Renderers and tick caches subscribe to plot state changes instead of polling.
Components subscribe to events and receive callbacks when those events are
emitted.
"""

from enum import Enum
from typing import Callable


class EventType(str, Enum):
    """Event names emitted by PlotState.

    Members compare and hash equal to their string values, so subscribing with
    "view_changed" and emitting EventType.VIEW_CHANGED reach the same callbacks.
    """

    DATA_LOADED = "data_loaded"  # new data series or custom limits
    VIEW_CHANGED = "view_changed"  # zoom/pan changed
    HISTORY_RESTORED = "history_restored"  # back/forward through view history
    DISPLAY_OPTIONS_CHANGED = "display_options_changed"  # plot mode, bins, etc.


class EventBus:
    """Simple publish-subscribe event bus.

    Usage:
        bus = EventBus()
        bus.subscribe("view_changed", lambda **kw: print("View changed!"))
        bus.emit("view_changed")  # Triggers all subscribed callbacks

    Thread Safety:
        This implementation is NOT thread-safe. All subscriptions and emissions
        should happen on the thread that drives redraws.
    """

    def __init__(self):
        self._subscribers: dict[str, list[Callable]] = {}

    def subscribe(self, event_type: str, callback: Callable) -> Callable:
        """Subscribe to an event type.

        Args:
            event_type: String identifier for the event (e.g., "data_loaded")
            callback: Function to call when event is emitted. Receives **kwargs.

        Returns:
            The callback function (for easy unsubscribe later)
        """
        self._subscribers.setdefault(event_type, []).append(callback)
        return callback

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        """Unsubscribe a callback from an event type."""
        if event_type in self._subscribers:
            self._subscribers[event_type] = [
                cb for cb in self._subscribers[event_type] if cb != callback
            ]

    def emit(self, event_type: str, **kwargs) -> None:
        """Emit an event to all subscribers.

        Exceptions in callbacks are caught and printed to avoid breaking
        the event chain.

        Args:
            event_type: String identifier for the event
            **kwargs: Data to pass to subscribers
        """
        for callback in list(self._subscribers.get(event_type, [])):
            try:
                callback(**kwargs)
            except Exception as e:
                print(f"Event handler error for {event_type}: {e}")

    def clear(self, event_type: str | None = None) -> None:
        """Clear all subscribers for an event type, or all events if None."""
        if event_type is None:
            self._subscribers.clear()
        elif event_type in self._subscribers:
            self._subscribers[event_type].clear()

    def has_subscribers(self, event_type: str) -> bool:
        """Check if an event type has any subscribers."""
        return bool(self._subscribers.get(event_type))
