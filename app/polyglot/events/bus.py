"""Event bus for translator lifecycle signals.

Listeners are registered per event tag and called synchronously, in
subscription order, when an event is emitted. A listener that raises is
logged and skipped so the remaining listeners still run.
"""

from typing import Any, Callable, Dict, List, Union

from polyglot.events.models import EVENT_PAYLOADS, TranslatorEvent
from polyglot.logging import get_module_logger

logger = get_module_logger()

EventCallback = Callable[[Any], None]
Unsubscribe = Callable[[], None]


def _as_event(event: Union[TranslatorEvent, str]) -> TranslatorEvent:
    try:
        return TranslatorEvent(event)
    except ValueError as e:
        raise ValueError(f"Unknown event: {event}") from e


class EventBus:
    """Typed publish/subscribe registry.

    Usage:
        bus = EventBus()
        unsubscribe = bus.on(TranslatorEvent.ERROR, lambda e: print(e.context))
        bus.emit(TranslatorEvent.ERROR, ErrorEvent(error=exc, context="load"))
        unsubscribe()
    """

    def __init__(self):
        self._listeners: Dict[TranslatorEvent, List[EventCallback]] = {}

    def on(
        self, event: Union[TranslatorEvent, str], callback: EventCallback
    ) -> Unsubscribe:
        """Subscribe a callback to an event.

        Subscribing the same callback twice to one event is a no-op.

        Args:
            event: Event tag (enum member or its string value).
            callback: Called with the event payload.

        Returns:
            Callable that removes the subscription.

        Raises:
            ValueError: If the event tag is unknown.
        """
        tag = _as_event(event)
        callbacks = self._listeners.setdefault(tag, [])
        if callback not in callbacks:
            callbacks.append(callback)
        return lambda: self.off(tag, callback)

    def once(
        self, event: Union[TranslatorEvent, str], callback: EventCallback
    ) -> Unsubscribe:
        """Subscribe a callback that is removed after its first call."""
        tag = _as_event(event)

        def wrapper(payload: Any) -> None:
            self.off(tag, wrapper)
            callback(payload)

        return self.on(tag, wrapper)

    def off(self, event: Union[TranslatorEvent, str], callback: EventCallback) -> None:
        """Remove a callback. Unknown callbacks are ignored."""
        callbacks = self._listeners.get(_as_event(event))
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: Union[TranslatorEvent, str], payload: Any) -> None:
        """Deliver a payload to every listener of an event.

        Args:
            event: Event tag.
            payload: Instance of the payload dataclass registered for the tag.

        Raises:
            TypeError: If the payload type does not match the event.
        """
        tag = _as_event(event)
        expected = EVENT_PAYLOADS[tag]
        if not isinstance(payload, expected):
            raise TypeError(
                f"Event {tag.value} expects {expected.__name__}, got {type(payload).__name__}"
            )

        # Copy so listeners may unsubscribe while being called
        for callback in list(self._listeners.get(tag, [])):
            try:
                callback(payload)
            except Exception as e:
                logger.error(
                    "event_listener_failed",
                    listener=getattr(callback, "__name__", "unknown"),
                    event_type=tag.value,
                    error=str(e),
                )

    def remove_all_listeners(self, event: Union[TranslatorEvent, str, None] = None) -> None:
        """Remove listeners of one event, or of every event when none is given."""
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(_as_event(event), None)

    def listener_count(self, event: Union[TranslatorEvent, str]) -> int:
        return len(self._listeners.get(_as_event(event), []))
