"""Event system for translator lifecycle notifications.

Exports the EventBus, the event tags and their payload models.
"""

from polyglot.events.bus import EventBus, EventCallback, Unsubscribe
from polyglot.events.models import (
    EVENT_PAYLOADS,
    ErrorEvent,
    LocaleChangedEvent,
    TranslationMissingEvent,
    TranslationsLoadedEvent,
    TranslatorEvent,
)

__all__ = [
    "EVENT_PAYLOADS",
    "EventBus",
    "EventCallback",
    "Unsubscribe",
    "TranslatorEvent",
    "LocaleChangedEvent",
    "TranslationsLoadedEvent",
    "TranslationMissingEvent",
    "ErrorEvent",
]
