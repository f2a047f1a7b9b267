"""Shared fixtures for the test suite."""

import pytest

from polyglot.events import EventBus, TranslatorEvent


@pytest.fixture
def event_recorder():
    """Subscribe to every translator event and record the payloads.

    Usage:
        recorded = event_recorder(translator.events)
        ...
        assert recorded[TranslatorEvent.ERROR] == [...]
    """

    def _attach(bus: EventBus):
        recorded = {event: [] for event in TranslatorEvent}
        for event in TranslatorEvent:
            bus.on(event, recorded[event].append)
        return recorded

    return _attach
