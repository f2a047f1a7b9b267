"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    FailingLoader,
    RecordingLoader,
    make_translations,
    make_translator,
)

__all__ = [
    "FailingLoader",
    "RecordingLoader",
    "make_translations",
    "make_translator",
]
