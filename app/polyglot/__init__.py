"""Polyglot translation library.

Components:
- configuration: Settings management (settings, I18nSettings)
- logging: Structured logging (get_module_logger)
- events: Translator lifecycle event bus
- i18n: Translation resolution engine
"""

from polyglot.configuration import settings
from polyglot.events import TranslatorEvent
from polyglot.i18n import Translator, TranslatorConfig, create_translator

__all__ = [
    "settings",
    "Translator",
    "TranslatorConfig",
    "TranslatorEvent",
    "create_translator",
]
