"""Event models for the translator event bus.

Each lifecycle signal has a tag in TranslatorEvent and a frozen payload
dataclass carrying its data.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type


class TranslatorEvent(str, Enum):
    """Lifecycle signals emitted by the Translator."""

    LOCALE_CHANGED = "locale_changed"
    TRANSLATIONS_LOADED = "translations_loaded"
    TRANSLATION_MISSING = "translation_missing"
    ERROR = "error"


@dataclass(frozen=True)
class LocaleChangedEvent:
    """Emitted once the active locale has switched (and its data is loaded)."""

    previous_locale: str
    new_locale: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TranslationsLoadedEvent:
    """Emitted whenever a locale's data changes.

    Attributes:
        locale: Locale whose tree was updated.
        count: Number of string leaves now stored for the locale.
    """

    locale: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TranslationMissingEvent:
    """Emitted when a key resolves nowhere in the fallback chain."""

    key: str
    locale: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ErrorEvent:
    """Emitted when a load-path operation fails.

    Attributes:
        error: The exception raised by the failing component.
        context: Human-readable description of what was being attempted.
    """

    error: Exception
    context: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event to dictionary.

        The exception is rendered as its type name and message.
        """
        return {
            "error": f"{type(self.error).__name__}: {self.error}",
            "context": self.context,
        }


EVENT_PAYLOADS: Dict[TranslatorEvent, Type] = {
    TranslatorEvent.LOCALE_CHANGED: LocaleChangedEvent,
    TranslatorEvent.TRANSLATIONS_LOADED: TranslationsLoadedEvent,
    TranslatorEvent.TRANSLATION_MISSING: TranslationMissingEvent,
    TranslatorEvent.ERROR: ErrorEvent,
}
