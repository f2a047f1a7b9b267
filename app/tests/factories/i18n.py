"""Test data factories for i18n system testing.

Provides deterministic builders for:
- Translation snapshots
- Translator instances
- Fake loaders recording their calls
"""

import asyncio
from typing import Dict, List, Optional

from polyglot.i18n import Translator, TranslatorConfig
from polyglot.i18n.exceptions import LoaderError


def make_translations() -> Dict[str, dict]:
    """Create a translations snapshot for en and fr.

    Returns:
        Mapping of locale -> translation tree.
    """
    return {
        "en": {
            "greet": "Hello",
            "welcome": "Welcome, {{name}}!",
            "errors": {
                "notFound": "Not found",
                "forbidden": "Forbidden",
            },
            "apple": "apple | apples",
            "item_one": "{{count}} item",
            "item_other": "{{count}} items",
        },
        "fr": {
            "welcome": "Bienvenue, {{name}} !",
            "errors": {
                "notFound": "Introuvable",
            },
        },
    }


def make_translator(
    translations: Optional[Dict[str, dict]] = None,
    **config_fields,
) -> Translator:
    """Create a Translator over a snapshot.

    Args:
        translations: Initial snapshot (default: make_translations()).
        **config_fields: Extra TranslatorConfig fields.

    Returns:
        Translator instance.
    """
    if translations is None:
        translations = make_translations()
    return Translator(TranslatorConfig(translations=translations, **config_fields))


class RecordingLoader:
    """Loader serving fixed trees and recording each load call.

    Attributes:
        calls: Locales requested, in call order.
        delay: Seconds to sleep inside load (lets concurrent calls overlap).
    """

    def __init__(
        self,
        translations: Dict[str, dict],
        name: str = "recording",
        delay: float = 0.0,
        supported: Optional[List[str]] = None,
    ):
        self.name = name
        self.translations = translations
        self.delay = delay
        self.supported = supported
        self.calls: List[str] = []

    async def load(self, locale: str) -> dict:
        self.calls.append(locale)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.translations.get(locale, {})

    def supports(self, locale: str) -> bool:
        return self.supported is None or locale in self.supported


class FailingLoader:
    """Loader that always raises LoaderError."""

    def __init__(self, name: str = "failing"):
        self.name = name
        self.calls: List[str] = []

    async def load(self, locale: str) -> dict:
        self.calls.append(locale)
        raise LoaderError(f"{self.name} cannot load {locale}")
