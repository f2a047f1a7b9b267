"""Translation engine resolving keys to display strings.

Core component of the i18n system: composes the translation store, the
formatter pipeline, the plural resolver, the registered loaders and the
event bus.
"""

import asyncio
import functools
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from structlog.stdlib import BoundLogger

from polyglot.events import (
    ErrorEvent,
    EventBus,
    EventCallback,
    LocaleChangedEvent,
    TranslationMissingEvent,
    TranslationsLoadedEvent,
    TranslatorEvent,
    Unsubscribe,
)
from polyglot.i18n.detector import LocaleDetector
from polyglot.i18n.exceptions import UnsupportedLocaleError
from polyglot.i18n.formatters import (
    InterpolationFormatter,
    PluralFormatter,
    create_formatter_pipeline,
)
from polyglot.i18n.loader import loader_supports, validate_tree
from polyglot.i18n.models import (
    MissingTranslationHandler,
    TranslateOptions,
    TranslationTree,
    TranslatorConfig,
    locales_match,
)
from polyglot.i18n.plurals import PluralResolver, get_plural_key_variants
from polyglot.i18n.store import TranslationStore
from polyglot.logging import get_module_logger, get_null_logger

logger = get_module_logger()
null_logger = get_null_logger()


class Translator:
    """Service resolving translation keys with fallback, plurals and interpolation.

    Resolution of a key never raises: when nothing is found the missing
    handler, the default value or the key itself is returned.

    Loading never raises for loader failures either. Each failing loader
    is reported through an ``error`` event; when every loader fails the
    locale simply stays without data and lookups fall back to other
    locales. Subscribe to ``error`` to observe load failures.

    Attributes:
        store: Translation data of every locale.
        plurals: Plural rule resolver.
        events: Event bus for lifecycle notifications.
        loaders: Ordered translation loaders.
        detector: Locale detector collaborator.
    """

    def __init__(
        self,
        config: Optional[TranslatorConfig] = None,
        detector: Optional[Any] = None,
        logger: Optional[BoundLogger] = None,
    ):
        """Initialize Translator.

        Args:
            config: Translator configuration (default: TranslatorConfig()).
            detector: Locale detector (default: LocaleDetector over the
                environment, restricted to the supported locales).
            logger: Structured logger for diagnostics. Without one, the
                module logger is used in debug mode and a silent logger
                otherwise.
        """
        config = config or TranslatorConfig()

        self.store = TranslationStore(config.translations)
        self.detector = detector or LocaleDetector(
            supported_locales=config.supported_locales
        )
        self.events = EventBus()
        self.loaders: List[Any] = []
        self._loading: Dict[str, asyncio.Task] = {}

        self.default_locale = config.default_locale
        self.fallback_locales = list(config.fallback_locales)
        self.supported_locales = list(config.supported_locales)
        self.on_missing_translation = config.on_missing_translation
        self._logger = logger
        self.debug = config.debug

        self.plurals = PluralResolver(
            rules=config.pluralization.rules,
            locale=config.current_locale or config.default_locale,
        )
        self.interpolation = InterpolationFormatter(config.interpolation)
        self.formatter = create_formatter_pipeline(
            [PluralFormatter(self.plurals), self.interpolation]
        )

        detected = self.detector.detect() if config.detect_locale else None
        self.current_locale = detected or config.current_locale or config.default_locale
        self.plurals.set_locale(self.current_locale)

        self.log.info(
            "initialized_translator",
            current_locale=self.current_locale,
            default_locale=self.default_locale,
            detected=detected is not None,
        )

    @property
    def log(self) -> BoundLogger:
        if self._logger is not None:
            return self._logger
        return logger if self.debug else null_logger

    # Events

    def on(self, event: Union[TranslatorEvent, str], callback: EventCallback) -> Unsubscribe:
        """Subscribe to an event; returns a callable that unsubscribes."""
        return self.events.on(event, callback)

    def once(self, event: Union[TranslatorEvent, str], callback: EventCallback) -> Unsubscribe:
        return self.events.once(event, callback)

    def off(self, event: Union[TranslatorEvent, str], callback: EventCallback) -> None:
        self.events.off(event, callback)

    # Resolution

    def t(
        self,
        key: str,
        *,
        values: Optional[Dict[str, Any]] = None,
        count: Optional[float] = None,
        locale: Optional[str] = None,
        default_value: Optional[str] = None,
        context: Optional[str] = None,
    ) -> str:
        """Translate a key.

        Args:
            key: Dot-delimited translation key.
            values: Interpolation values.
            count: Quantity selecting the plural form.
            locale: Locale overriding the current locale.
            default_value: Text used when the key resolves nowhere.
            context: Disambiguation hint passed to the missing handler.

        Returns:
            Formatted translation, missing-handler result, formatted
            default value, or the key itself, in that order of preference.
        """
        effective_locale = locale or self.current_locale
        options = TranslateOptions(
            values=values,
            count=count,
            locale=effective_locale,
            default_value=default_value,
            context=context,
        )

        value = self._resolve_translation(key, effective_locale, options)
        if value is None:
            return self._handle_missing_translation(key, effective_locale, options)
        return self.formatter.format(value, options)

    translate = t

    def exists(self, key: str, locale: Optional[str] = None) -> bool:
        """Check if a key has a value in a locale (no fallback)."""
        return self.store.has(locale or self.current_locale, key)

    def _resolve_translation(
        self, key: str, locale: str, options: TranslateOptions
    ) -> Optional[str]:
        if options.count is not None:
            plural_key = self._resolve_plural_key(key, locale, options.count)
            if plural_key is not None:
                return self.store.get(locale, plural_key)

        value = self.store.get(locale, key)
        if value is not None:
            return value

        for fallback_locale in self.fallback_locales:
            value = self.store.get(fallback_locale, key)
            if value is not None:
                self.log.debug(
                    "used_fallback_translation",
                    key=key,
                    requested_locale=locale,
                    fallback_locale=fallback_locale,
                )
                return value

        if not locales_match(locale, self.default_locale):
            value = self.store.get(self.default_locale, key)
            if value is not None:
                self.log.debug(
                    "used_default_locale_translation",
                    key=key,
                    requested_locale=locale,
                    default_locale=self.default_locale,
                )
                return value

        return None

    def _resolve_plural_key(self, base_key: str, locale: str, count: float) -> Optional[str]:
        """Find the plural variant of a key present in a locale.

        The exact suffix for the count wins. Otherwise the variants that
        exist are taken in category order and the form index is clamped to
        their number, so a locale defining fewer forms degrades to its last
        available variant.
        """
        plural_key = f"{base_key}{self.plurals.get_plural_key_suffix(count, locale)}"
        if self.store.has(locale, plural_key):
            return plural_key

        available = [
            variant
            for variant in get_plural_key_variants(base_key)
            if self.store.has(locale, variant)
        ]
        if not available:
            return None
        index = self.plurals.get_plural_form_index(count, locale)
        return available[min(index, len(available) - 1)]

    def _handle_missing_translation(
        self, key: str, locale: str, options: TranslateOptions
    ) -> str:
        self.events.emit(
            TranslatorEvent.TRANSLATION_MISSING,
            TranslationMissingEvent(key=key, locale=locale),
        )
        if self.debug:
            self.log.warning("translation_missing", key=key, locale=locale)

        if self.on_missing_translation is not None:
            return self.on_missing_translation(key, locale, options)
        if options.default_value is not None:
            return self.formatter.format(options.default_value, options)
        return key

    # Locale state

    def get_locale(self) -> str:
        return self.current_locale

    def get_default_locale(self) -> str:
        return self.default_locale

    def get_supported_locales(self) -> List[str]:
        return list(self.supported_locales)

    def get_available_locales(self) -> List[str]:
        """Locales that currently hold translation data."""
        return self.store.get_available_locales()

    def is_supported(self, locale: str) -> bool:
        if not self.supported_locales:
            return True
        return any(locales_match(locale, s) for s in self.supported_locales)

    async def set_locale(self, locale: str) -> None:
        """Switch the current locale.

        Loads the locale first when it has no data and a loader is
        registered, so ``locale_changed`` subscribers see populated data.
        A failed load does not raise (see load_translations).

        Raises:
            UnsupportedLocaleError: If supported locales are configured and
                the locale is not one of them.
        """
        if locales_match(locale, self.current_locale):
            return
        if not self.is_supported(locale):
            raise UnsupportedLocaleError(
                f"Unsupported locale: {locale} (supported: {self.supported_locales})"
            )

        previous_locale = self.current_locale
        self.current_locale = locale
        self.plurals.set_locale(locale)
        self.detector.set_locale(locale)

        if not self.store.has_locale(locale) and self.loaders:
            await self.load_translations(locale)

        self.log.info("locale_changed", previous_locale=previous_locale, new_locale=locale)
        self.events.emit(
            TranslatorEvent.LOCALE_CHANGED,
            LocaleChangedEvent(previous_locale=previous_locale, new_locale=locale),
        )

    def set_fallback_locales(self, locales: Sequence[str]) -> None:
        self.fallback_locales = list(locales)

    # Translation data

    def _emit_loaded(self, locale: str) -> None:
        self.events.emit(
            TranslatorEvent.TRANSLATIONS_LOADED,
            TranslationsLoadedEvent(locale=locale, count=self.store.count(locale)),
        )

    def add_translations(self, locale: str, translations: Mapping[str, Any]) -> None:
        """Deep-merge translations into a locale."""
        self.store.merge_locale(locale, translations)
        self._emit_loaded(locale)

    def set_translations(self, locale: str, translations: Mapping[str, Any]) -> None:
        """Replace a locale's translations."""
        self.store.set_locale(locale, translations)
        self._emit_loaded(locale)

    def get_translations(self, locale: Optional[str] = None) -> Optional[TranslationTree]:
        """Return a copy of a locale's tree (default: current locale)."""
        return self.store.get_locale(locale or self.current_locale)

    # Loading

    def use(self, loader: Any) -> "Translator":
        """Append a loader; earlier loaders take precedence."""
        self.loaders.append(loader)
        self.log.debug("registered_loader", loader=loader.name, position=len(self.loaders))
        return self

    def remove_loader(self, name: str) -> bool:
        """Remove the first loader with the given name.

        Returns:
            True if a loader was removed.
        """
        for index, loader in enumerate(self.loaders):
            if loader.name == name:
                del self.loaders[index]
                return True
        return False

    def get_loaders(self) -> List[Any]:
        return list(self.loaders)

    async def load_translations(self, locale: str) -> None:
        """Load a locale through the registered loaders.

        Concurrent calls for the same locale share one load. A caller that
        is cancelled stops waiting, but the shared load keeps running for
        the others. Loaders are tried in order; the first non-empty result
        is merged into the store. A loader that raises is reported via an
        ``error`` event and the next one is tried. If no loader succeeds
        this returns normally without new data; only the ``error`` events
        (and a debug log) record the failure.
        """
        ticket = locale.lower()
        task = self._loading.get(ticket)
        if task is not None:
            self.log.debug("joined_pending_load", locale=locale)
        else:
            task = asyncio.ensure_future(self._do_load_translations(locale))
            self._loading[ticket] = task
            task.add_done_callback(functools.partial(self._release_load, ticket))
        await asyncio.shield(task)

    def _release_load(self, ticket: str, task: "asyncio.Future[None]") -> None:
        if self._loading.get(ticket) is task:
            del self._loading[ticket]

    async def preload_translations(self, locales: Sequence[str]) -> None:
        """Load several locales concurrently; waits until all have settled."""
        await asyncio.gather(
            *(self.load_translations(locale) for locale in locales),
            return_exceptions=True,
        )

    async def _do_load_translations(self, locale: str) -> None:
        for loader in list(self.loaders):
            try:
                if not loader_supports(loader, locale):
                    continue
                translations = validate_tree(await loader.load(locale), loader.name)
            except Exception as e:
                self.log.debug(
                    "loader_failed", loader=loader.name, locale=locale, error=str(e)
                )
                self.events.emit(
                    TranslatorEvent.ERROR,
                    ErrorEvent(
                        error=e,
                        context=(
                            f'Failed to load translations for locale "{locale}" '
                            f'using loader "{loader.name}"'
                        ),
                    ),
                )
                continue

            if not translations:
                self.log.debug("loader_returned_empty", loader=loader.name, locale=locale)
                continue

            self.store.merge_locale(locale, translations)
            self.log.info(
                "loaded_locale_translations",
                locale=locale,
                loader=loader.name,
                count=self.store.count(locale),
            )
            self._emit_loaded(locale)
            return

        if self.debug:
            self.log.warning("no_loader_could_load_locale", locale=locale)

    # Runtime configuration

    def set_debug(self, enabled: bool) -> None:
        self.debug = enabled

    def set_missing_handler(self, handler: Optional[MissingTranslationHandler]) -> None:
        self.on_missing_translation = handler

    def set_interpolation_config(
        self,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        escape_html: Optional[bool] = None,
    ) -> None:
        """Update interpolation delimiters or escaping at runtime."""
        self.interpolation.set_config(prefix=prefix, suffix=suffix, escape_html=escape_html)
