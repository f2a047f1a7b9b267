"""Translation loading interface and loader decorators.

Defines the contract every translation source implements, plus loaders
that compose other loaders (CompositeLoader, CachedLoader) and an
in-memory DictLoader.
"""

import asyncio
import functools
import time
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence

from polyglot.i18n.exceptions import AllLoadersExhaustedError, LoaderError
from polyglot.i18n.models import TranslationTree, clone_tree
from polyglot.logging import get_module_logger

logger = get_module_logger()

LocaleResolverFn = Callable[[str], Awaitable[Mapping[str, Any]]]


class TranslationLoader(ABC):
    """Abstract base for translation loaders.

    Implementations define how to fetch the translation tree of one locale.
    Any object with a ``name`` attribute and an async ``load(locale)``
    method is accepted where a loader is expected; ``supports`` is optional.
    """

    name: str = "loader"

    @abstractmethod
    async def load(self, locale: str) -> TranslationTree:
        """Load translations for a specific locale.

        Args:
            locale: Locale to load translations for.

        Returns:
            Translation tree for the locale.

        Raises:
            LoaderError: If the source cannot provide the locale.
        """
        pass

    def supports(self, locale: str) -> bool:
        """Check whether this loader can serve a locale."""
        return True


def loader_supports(loader: Any, locale: str) -> bool:
    """Ask a loader whether it serves a locale; loaders without supports() serve all."""
    supports = getattr(loader, "supports", None)
    if supports is None:
        return True
    return supports(locale) is not False


def validate_tree(data: Any, source: str) -> TranslationTree:
    """Ensure loaded data is a translation tree.

    Raises:
        LoaderError: If data is not a mapping.
    """
    if not isinstance(data, Mapping):
        raise LoaderError(
            f"Loader {source} returned {type(data).__name__}, expected a mapping"
        )
    return dict(data)


class CompositeLoader(TranslationLoader):
    """Tries an ordered list of loaders and returns the first non-empty tree.

    Loaders that do not support the locale are skipped; loaders that raise
    or return nothing are passed over in favour of the next one.
    """

    name = "composite"

    def __init__(self, loaders: Sequence[Any]):
        self.loaders: List[Any] = list(loaders)

    async def load(self, locale: str) -> TranslationTree:
        for loader in self.loaders:
            try:
                if not loader_supports(loader, locale):
                    continue
                translations = validate_tree(await loader.load(locale), loader.name)
            except Exception as e:
                logger.debug(
                    "composite_child_failed",
                    loader=loader.name,
                    locale=locale,
                    error=str(e),
                )
                continue
            if translations:
                return translations

        raise AllLoadersExhaustedError(
            f"No loader could load translations for locale: {locale}"
        )

    def supports(self, locale: str) -> bool:
        return any(loader_supports(loader, locale) for loader in self.loaders)

    def add_loader(self, loader: Any) -> None:
        self.loaders.append(loader)

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


class CachedLoader(TranslationLoader):
    """Caches another loader's results for a time-to-live.

    Attributes:
        loader: Wrapped loader.
        ttl_seconds: Lifetime of a cached tree.
    """

    def __init__(self, loader: Any, ttl_seconds: float = 300.0):
        self.loader = loader
        self.ttl_seconds = ttl_seconds
        self.name = f"cached-{loader.name}"
        self._cache: Dict[str, TranslationTree] = {}
        self._timestamps: Dict[str, float] = {}
        self._pending: Dict[str, asyncio.Task] = {}

    def _is_fresh(self, locale: str) -> bool:
        timestamp = self._timestamps.get(locale)
        if timestamp is None or locale not in self._cache:
            return False
        return time.monotonic() - timestamp < self.ttl_seconds

    async def load(self, locale: str) -> TranslationTree:
        if self._is_fresh(locale):
            logger.debug("loaded_from_cache", loader=self.name, locale=locale)
            return clone_tree(self._cache[locale])

        # Cold loads of one locale share a single fetch
        task = self._pending.get(locale)
        if task is None:
            task = asyncio.ensure_future(self._fetch(locale))
            self._pending[locale] = task
            task.add_done_callback(functools.partial(self._release_fetch, locale))
        return clone_tree(await asyncio.shield(task))

    async def _fetch(self, locale: str) -> TranslationTree:
        translations = validate_tree(await self.loader.load(locale), self.loader.name)
        self._cache[locale] = clone_tree(translations)
        self._timestamps[locale] = time.monotonic()
        return translations

    def _release_fetch(self, locale: str, task: "asyncio.Future[TranslationTree]") -> None:
        if self._pending.get(locale) is task:
            del self._pending[locale]

    def supports(self, locale: str) -> bool:
        return loader_supports(self.loader, locale)

    def clear_cache(self, locale: Optional[str] = None) -> None:
        """Drop one locale's cached tree, or every cached tree."""
        if locale is None:
            self._cache.clear()
            self._timestamps.clear()
        else:
            self._cache.pop(locale, None)
            self._timestamps.pop(locale, None)
        logger.debug("cleared_translation_cache", loader=self.name, locale=locale)

    async def preload(self, locales: Sequence[str]) -> None:
        """Warm the cache for several locales concurrently.

        Raises:
            Exception: The first failure among the loads, after all settle.
        """
        results = await asyncio.gather(
            *(self.load(locale) for locale in locales), return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result


class DictLoader(TranslationLoader):
    """Serves translations held in memory, or produced by a resolver coroutine.

    Registered trees take precedence over the resolver.
    """

    name = "dict"

    def __init__(self, resolver: Optional[LocaleResolverFn] = None):
        self.resolver = resolver
        self._translations: Dict[str, TranslationTree] = {}

    async def load(self, locale: str) -> TranslationTree:
        if locale in self._translations:
            return clone_tree(self._translations[locale])
        if self.resolver is not None:
            return validate_tree(await self.resolver(locale), self.name)
        raise LoaderError(f"No translations found for locale: {locale}")

    def add_translations(self, locale: str, translations: Mapping[str, Any]) -> None:
        self._translations[locale] = clone_tree(translations)

    def add_multiple_translations(
        self, translations: Mapping[str, Mapping[str, Any]]
    ) -> None:
        for locale, tree in translations.items():
            self.add_translations(locale, tree)

    def supports(self, locale: str) -> bool:
        return locale in self._translations or self.resolver is not None


def create_dict_loader(translations: Mapping[str, Mapping[str, Any]]) -> DictLoader:
    """Create a DictLoader pre-filled with locale -> tree data."""
    loader = DictLoader()
    loader.add_multiple_translations(translations)
    return loader
