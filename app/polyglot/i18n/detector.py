"""Locale detection from the runtime environment.

Provides the default locale detector used by the Translator when
detection is enabled, plus language-range matching helpers.
"""

import os
from typing import Callable, Iterable, List, Optional, Sequence

from polyglot.i18n.models import base_language, locales_match
from polyglot.logging import get_module_logger

logger = get_module_logger()

DetectionSource = Callable[[], Optional[str]]

ENV_LOCALE_VARIABLES = ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")


def normalize_locale(raw: str) -> Optional[str]:
    """Normalize a POSIX or BCP 47 locale string.

    Strips encoding and modifier parts and uses "-" as separator
    (e.g., "pt_BR.UTF-8" -> "pt-br"). "C" and "POSIX" mean no locale.

    Returns:
        Normalized locale, or None if nothing usable remains.
    """
    value = raw.strip().split(".")[0].split("@")[0].replace("_", "-").lower()
    if not value or value in ("c", "posix"):
        return None
    return value


def parse_accept_language(accept_language: str) -> List[str]:
    """Parse an Accept-Language header into language ranges by preference.

    "en-US,en;q=0.9,fr-FR;q=0.8" -> ["en-US", "en", "fr-FR"]
    Wildcards are dropped.
    """
    preferences = []
    for part in accept_language.split(","):
        lang_range = part.split(";")[0].strip()
        if not lang_range or lang_range == "*":
            continue
        quality = 1.0

        if ";" in part and "q=" in part:
            try:
                quality = float(part.split("q=")[1])
            except ValueError:
                quality = 1.0

        preferences.append((lang_range, quality))

    # sorted() is stable, so equal qualities keep header order
    return [lang for lang, _ in sorted(preferences, key=lambda x: x[1], reverse=True)]


def env_source(variables: Sequence[str] = ENV_LOCALE_VARIABLES) -> DetectionSource:
    """Detection source reading the first set locale environment variable.

    LANGUAGE may hold a colon-separated list; its first entry is used.
    """

    def detect() -> Optional[str]:
        for variable in variables:
            value = os.environ.get(variable)
            if value:
                locale = normalize_locale(value.split(":")[0])
                if locale:
                    return locale
        return None

    return detect


def header_source(get_header: Callable[[], Optional[str]]) -> DetectionSource:
    """Detection source reading the preferred range of an Accept-Language value.

    Args:
        get_header: Returns the current request's header value, or None.
    """

    def detect() -> Optional[str]:
        header = get_header()
        if not header:
            return None
        ranges = parse_accept_language(header)
        return normalize_locale(ranges[0]) if ranges else None

    return detect


class LanguageNegotiator:
    """Matches requested locale tags against the locales on offer.

    A full-tag match beats a base-language match: "pt-BR" picks "pt-BR"
    when both "pt" and "pt-BR" are offered, and "pt" otherwise.
    """

    @staticmethod
    def matches_language(
        requested: str,
        available: str,
        strict: bool = False,
    ) -> bool:
        """Check whether an offered locale satisfies a requested one.

        Args:
            requested: Requested tag (e.g., "en-US").
            available: Offered tag (e.g., "en").
            strict: Require the full tags to match.
        """
        if locales_match(requested, available):
            return True
        if strict:
            return False
        return base_language(requested.lower()) == base_language(available.lower())

    @staticmethod
    def find_best_match(
        requested: Iterable[str],
        available: Sequence[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Pick the offered locale for the first satisfiable request.

        Returns:
            The offered tag, in its own casing, or default.
        """
        for tag in requested:
            exact = next((a for a in available if locales_match(tag, a)), None)
            if exact is not None:
                return exact
            related = next(
                (a for a in available if LanguageNegotiator.matches_language(tag, a)),
                None,
            )
            if related is not None:
                return related
        return default


class LocaleDetector:
    """Detects the user's locale from an ordered list of sources.

    The first source returning a supported locale wins; the hit is cached
    until clear_cache() is called. With supported locales configured, the
    detected value is mapped onto the matching supported tag.
    """

    def __init__(
        self,
        sources: Optional[Sequence[DetectionSource]] = None,
        supported_locales: Optional[Sequence[str]] = None,
    ):
        """Initialize locale detector.

        Args:
            sources: Detection sources tried in order (default: environment).
            supported_locales: Locales accepted as detection results.
        """
        self.sources = list(sources) if sources is not None else [env_source()]
        self.supported_locales = list(supported_locales or [])
        self._cached_locale: Optional[str] = None

    def _match_supported(self, locale: str) -> Optional[str]:
        if not self.supported_locales:
            return locale
        return LanguageNegotiator.find_best_match([locale], self.supported_locales)

    def detect(self) -> Optional[str]:
        """Return the first supported locale reported by a source, or None."""
        if self._cached_locale:
            return self._cached_locale

        for source in self.sources:
            candidate = source()
            if not candidate:
                continue
            locale = self._match_supported(candidate)
            if locale:
                logger.info("detected_locale", locale=locale, raw=candidate)
                self._cached_locale = locale
                return locale

        logger.info("no_locale_detected", source_count=len(self.sources))
        return None

    def set_locale(self, locale: str) -> None:
        """Remember an explicitly chosen locale as the detection result."""
        self._cached_locale = locale

    def clear_cache(self) -> None:
        self._cached_locale = None

    def set_supported_locales(self, locales: Sequence[str]) -> None:
        self.supported_locales = list(locales)
