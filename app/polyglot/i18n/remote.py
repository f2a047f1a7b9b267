"""HTTP translation loader.

Fetches ``<base_url>/<pattern>`` (with "{locale}" substituted) and parses
the JSON body as a translation tree. The blocking request runs in a worker
thread so the event loop is never blocked. Failures are not retried.
"""

import asyncio
from typing import Dict, Iterable, Optional, Set

import requests

from polyglot.i18n.exceptions import LoaderError, LoaderTimeoutError
from polyglot.i18n.loader import TranslationLoader, validate_tree
from polyglot.i18n.models import TranslationTree
from polyglot.logging import get_module_logger

logger = get_module_logger()


class RemoteLoader(TranslationLoader):
    """Loads translation bundles over HTTP.

    Attributes:
        base_url: Server root, without trailing slash.
        pattern: Path appended to base_url, containing "{locale}".
        headers: Extra request headers.
        timeout: Deadline for one request (seconds).
    """

    name = "remote"

    def __init__(
        self,
        base_url: str,
        pattern: str = "{locale}.json",
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize remote loader.

        Args:
            base_url: Server root.
            pattern: Path pattern with a "{locale}" placeholder.
            headers: Extra request headers.
            timeout: Deadline for one request (seconds).
            session: Optional requests session (connection reuse, testing).
        """
        self.base_url = base_url.rstrip("/")
        self.pattern = pattern
        self.headers = dict(headers or {})
        self.timeout = timeout
        self.session = session or requests.Session()
        self._supported_locales: Set[str] = set()

    def build_url(self, locale: str) -> str:
        return f"{self.base_url}/{self.pattern.replace('{locale}', locale)}"

    def _fetch(self, locale: str) -> TranslationTree:
        url = self.build_url(locale)
        headers = {"Accept": "application/json", **self.headers}
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.Timeout as e:
            raise LoaderTimeoutError(
                f"Request timeout loading translations for locale: {locale}"
            ) from e
        except requests.RequestException as e:
            raise LoaderError(
                f'Failed to load translations for locale "{locale}": {e}'
            ) from e

        if not response.ok:
            raise LoaderError(
                f'Failed to load translations for locale "{locale}": '
                f"HTTP {response.status_code}: {response.reason}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise LoaderError(
                f'Invalid JSON in translations for locale "{locale}": {e}'
            ) from e

        logger.info("fetched_remote_translations", url=url, locale=locale)
        return validate_tree(data, self.name)

    async def load(self, locale: str) -> TranslationTree:
        """Fetch the bundle of a locale.

        Raises:
            LoaderTimeoutError: If the request exceeds the timeout.
            LoaderError: On network errors, non-2xx responses or bad JSON.
        """
        return await asyncio.to_thread(self._fetch, locale)

    def set_supported_locales(self, locales: Iterable[str]) -> None:
        """Restrict the loader to the given locales (empty means all)."""
        self._supported_locales = {locale.lower() for locale in locales}

    def supports(self, locale: str) -> bool:
        if not self._supported_locales:
            return True
        return locale.lower() in self._supported_locales


def create_remote_loader(base_url: str, **options) -> RemoteLoader:
    """Create a RemoteLoader; options are passed to its constructor."""
    return RemoteLoader(base_url, **options)
