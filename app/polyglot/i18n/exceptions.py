"""Custom exceptions for the i18n system.

Missing keys and locales are not errors: they are resolved by the
fallback chain and the missing-translation policy. These exceptions cover
load failures and invalid configuration.
"""


class I18nError(Exception):
    """Base exception for all i18n errors."""

    pass


class LoaderError(I18nError):
    """Raised when a loader fails or returns malformed data.

    Example:
        >>> await RemoteLoader("https://cdn.example.com/i18n").load("de")
        Traceback (most recent call last):
        ...
        LoaderError: Failed to load translations for locale "de": HTTP 404: Not Found
    """

    pass


class LoaderTimeoutError(LoaderError):
    """Raised when a remote fetch exceeds its deadline."""

    pass


class AllLoadersExhaustedError(LoaderError):
    """Raised by CompositeLoader when no child loader served the locale."""

    pass


class ConfigurationError(I18nError, ValueError):
    """Raised synchronously at the call site for invalid configuration."""

    pass


class UnsupportedLocaleError(I18nError, ValueError):
    """Raised when switching to a locale outside the supported set."""

    pass
