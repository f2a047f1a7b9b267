"""Translation engine settings."""

from typing import List, Optional

from pydantic import Field, field_validator

from polyglot.configuration.base import PolyglotSettings


class I18nSettings(PolyglotSettings):
    """Translation engine configuration.

    Environment Variables:
        I18N_DEFAULT_LOCALE: Locale used as last resort in the fallback chain (default: en)
        I18N_CURRENT_LOCALE: Initial active locale (default: the default locale)
        I18N_SUPPORTED_LOCALES: JSON list restricting accepted locales (default: [] = any)
        I18N_FALLBACK_LOCALES: JSON list of locales tried before the default locale
        I18N_DETECT_LOCALE: Detect the initial locale from the environment (default: False)
        I18N_DEBUG: Log missing translations and exhausted loaders (default: False)
        I18N_TRANSLATIONS_DIR: Directory with <domain>.<locale>.yml files
        I18N_REMOTE_BASE_URL: Base URL serving <locale>.json bundles
        I18N_REMOTE_PATTERN: Path pattern appended to the base URL (default: {locale}.json)
        I18N_REMOTE_TIMEOUT_SECONDS: Remote fetch deadline (default: 10s)
        I18N_CACHE_TTL_SECONDS: Cache lifetime for remote bundles (default: 300s)
        I18N_INTERPOLATION_PREFIX: Placeholder opening delimiter (default: {{)
        I18N_INTERPOLATION_SUFFIX: Placeholder closing delimiter (default: }})
        I18N_ESCAPE_HTML: HTML-escape interpolated values (default: False)

    Example:
        ```python
        from polyglot.configuration import settings

        default_locale = settings.i18n.default_locale
        if settings.i18n.remote_base_url:
            # Configure remote loading...
        ```
    """

    default_locale: str = Field(
        default="en",
        alias="I18N_DEFAULT_LOCALE",
        description="Locale used as last resort in the fallback chain",
    )
    current_locale: Optional[str] = Field(
        default=None,
        alias="I18N_CURRENT_LOCALE",
        description="Initial active locale",
    )
    supported_locales: List[str] = Field(
        default_factory=list,
        alias="I18N_SUPPORTED_LOCALES",
        description="Locales accepted by set_locale (empty means any)",
    )
    fallback_locales: List[str] = Field(
        default_factory=list,
        alias="I18N_FALLBACK_LOCALES",
        description="Ordered locales tried before the default locale",
    )
    detect_locale: bool = Field(
        default=False,
        alias="I18N_DETECT_LOCALE",
        description="Detect the initial locale from the environment",
    )
    debug: bool = Field(
        default=False,
        alias="I18N_DEBUG",
        description="Log missing translations and exhausted loaders",
    )
    translations_dir: Optional[str] = Field(
        default=None,
        alias="I18N_TRANSLATIONS_DIR",
        description="Directory containing YAML translation files",
    )
    remote_base_url: Optional[str] = Field(
        default=None,
        alias="I18N_REMOTE_BASE_URL",
        description="Base URL serving JSON translation bundles",
    )
    remote_pattern: str = Field(
        default="{locale}.json",
        alias="I18N_REMOTE_PATTERN",
        description="Path pattern appended to the remote base URL",
    )
    remote_timeout_seconds: float = Field(
        default=10.0,
        alias="I18N_REMOTE_TIMEOUT_SECONDS",
        description="Deadline for a single remote fetch (seconds)",
    )
    cache_ttl_seconds: float = Field(
        default=300.0,
        alias="I18N_CACHE_TTL_SECONDS",
        description="Lifetime of cached remote bundles (seconds, 5 minutes)",
    )
    interpolation_prefix: str = Field(
        default="{{",
        alias="I18N_INTERPOLATION_PREFIX",
        description="Placeholder opening delimiter",
    )
    interpolation_suffix: str = Field(
        default="}}",
        alias="I18N_INTERPOLATION_SUFFIX",
        description="Placeholder closing delimiter",
    )
    escape_html: bool = Field(
        default=False,
        alias="I18N_ESCAPE_HTML",
        description="HTML-escape interpolated values",
    )

    @field_validator("remote_timeout_seconds", "cache_ttl_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Reject non-positive durations."""
        if v <= 0:
            raise ValueError("must be a positive number of seconds")
        return v
