"""Factory functions for creating i18n components.

Builds translators from the environment-driven I18nSettings.
"""

from pathlib import Path
from typing import Any, Optional

from polyglot.configuration import I18nSettings, settings
from polyglot.i18n.exceptions import ConfigurationError
from polyglot.i18n.files import YAMLTranslationLoader
from polyglot.i18n.loader import CachedLoader
from polyglot.i18n.models import InterpolationConfig, TranslatorConfig
from polyglot.i18n.remote import RemoteLoader
from polyglot.i18n.translator import Translator
from polyglot.logging import get_module_logger

logger = get_module_logger()


def config_from_settings(i18n_settings: I18nSettings, **overrides: Any) -> TranslatorConfig:
    """Build a TranslatorConfig from settings.

    Args:
        i18n_settings: Translation engine settings.
        **overrides: TranslatorConfig fields replacing the settings values.

    Returns:
        TranslatorConfig instance.
    """
    values = {
        "default_locale": i18n_settings.default_locale,
        "current_locale": i18n_settings.current_locale,
        "supported_locales": list(i18n_settings.supported_locales),
        "fallback_locales": list(i18n_settings.fallback_locales),
        "detect_locale": i18n_settings.detect_locale,
        "debug": i18n_settings.debug,
        "interpolation": InterpolationConfig(
            prefix=i18n_settings.interpolation_prefix,
            suffix=i18n_settings.interpolation_suffix,
            escape_html=i18n_settings.escape_html,
        ),
    }
    values.update(overrides)
    return TranslatorConfig(**values)


def create_translator(
    i18n_settings: Optional[I18nSettings] = None,
    **overrides: Any,
) -> Translator:
    """Create and configure a Translator instance.

    Loaders are registered from the settings, in precedence order:
    YAML files when I18N_TRANSLATIONS_DIR is set, then the remote server
    (behind a TTL cache) when I18N_REMOTE_BASE_URL is set.

    Args:
        i18n_settings: Settings to use (default: the global settings.i18n).
        **overrides: TranslatorConfig fields replacing the settings values.

    Returns:
        Translator: Configured translator instance

    Raises:
        ConfigurationError: If the translations directory does not exist.

    Usage:
        # Use environment configuration
        translator = create_translator()

        # With an initial snapshot
        translator = create_translator(translations={"en": {"hello": "Hello"}})
        await translator.load_translations("fr")
    """
    i18n_settings = i18n_settings or settings.i18n
    translator = Translator(config_from_settings(i18n_settings, **overrides))

    if i18n_settings.translations_dir:
        translations_dir = Path(i18n_settings.translations_dir)
        if not translations_dir.is_dir():
            raise ConfigurationError(
                f"Translations directory not found: {translations_dir}"
            )
        translator.use(YAMLTranslationLoader(translations_dir))

    if i18n_settings.remote_base_url:
        remote = RemoteLoader(
            i18n_settings.remote_base_url,
            pattern=i18n_settings.remote_pattern,
            timeout=i18n_settings.remote_timeout_seconds,
        )
        translator.use(CachedLoader(remote, ttl_seconds=i18n_settings.cache_ttl_seconds))

    logger.info(
        "translator_created",
        default_locale=translator.get_default_locale(),
        current_locale=translator.get_locale(),
        loaders=[loader.name for loader in translator.get_loaders()],
    )
    return translator
