"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation engine settings class

Example:
    ```python
    from polyglot.configuration import settings

    default_locale = settings.i18n.default_locale
    ```
"""

from polyglot.configuration.i18n import I18nSettings
from polyglot.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "settings"]
