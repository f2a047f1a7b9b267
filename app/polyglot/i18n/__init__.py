"""i18n system - translation resolution engine.

Resolves translation keys into display strings across locales, with
fallback chains, pluralization, interpolation and asynchronous loading.

Main components:
- models: TranslateOptions, TranslatorConfig and tree helpers
- store: TranslationStore for locale-scoped nested translations
- plurals: PluralResolver and the built-in plural rule table
- formatters: PluralFormatter, InterpolationFormatter and FormatterPipeline
- loader: TranslationLoader contract, CompositeLoader, CachedLoader, DictLoader
- files / remote: FileLoader, YAMLTranslationLoader and RemoteLoader
- translator: Translator service
- detector: LocaleDetector and LanguageNegotiator
- factory: create_translator() from settings
"""

from polyglot.i18n.detector import LanguageNegotiator, LocaleDetector
from polyglot.i18n.exceptions import (
    AllLoadersExhaustedError,
    ConfigurationError,
    I18nError,
    LoaderError,
    LoaderTimeoutError,
    UnsupportedLocaleError,
)
from polyglot.i18n.factory import create_translator
from polyglot.i18n.files import FileLoader, YAMLTranslationLoader
from polyglot.i18n.formatters import (
    Formatter,
    FormatterPipeline,
    InterpolationFormatter,
    PluralFormatter,
    create_formatter_pipeline,
)
from polyglot.i18n.loader import (
    CachedLoader,
    CompositeLoader,
    DictLoader,
    TranslationLoader,
    create_dict_loader,
)
from polyglot.i18n.models import (
    InterpolationConfig,
    PluralizationConfig,
    TranslateOptions,
    TranslatorConfig,
)
from polyglot.i18n.plurals import PluralResolver
from polyglot.i18n.remote import RemoteLoader, create_remote_loader
from polyglot.i18n.store import TranslationStore
from polyglot.i18n.translator import Translator

__all__ = [
    "AllLoadersExhaustedError",
    "CachedLoader",
    "CompositeLoader",
    "ConfigurationError",
    "DictLoader",
    "FileLoader",
    "Formatter",
    "FormatterPipeline",
    "I18nError",
    "InterpolationConfig",
    "InterpolationFormatter",
    "LanguageNegotiator",
    "LoaderError",
    "LoaderTimeoutError",
    "LocaleDetector",
    "PluralFormatter",
    "PluralResolver",
    "PluralizationConfig",
    "RemoteLoader",
    "TranslateOptions",
    "TranslationLoader",
    "TranslationStore",
    "Translator",
    "TranslatorConfig",
    "UnsupportedLocaleError",
    "YAMLTranslationLoader",
    "create_dict_loader",
    "create_formatter_pipeline",
    "create_remote_loader",
    "create_translator",
]
