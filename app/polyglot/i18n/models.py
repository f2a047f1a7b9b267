"""Translation models for the i18n system.

Defines the translation tree types, the per-call options and the
translator configuration, plus the structural helpers used to clone and
merge translation trees.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

# A translation tree maps path segments to string leaves or nested trees.
TranslationTree = Dict[str, Any]
TranslationsMap = Dict[str, TranslationTree]

PluralRule = Callable[[float], int]


def base_language(locale: str) -> str:
    """Get language part of a locale (e.g., "pt" from "pt-BR").

    Args:
        locale: Locale identifier.

    Returns:
        Language code.
    """
    return locale.split("-")[0]


def locales_match(left: Optional[str], right: Optional[str]) -> bool:
    """Compare two locale identifiers case-insensitively."""
    if left is None or right is None:
        return left is right
    return left.lower() == right.lower()


@dataclass(frozen=True)
class TranslateOptions:
    """Runtime parameters of a single translation request.

    Attributes:
        values: Interpolation values keyed by placeholder name.
        count: Quantity driving plural selection.
        locale: Locale overriding the translator's current locale.
        default_value: Text used when the key resolves nowhere.
        context: Free-form disambiguation hint passed to handlers.
    """

    values: Optional[Dict[str, Any]] = None
    count: Optional[float] = None
    locale: Optional[str] = None
    default_value: Optional[str] = None
    context: Optional[str] = None


MissingTranslationHandler = Callable[[str, str, TranslateOptions], str]


@dataclass
class InterpolationConfig:
    """Placeholder syntax for interpolation.

    Attributes:
        prefix: Opening delimiter.
        suffix: Closing delimiter.
        escape_html: HTML-escape substituted values.
    """

    prefix: str = "{{"
    suffix: str = "}}"
    escape_html: bool = False


@dataclass
class PluralizationConfig:
    """Plural rule overrides keyed by locale or base language."""

    rules: Dict[str, PluralRule] = field(default_factory=dict)


@dataclass
class TranslatorConfig:
    """Configuration surface of the Translator.

    Attributes:
        default_locale: Last locale tried in the fallback chain.
        current_locale: Initial active locale (defaults to default_locale).
        supported_locales: Locales accepted by set_locale; empty means any.
        translations: Initial snapshot of locale -> tree.
        detect_locale: Ask the locale detector for the initial locale.
        fallback_locales: Locales tried in order before the default locale.
        debug: Log missing translations and exhausted loaders.
        on_missing_translation: Handler producing text for unresolved keys.
        interpolation: Placeholder syntax.
        pluralization: Plural rule overrides.
    """

    default_locale: str = "en"
    current_locale: Optional[str] = None
    supported_locales: List[str] = field(default_factory=list)
    translations: TranslationsMap = field(default_factory=dict)
    detect_locale: bool = False
    fallback_locales: List[str] = field(default_factory=list)
    debug: bool = False
    on_missing_translation: Optional[MissingTranslationHandler] = None
    interpolation: InterpolationConfig = field(default_factory=InterpolationConfig)
    pluralization: PluralizationConfig = field(default_factory=PluralizationConfig)


def clone_tree(tree: Mapping[str, Any]) -> TranslationTree:
    """Deep-copy a translation tree.

    Nested mappings become fresh dicts; leaves (strings and any other
    scalar) are kept as-is.

    Args:
        tree: Tree to copy.

    Returns:
        Independent copy of the tree.
    """
    result: TranslationTree = {}
    for key, value in tree.items():
        if isinstance(value, Mapping):
            result[key] = clone_tree(value)
        else:
            result[key] = value
    return result


def merge_tree(target: TranslationTree, source: Mapping[str, Any]) -> None:
    """Deep-merge source into target in place.

    When both sides hold a sub-tree for a key they are merged recursively;
    otherwise the incoming value (cloned) replaces the existing one.

    Args:
        target: Tree to update.
        source: Tree whose entries win.
    """
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(value, Mapping) and isinstance(existing, dict):
            merge_tree(existing, value)
        elif isinstance(value, Mapping):
            target[key] = clone_tree(value)
        else:
            target[key] = value


def count_leaves(tree: Mapping[str, Any]) -> int:
    """Count string leaves in a tree, recursively."""
    count = 0
    for value in tree.values():
        if isinstance(value, str):
            count += 1
        elif isinstance(value, Mapping):
            count += count_leaves(value)
    return count
