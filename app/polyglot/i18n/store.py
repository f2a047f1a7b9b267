"""Locale-scoped storage for translation trees.

The store is the only owner of translation data. Every tree it hands out
is a deep copy, so callers cannot mutate its state through a returned
reference.
"""

from typing import Any, List, Mapping, Optional

from polyglot.i18n.models import (
    TranslationsMap,
    TranslationTree,
    clone_tree,
    count_leaves,
    merge_tree,
)


class TranslationStore:
    """Nested key/value storage keyed by locale.

    Keys are dot-delimited paths into a locale's tree (e.g. "errors.notFound").
    Locale lookups are case-insensitive; the casing used when a locale was
    first written is kept for display and export.
    """

    def __init__(self, initial_translations: Optional[Mapping[str, Mapping]] = None):
        self._translations: TranslationsMap = {}
        if initial_translations:
            self.import_translations(initial_translations)

    def _find_locale(self, locale: str) -> Optional[str]:
        if locale in self._translations:
            return locale
        lowered = locale.lower()
        for stored in self._translations:
            if stored.lower() == lowered:
                return stored
        return None

    def _tree_for_write(self, locale: str) -> TranslationTree:
        stored = self._find_locale(locale)
        if stored is None:
            stored = locale
            self._translations[stored] = {}
        return self._translations[stored]

    def get(self, locale: str, key: str) -> Optional[str]:
        """Resolve a dotted key to its string value.

        Args:
            locale: Locale to read.
            key: Dot-delimited path.

        Returns:
            The string leaf, or None if the locale or path is absent, a
            segment on the way is a leaf, or the final node is not a string.
        """
        stored = self._find_locale(locale)
        if stored is None:
            return None

        current: Any = self._translations[stored]
        for segment in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(segment)
            if current is None:
                return None
        return current if isinstance(current, str) else None

    def has(self, locale: str, key: str) -> bool:
        return self.get(locale, key) is not None

    def set(self, locale: str, key: str, value: str) -> None:
        """Set a string at a dotted key, creating intermediate nodes.

        Any leaf found on the path is replaced by an empty sub-tree, so
        setting "a.b" when "a" holds a string discards that string.
        """
        segments = key.split(".")
        current = self._tree_for_write(locale)
        for segment in segments[:-1]:
            if not isinstance(current.get(segment), dict):
                current[segment] = {}
            current = current[segment]
        current[segments[-1]] = value

    def remove(self, locale: str, key: str) -> bool:
        """Remove the node at a dotted key.

        Returns:
            True if a node was removed, False if the path did not exist.
        """
        stored = self._find_locale(locale)
        if stored is None:
            return False

        segments = key.split(".")
        current = self._translations[stored]
        for segment in segments[:-1]:
            child = current.get(segment)
            if not isinstance(child, dict):
                return False
            current = child
        if segments[-1] in current:
            del current[segments[-1]]
            return True
        return False

    def get_locale(self, locale: str) -> Optional[TranslationTree]:
        """Return a copy of a locale's tree, or None if it has none."""
        stored = self._find_locale(locale)
        if stored is None:
            return None
        return clone_tree(self._translations[stored])

    def has_locale(self, locale: str) -> bool:
        return self._find_locale(locale) is not None

    def get_available_locales(self) -> List[str]:
        return list(self._translations.keys())

    def set_locale(self, locale: str, translations: Mapping[str, Any]) -> None:
        """Replace a locale's tree with a copy of the given one."""
        stored = self._find_locale(locale) or locale
        self._translations[stored] = clone_tree(translations)

    def merge_locale(self, locale: str, translations: Mapping[str, Any]) -> None:
        """Deep-merge a tree into a locale; incoming values win."""
        merge_tree(self._tree_for_write(locale), translations)

    def remove_locale(self, locale: str) -> bool:
        stored = self._find_locale(locale)
        if stored is None:
            return False
        del self._translations[stored]
        return True

    def clear(self) -> None:
        self._translations = {}

    def count(self, locale: str) -> int:
        """Count the string leaves stored for a locale."""
        stored = self._find_locale(locale)
        if stored is None:
            return 0
        return count_leaves(self._translations[stored])

    def export(self) -> TranslationsMap:
        """Return a deep copy of every locale's tree."""
        return {
            locale: clone_tree(tree) for locale, tree in self._translations.items()
        }

    def import_translations(
        self, translations: Mapping[str, Mapping], merge: bool = False
    ) -> None:
        """Load a full snapshot.

        Args:
            translations: Mapping of locale -> tree.
            merge: Merge each locale into existing data instead of
                replacing the whole map.
        """
        if merge:
            for locale, tree in translations.items():
                self.merge_locale(locale, tree)
        else:
            self._translations = {
                locale: clone_tree(tree) for locale, tree in translations.items()
            }
