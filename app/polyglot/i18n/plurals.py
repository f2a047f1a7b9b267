"""Plural rule table and plural-form selection.

A plural rule maps a non-negative count to the index of one of the forms
its locale distinguishes. Rules are looked up by exact locale, then by
base language, then fall back to English.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from polyglot.i18n.models import PluralRule, base_language

PLURAL_CATEGORIES = ("zero", "one", "two", "few", "many", "other")
PLURAL_SUFFIXES = tuple(f"_{category}" for category in PLURAL_CATEGORIES)
PLURAL_SEPARATOR = "|"


def _one_other(n: float) -> int:
    return 0 if n == 1 else 1


def _french(n: float) -> int:
    return 0 if n <= 1 else 1


def _russian(n: float) -> int:
    mod10 = n % 10
    mod100 = n % 100
    if mod10 == 1 and mod100 != 11:
        return 0
    if 2 <= mod10 <= 4 and (mod100 < 12 or mod100 > 14):
        return 1
    return 2


def _polish(n: float) -> int:
    mod10 = n % 10
    mod100 = n % 100
    if n == 1:
        return 0
    if 2 <= mod10 <= 4 and (mod100 < 12 or mod100 > 14):
        return 1
    return 2


def _czech(n: float) -> int:
    if n == 1:
        return 0
    if 2 <= n <= 4:
        return 1
    return 2


def _arabic(n: float) -> int:
    if n == 0:
        return 0
    if n == 1:
        return 1
    if n == 2:
        return 2
    mod100 = n % 100
    if 3 <= mod100 <= 10:
        return 3
    if mod100 >= 11:
        return 4
    return 5


def _single_form(n: float) -> int:
    return 0


PLURAL_RULES: Dict[str, PluralRule] = {
    "en": _one_other,
    "de": _one_other,
    "es": _one_other,
    "fr": _french,
    "it": _one_other,
    "pt": _one_other,
    "nl": _one_other,
    "ru": _russian,
    "pl": _polish,
    "cs": _czech,
    "ar": _arabic,
    "zh": _single_form,
    "ja": _single_form,
    "ko": _single_form,
    "vi": _single_form,
}

# Category names of each form a built-in rule can return, in index order.
PLURAL_FORMS: Dict[str, Tuple[str, ...]] = {
    "en": ("one", "other"),
    "de": ("one", "other"),
    "es": ("one", "other"),
    "fr": ("one", "other"),
    "it": ("one", "other"),
    "pt": ("one", "other"),
    "nl": ("one", "other"),
    "ru": ("one", "few", "many"),
    "pl": ("one", "few", "many"),
    "cs": ("one", "few", "other"),
    "ar": ("zero", "one", "two", "few", "many", "other"),
    "zh": ("other",),
    "ja": ("other",),
    "ko": ("other",),
    "vi": ("other",),
}


class PluralResolver:
    """Resolves plural form indexes and key suffixes for a count.

    A rule returns the index of a form among the forms its locale uses
    (English: one, other; Russian: one, few, many). The category names of
    those forms turn an index into a key suffix. Rules registered without
    category names map indexes positionally onto PLURAL_CATEGORIES.

    Attributes:
        locale: Locale used when a caller does not name one.
    """

    def __init__(
        self,
        rules: Optional[Mapping[str, PluralRule]] = None,
        locale: str = "en",
    ):
        """Initialize the resolver.

        Args:
            rules: Overrides merged over the built-in table; an override
                fully replaces the built-in rule (and its category names)
                for its locale.
            locale: Default locale.
        """
        self._rules: Dict[str, PluralRule] = dict(PLURAL_RULES)
        self._forms: Dict[str, Tuple[str, ...]] = dict(PLURAL_FORMS)
        for rule_locale, rule in (rules or {}).items():
            self.add_rule(rule_locale, rule)
        self.locale = locale

    def set_locale(self, locale: str) -> None:
        self.locale = locale

    def add_rule(
        self,
        locale: str,
        rule: PluralRule,
        categories: Optional[Sequence[str]] = None,
    ) -> None:
        """Register or replace the rule for a locale.

        Args:
            locale: Locale or base language the rule applies to.
            rule: Function mapping a count to a form index.
            categories: Category names of the rule's forms, in index order.

        Raises:
            ValueError: If a category name is not a CLDR plural category.
        """
        lowered = locale.lower()
        self._rules[lowered] = rule
        if categories is None:
            self._forms.pop(lowered, None)
            return
        unknown = [c for c in categories if c not in PLURAL_CATEGORIES]
        if unknown:
            raise ValueError(f"Unknown plural categories: {unknown}")
        self._forms[lowered] = tuple(categories)

    def _lookup(self, locale: str) -> str:
        lowered = locale.lower()
        if lowered in self._rules:
            return lowered
        if base_language(lowered) in self._rules:
            return base_language(lowered)
        return "en"

    def get_rule(self, locale: str) -> PluralRule:
        return self._rules[self._lookup(locale)]

    def get_plural_form_index(self, count: float, locale: Optional[str] = None) -> int:
        """Get the plural form index for a count.

        Args:
            count: Quantity; its absolute value is used.
            locale: Locale whose rule applies (default: self.locale).

        Returns:
            Form index, clamped to [0, 5].
        """
        index = self.get_rule(locale or self.locale)(abs(count))
        return max(0, min(int(index), len(PLURAL_CATEGORIES) - 1))

    def get_plural_category(self, count: float, locale: Optional[str] = None) -> str:
        """Get the category name (e.g. "few") selected for a count."""
        rule_locale = self._lookup(locale or self.locale)
        index = self.get_plural_form_index(count, rule_locale)
        forms = self._forms.get(rule_locale)
        if forms:
            return forms[min(index, len(forms) - 1)]
        return PLURAL_CATEGORIES[index]

    def get_plural_key_suffix(self, count: float, locale: Optional[str] = None) -> str:
        """Get the key suffix (e.g. "_one") for a count.

        The suffix is the locale's category name, not a position in
        PLURAL_SUFFIXES: for "en" a count of 5 gives "_other", where
        positional suffix sets would give "_one" (index 1). Key sets built
        around positional suffixes need renaming to category names.
        """
        return f"_{self.get_plural_category(count, locale)}"

    def select_plural_form(
        self, value: str, count: float, locale: Optional[str] = None
    ) -> str:
        """Pick one of the "|"-separated forms of a value.

        With fewer forms than the rule distinguishes, the last form absorbs
        every index beyond it.

        Example:
            >>> PluralResolver().select_plural_form("apple | apples", 3, "en")
            'apples'
        """
        forms = [form.strip() for form in value.split(PLURAL_SEPARATOR)]
        index = self.get_plural_form_index(count, locale)
        return forms[min(index, len(forms) - 1)]


def analyze_plural_key(key: str) -> Tuple[str, bool]:
    """Split a plural suffix off a key.

    Returns:
        (base_key, is_plural_key)
    """
    for suffix in PLURAL_SUFFIXES:
        if key.endswith(suffix):
            return key[: -len(suffix)], True
    return key, False


def get_plural_key_variants(base_key: str) -> List[str]:
    """All plural-suffixed forms of a key, in category order."""
    return [f"{base_key}{suffix}" for suffix in PLURAL_SUFFIXES]
