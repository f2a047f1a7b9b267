"""Text formatters applied to resolved translation values.

A formatter is a pure transform of a string given the request options.
The translator chains a PluralFormatter and an InterpolationFormatter in a
FormatterPipeline.
"""

import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from polyglot.i18n.exceptions import ConfigurationError
from polyglot.i18n.models import InterpolationConfig, TranslateOptions
from polyglot.i18n.plurals import PLURAL_SEPARATOR, PluralResolver

HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}
_HTML_ESCAPE_PATTERN = re.compile(r"[&<>\"']")


def escape_html(text: str) -> str:
    """Escape the five HTML-significant characters."""
    return _HTML_ESCAPE_PATTERN.sub(lambda m: HTML_ESCAPES[m.group(0)], text)


class Formatter(ABC):
    """Contract for text formatters."""

    name: str = "formatter"

    @abstractmethod
    def format(self, value: str, options: TranslateOptions) -> str:
        """Transform a value.

        Args:
            value: Text to transform.
            options: Options of the translation request.

        Returns:
            Transformed text.
        """
        pass


class FormatterPipeline(Formatter):
    """Applies formatters in order, feeding each output to the next."""

    name = "pipeline"

    def __init__(self, formatters: Sequence[Formatter]):
        self.formatters = list(formatters)

    def format(self, value: str, options: TranslateOptions) -> str:
        for formatter in self.formatters:
            value = formatter.format(value, options)
        return value


def create_formatter_pipeline(formatters: Sequence[Formatter]) -> FormatterPipeline:
    return FormatterPipeline(formatters)


class PluralFormatter(Formatter):
    """Selects one "|"-separated variant based on options.count."""

    name = "plural"

    def __init__(self, resolver: PluralResolver):
        self.resolver = resolver

    def format(self, value: str, options: TranslateOptions) -> str:
        if options.count is None or PLURAL_SEPARATOR not in value:
            return value
        locale = options.locale or self.resolver.locale
        return self.resolver.select_plural_form(value, options.count, locale)


class InterpolationFormatter(Formatter):
    """Substitutes placeholders such as {{name}} with options.values.

    Placeholders without a matching value are left untouched, and
    substituted values are never scanned again.

    Attributes:
        config: Delimiters and HTML escaping.
    """

    name = "interpolation"

    def __init__(self, config: Optional[InterpolationConfig] = None):
        self.config = InterpolationConfig()
        self._pattern = None
        self.set_config(**vars(config or InterpolationConfig()))

    def set_config(
        self,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        escape_html: Optional[bool] = None,
    ) -> None:
        """Update delimiters and escaping; omitted fields are unchanged.

        Raises:
            ConfigurationError: If a delimiter is empty.
        """
        new_prefix = self.config.prefix if prefix is None else prefix
        new_suffix = self.config.suffix if suffix is None else suffix
        if not new_prefix or not new_suffix:
            raise ConfigurationError("Interpolation prefix and suffix must be non-empty")

        self.config = InterpolationConfig(
            prefix=new_prefix,
            suffix=new_suffix,
            escape_html=self.config.escape_html if escape_html is None else escape_html,
        )
        self._pattern = re.compile(
            rf"{re.escape(new_prefix)}\s*([\w.]+)\s*{re.escape(new_suffix)}"
        )

    def format(self, value: str, options: TranslateOptions) -> str:
        values = options.values
        if not values:
            return value

        def replace(match: re.Match) -> str:
            name = match.group(1).strip()
            if name not in values:
                return match.group(0)
            replacement = str(values[name])
            return escape_html(replacement) if self.config.escape_html else replacement

        return self._pattern.sub(replace, value)
