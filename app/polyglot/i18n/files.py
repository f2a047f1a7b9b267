"""File-based translation loaders.

FileLoader reads one JSON or YAML file per locale from a path pattern.
YAMLTranslationLoader merges every ``<domain>.<locale>.yml`` file of a
directory into one tree per locale.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, List, Set, Union

import yaml

from polyglot.i18n.exceptions import ConfigurationError, LoaderError
from polyglot.i18n.loader import TranslationLoader, validate_tree
from polyglot.i18n.models import TranslationTree, merge_tree
from polyglot.logging import get_module_logger

logger = get_module_logger()

LOCALE_PLACEHOLDER = "{locale}"


def _parse_file(path: Path) -> Any:
    """Parse a JSON or YAML file, chosen by suffix.

    Raises:
        LoaderError: If the file cannot be read or parsed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except OSError as e:
        raise LoaderError(f"Failed to read {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error("translation_file_parse_error", file=str(path), error=str(e))
        raise LoaderError(f"Failed to parse {path}: {e}") from e


class FileLoader(TranslationLoader):
    """Loads a locale from a file path pattern.

    Usage:
        loader = FileLoader("locales/{locale}.json")
        tree = await loader.load("fr")  # reads locales/fr.json
    """

    name = "file"

    def __init__(self, path_pattern: Union[str, Path]):
        """Initialize file loader.

        Args:
            path_pattern: Path containing a "{locale}" placeholder.

        Raises:
            ConfigurationError: If the pattern lacks the placeholder.
        """
        self.path_pattern = str(path_pattern)
        if LOCALE_PLACEHOLDER not in self.path_pattern:
            raise ConfigurationError(
                f"Path pattern must contain {LOCALE_PLACEHOLDER}: {self.path_pattern}"
            )

    def path_for(self, locale: str) -> Path:
        return Path(self.path_pattern.replace(LOCALE_PLACEHOLDER, locale))

    async def load(self, locale: str) -> TranslationTree:
        path = self.path_for(locale)
        if not path.exists():
            raise LoaderError(f"No translation file for locale {locale}: {path}")
        data = await asyncio.to_thread(_parse_file, path)
        return validate_tree(data or {}, self.name)

    def supports(self, locale: str) -> bool:
        return self.path_for(locale).exists()


class YAMLTranslationLoader(TranslationLoader):
    """Loader for YAML translation files grouped by domain.

    Expects files named ``<domain>.<locale>.yml`` in the translations
    directory; every file of a locale is merged into one tree.

    Attributes:
        translations_dir: Path to directory containing YAML files.
    """

    name = "yaml"

    def __init__(self, translations_dir: Union[str, Path]):
        """Initialize YAML translation loader.

        Args:
            translations_dir: Path to directory with YAML translation files.

        Raises:
            ConfigurationError: If the directory does not exist.
        """
        self.translations_dir = Path(translations_dir)

        if not self.translations_dir.exists():
            raise ConfigurationError(
                f"Translations directory not found: {self.translations_dir}"
            )

        logger.info(
            "initialized_yaml_loader",
            translations_dir=str(self.translations_dir),
        )

    def _files_for(self, locale: str) -> List[Path]:
        return sorted(self.translations_dir.glob(f"*.{locale}.yml"))

    def _read(self, locale: str) -> TranslationTree:
        yaml_files = self._files_for(locale)
        if not yaml_files:
            raise LoaderError(
                f"No translation files found for locale {locale} in {self.translations_dir}"
            )

        tree: TranslationTree = {}
        for yaml_file in yaml_files:
            data = _parse_file(yaml_file)
            if not data:
                continue
            if not isinstance(data, dict):
                logger.warning(
                    "invalid_yaml_format", file=str(yaml_file), expected="dict"
                )
                continue
            merge_tree(tree, data)

        logger.info(
            "loaded_translations",
            locale=locale,
            file_count=len(yaml_files),
            namespace_count=len(tree),
        )
        return tree

    async def load(self, locale: str) -> TranslationTree:
        """Load translations for a locale from YAML files.

        Args:
            locale: Locale to load.

        Returns:
            Merged tree of every file for the locale.

        Raises:
            LoaderError: If no file exists for the locale or parsing fails.
        """
        return await asyncio.to_thread(self._read, locale)

    def supports(self, locale: str) -> bool:
        return bool(self._files_for(locale))

    def discover_locales(self) -> List[str]:
        """List locales that have at least one file.

        Locale is taken from the last dotted part of the file stem
        (e.g., "incident.en-US.yml" -> "en-US").
        """
        locales_found: Set[str] = set()
        for yaml_file in self.translations_dir.glob("*.yml"):
            parts = yaml_file.stem.split(".")
            if len(parts) >= 2:
                locales_found.add(parts[-1])
        return sorted(locales_found)
