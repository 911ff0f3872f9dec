"""
Language registry for mapping file extensions to comment syntax categories.
"""

import logging
import os
from pathlib import Path

import yaml

from .models import UNSUPPORTED_LANGUAGE, LanguageCategory, LanguageSpec

logger = logging.getLogger(__name__)

# Default path to the languages configuration file
_DEFAULT_LANGUAGES_CONFIG = Path(__file__).parent.parent / "languages.yaml"


class LanguageRegistry:
    """
    Extensible registry for mapping file extensions to languages.

    Supports loading from YAML configuration and runtime registration, so
    new extensions can be stripped without touching the stripper itself.

    Example:
        >>> registry = LanguageRegistry()
        >>> registry.register("kotlin", [".kt"], LanguageCategory.C_STYLE, name="Kotlin")
        >>> registry.detect(".kt").category
        <LanguageCategory.C_STYLE: 'c_style'>

        >>> # Load from custom config
        >>> registry = LanguageRegistry.from_yaml("custom_languages.yaml")
    """

    def __init__(self, load_defaults: bool = True):
        """
        Initialize the language registry.

        Args:
            load_defaults: If True, load default language mappings from languages.yaml.
        """
        self._extension_to_language: dict[str, LanguageSpec] = {}
        self._language_to_extensions: dict[str, set[str]] = {}

        if load_defaults:
            self._load_from_yaml(_DEFAULT_LANGUAGES_CONFIG)

    @classmethod
    def from_yaml(cls, config_path: Path | str) -> "LanguageRegistry":
        """
        Create a LanguageRegistry from a YAML configuration file.

        Raises:
            ValueError: If the config file format is invalid
        """
        registry = cls(load_defaults=False)
        registry._load_from_yaml(Path(config_path))
        return registry

    def _load_from_yaml(self, config_path: Path) -> None:
        """
        Load language mappings from a YAML file.

        Expected format:
            language_id:
              name: Display Name
              category: c_style | sql | json
              extensions:
                - .ext1
                - .ext2
        """
        if not config_path.exists():
            logger.warning(f"Languages config not found: {config_path}, using empty registry")
            return

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse languages config: {e}")
            raise ValueError(f"Invalid YAML in languages config: {e}") from e

        if data is None:
            return

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid languages config format: expected dict, got {type(data)}"
            )

        for language, entry in data.items():
            if not isinstance(entry, dict) or not isinstance(entry.get("extensions"), list):
                logger.warning(f"Invalid definition for {language}: expected mapping with extensions")
                continue
            try:
                category = LanguageCategory(entry.get("category", "unsupported"))
            except ValueError:
                logger.warning(f"Unknown category for {language}: {entry.get('category')}")
                continue
            self.register(
                str(language),
                [str(ext) for ext in entry["extensions"]],
                category,
                name=str(entry.get("name", language)),
            )

    def register(
        self,
        language: str,
        extensions: list[str],
        category: LanguageCategory,
        name: str | None = None,
    ) -> "LanguageRegistry":
        """
        Register a language with its file extensions.

        Returns:
            Self for method chaining
        """
        spec = LanguageSpec(language=language, name=name or language, category=category)
        for ext in extensions:
            ext_lower = ext.lower()
            self._extension_to_language[ext_lower] = spec
            self._language_to_extensions.setdefault(language, set()).add(ext_lower)
        return self

    def unregister(self, language: str) -> "LanguageRegistry":
        """Remove a language and all its extensions from the registry."""
        if language in self._language_to_extensions:
            for ext in self._language_to_extensions[language]:
                self._extension_to_language.pop(ext, None)
            del self._language_to_extensions[language]
        return self

    def detect(self, extension: str) -> LanguageSpec:
        """
        Detect language from file extension.

        Args:
            extension: File extension including the dot (e.g., '.ts')

        Returns:
            LanguageSpec, or the unsupported spec if not recognized
        """
        return self._extension_to_language.get(extension.lower(), UNSUPPORTED_LANGUAGE)

    def detect_from_path(self, file_path: str | Path) -> LanguageSpec:
        """Detect language from a file path."""
        return self.detect(os.path.splitext(str(file_path))[1])

    def get_extensions(self, language: str) -> set[str]:
        return self._language_to_extensions.get(language, set()).copy()

    def is_supported(self, extension: str) -> bool:
        """Check if an extension is registered."""
        return extension.lower() in self._extension_to_language


# Global default registry instance
_default_registry = LanguageRegistry()


def get_default_registry() -> LanguageRegistry:
    """Get the global default language registry."""
    return _default_registry


def detect_language(file_path: str | Path, registry: LanguageRegistry | None = None) -> LanguageCategory:
    """Detect the comment syntax category of a file from its extension."""
    reg = registry or get_default_registry()
    return reg.detect_from_path(file_path).category


def get_file_type_name(file_path: str | Path, registry: LanguageRegistry | None = None) -> str:
    """Get the human-readable language name for a file ('TypeScript', 'Unsupported', ...)."""
    reg = registry or get_default_registry()
    return reg.detect_from_path(file_path).name
