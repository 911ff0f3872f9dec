"""
Configuration module for treepack.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.

Configuration objects are frozen: overrides produce new instances via
``dataclasses.replace`` and nothing is mutated after construction.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from treepack.core.errors import ConfigError

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section) or {}
    value = section_defaults.get(key, fallback)
    # Hand out copies so mutable defaults are never shared between instances
    return list(value) if isinstance(value, list) else value


@dataclass(frozen=True)
class ScanConfig:
    """Configuration for directory-walk mode."""

    rules_file_name: str = field(
        default_factory=lambda: _get_default("scan", "rules_file_name", "blacklist.txt")
    )
    output_file_name: str = field(
        default_factory=lambda: _get_default("scan", "output_file_name", "project_files.txt")
    )
    include_sensitive_config: bool = field(
        default_factory=lambda: _get_default("scan", "include_sensitive_config", False)
    )
    strip_comments: bool = field(
        default_factory=lambda: _get_default("scan", "strip_comments", False)
    )
    progress_interval: int = field(
        default_factory=lambda: _get_default("scan", "progress_interval", 100)
    )
    extra_rules: list[str] = field(
        default_factory=lambda: _get_default("scan", "extra_rules", [])
    )


@dataclass(frozen=True)
class BundleConfig:
    """Configuration for file-list aggregation mode."""

    files_list: str = field(
        default_factory=lambda: _get_default("bundle", "files_list", "files-list.txt")
    )
    output_file: str = field(
        default_factory=lambda: _get_default("bundle", "output_file", "prompt.txt")
    )
    strip_comments: bool = field(
        default_factory=lambda: _get_default("bundle", "strip_comments", True)
    )
    skip_directories: bool = field(
        default_factory=lambda: _get_default("bundle", "skip_directories", True)
    )
    root_folder: Optional[str] = field(
        default_factory=lambda: _get_default("bundle", "root_folder", None)
    )
    exclude: list[str] = field(default_factory=lambda: _get_default("bundle", "exclude", []))
    exclude_from: Optional[str] = field(
        default_factory=lambda: _get_default("bundle", "exclude_from", None)
    )
    exclude_default: bool = field(
        default_factory=lambda: _get_default("bundle", "exclude_default", False)
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "INFO"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


_SECTIONS: dict[str, type] = {
    "scan": ScanConfig,
    "bundle": BundleConfig,
    "logging": LoggingConfig,
}


@dataclass(frozen=True)
class TreepackConfig:
    """Main configuration class for treepack."""

    scan: ScanConfig = field(default_factory=ScanConfig)
    bundle: BundleConfig = field(default_factory=BundleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "TreepackConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            TreepackConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ConfigError: If the file format is unsupported or malformed
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        try:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(content) or {}
            elif path.suffix == ".json":
                data = json.loads(content) if content.strip() else {}
            else:
                raise ConfigError(f"Unsupported config file format: {path.suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid configuration in {path}: expected a mapping")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "TreepackConfig":
        """Create TreepackConfig from a dictionary."""
        sections: dict[str, Any] = {}
        for name, section_cls in _SECTIONS.items():
            if name not in data:
                continue
            values = data[name] or {}
            known = {f.name for f in fields(section_cls)}
            unknown = set(values) - known
            if unknown:
                raise ConfigError(
                    f"Unknown keys in '{name}' section: {', '.join(sorted(unknown))}"
                )
            sections[name] = section_cls(**values)
        return cls(**sections)

    def with_env_overrides(self, environ: Optional[dict[str, str]] = None) -> "TreepackConfig":
        """
        Return a copy with environment variable overrides applied.

        Environment variables follow the pattern: TREEPACK_<SECTION>_<KEY>
        Examples:
            - TREEPACK_SCAN_INCLUDE_SENSITIVE_CONFIG
            - TREEPACK_SCAN_PROGRESS_INTERVAL
            - TREEPACK_BUNDLE_ROOT_FOLDER
            - TREEPACK_LOGGING_LEVEL

        The DEBUG variable, when truthy, forces the DEBUG log level.
        """
        env = os.environ if environ is None else environ

        env_mappings = {
            # Scan config
            "TREEPACK_SCAN_RULES_FILE_NAME": ("scan", "rules_file_name", str),
            "TREEPACK_SCAN_OUTPUT_FILE_NAME": ("scan", "output_file_name", str),
            "TREEPACK_SCAN_INCLUDE_SENSITIVE_CONFIG": ("scan", "include_sensitive_config", _parse_bool),
            "TREEPACK_SCAN_STRIP_COMMENTS": ("scan", "strip_comments", _parse_bool),
            "TREEPACK_SCAN_PROGRESS_INTERVAL": ("scan", "progress_interval", int),
            "TREEPACK_SCAN_EXTRA_RULES": ("scan", "extra_rules", _parse_list),
            # Bundle config
            "TREEPACK_BUNDLE_FILES_LIST": ("bundle", "files_list", str),
            "TREEPACK_BUNDLE_OUTPUT_FILE": ("bundle", "output_file", str),
            "TREEPACK_BUNDLE_STRIP_COMMENTS": ("bundle", "strip_comments", _parse_bool),
            "TREEPACK_BUNDLE_SKIP_DIRECTORIES": ("bundle", "skip_directories", _parse_bool),
            "TREEPACK_BUNDLE_ROOT_FOLDER": ("bundle", "root_folder", str),
            "TREEPACK_BUNDLE_EXCLUDE": ("bundle", "exclude", _parse_list),
            "TREEPACK_BUNDLE_EXCLUDE_FROM": ("bundle", "exclude_from", str),
            "TREEPACK_BUNDLE_EXCLUDE_DEFAULT": ("bundle", "exclude_default", _parse_bool),
            # Logging config
            "TREEPACK_LOGGING_LEVEL": ("logging", "level", str),
            "TREEPACK_LOGGING_FORMAT": ("logging", "format", str),
        }

        changes: dict[str, dict[str, Any]] = {}
        for env_var, (section, key, converter) in env_mappings.items():
            value = env.get(env_var)
            if value is None:
                continue
            try:
                changes.setdefault(section, {})[key] = converter(value)
            except ValueError as e:
                raise ConfigError(f"Invalid value for {env_var}: {value!r}") from e

        if _parse_bool(env.get("DEBUG", "")):
            changes.setdefault("logging", {})["level"] = "DEBUG"

        config = self
        for section, values in changes.items():
            config = config.with_section(section, **values)
        return config

    def with_section(self, section: str, **values: Any) -> "TreepackConfig":
        """Return a copy with fields of one section replaced."""
        if section not in _SECTIONS:
            raise ConfigError(f"Unknown configuration section: {section}")
        return replace(self, **{section: replace(getattr(self, section), **values)})

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Raises:
            ConfigError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ConfigError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.strip().lower() in ("true", "1", "yes", "on")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to a list of non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> TreepackConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        TreepackConfig instance
    """
    if config_path:
        config = TreepackConfig.from_file(config_path)
    else:
        config = TreepackConfig()

    if apply_env:
        config = config.with_env_overrides()

    return config
