"""
Configuration module for kushn.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from kushn.core.errors import ConfigError

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
    return section_defaults.get(key, fallback)


@dataclass
class ScanConfig:
    """Configuration for directory traversal and hashing."""

    ignore_file: str = field(
        default_factory=lambda: _get_default("scan", "ignore_file", ".kushnignore")
    )
    follow_symlinks: bool = field(
        default_factory=lambda: _get_default("scan", "follow_symlinks", True)
    )
    max_workers: int = field(default_factory=lambda: _get_default("scan", "max_workers", 1))
    chunk_size: int = field(default_factory=lambda: _get_default("scan", "chunk_size", 65536))
    extra_ignore_patterns: list[str] = field(
        default_factory=lambda: list(_get_default("scan", "extra_ignore_patterns", []))
    )


@dataclass
class OutputConfig:
    """Configuration for the written manifest."""

    file_name: str = field(
        default_factory=lambda: _get_default("output", "file_name", "kushn_result.json")
    )
    include_self_hash: bool = field(
        default_factory=lambda: _get_default("output", "include_self_hash", True)
    )
    indent: int = field(default_factory=lambda: _get_default("output", "indent", 2))


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default("logging", "format", "%(message)s")
    )


@dataclass
class KushnConfig:
    """Main configuration class for kushn."""

    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "KushnConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            KushnConfig instance with loaded values

        Raises:
            ConfigError: If the file is missing, malformed or has an
                         unsupported format
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        try:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(content) or {}
            elif path.suffix == ".json":
                data = json.loads(content) if content.strip() else {}
            else:
                raise ConfigError(f"Unsupported config file format: {path.suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to parse config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "KushnConfig":
        """Create KushnConfig from a dictionary."""
        config = cls()

        try:
            if "scan" in data:
                config.scan = ScanConfig(**data["scan"])
            if "output" in data:
                config.output = OutputConfig(**data["output"])
            if "logging" in data:
                config.logging = LoggingConfig(**data["logging"])
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        return config

    def apply_env_overrides(self) -> "KushnConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: KUSHN_<SECTION>_<KEY>
        Examples:
            - KUSHN_SCAN_MAX_WORKERS
            - KUSHN_SCAN_EXTRA_IGNORE_PATTERNS (comma separated)
            - KUSHN_OUTPUT_FILE_NAME
            - KUSHN_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Scan config
            "KUSHN_SCAN_IGNORE_FILE": ("scan", "ignore_file", str),
            "KUSHN_SCAN_FOLLOW_SYMLINKS": ("scan", "follow_symlinks", _parse_bool),
            "KUSHN_SCAN_MAX_WORKERS": ("scan", "max_workers", int),
            "KUSHN_SCAN_CHUNK_SIZE": ("scan", "chunk_size", int),
            "KUSHN_SCAN_EXTRA_IGNORE_PATTERNS": ("scan", "extra_ignore_patterns", _parse_list),
            # Output config
            "KUSHN_OUTPUT_FILE_NAME": ("output", "file_name", str),
            "KUSHN_OUTPUT_INCLUDE_SELF_HASH": ("output", "include_self_hash", _parse_bool),
            "KUSHN_OUTPUT_INDENT": ("output", "indent", int),
            # Logging config
            "KUSHN_LOGGING_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                try:
                    converted = converter(value)
                except ValueError as e:
                    raise ConfigError(f"Invalid value for {env_var}: {value!r}") from e
                setattr(getattr(self, section), key, converted)

        return self

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

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

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
    return value.lower() in ("true", "1", "yes", "on")


def _parse_list(value: str) -> list[str]:
    """Parse a comma separated string into a list of non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> KushnConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        KushnConfig instance
    """
    if config_path:
        config = KushnConfig.from_file(config_path)
    else:
        config = KushnConfig()

    if apply_env:
        config.apply_env_overrides()

    return config
