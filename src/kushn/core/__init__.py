"""
Core Layer - Ignore rules, file scanning, hashing and configuration components.
"""

from kushn.core.config import (
    KushnConfig,
    LoggingConfig,
    OutputConfig,
    ScanConfig,
    load_config,
)
from kushn.core.errors import (
    ConfigError,
    EntryUnreadableError,
    KushnError,
    RootUnreadableError,
)
from kushn.core.file_scanner import (
    EntryFailure,
    FileScanner,
    FileScannerInterface,
    HashRecord,
    Manifest,
    ScanEntry,
)
from kushn.core.hashing import calculate_file_hash
from kushn.core.ignore_set import DEFAULT_IGNORE_FILE, IgnoreRule, IgnoreSet, RuleKind

__all__ = [
    # Config
    "KushnConfig",
    "ScanConfig",
    "OutputConfig",
    "LoggingConfig",
    "load_config",
    # Errors
    "KushnError",
    "RootUnreadableError",
    "EntryUnreadableError",
    "ConfigError",
    # FileScanner
    "FileScanner",
    "FileScannerInterface",
    "ScanEntry",
    "HashRecord",
    "EntryFailure",
    "Manifest",
    # Hashing
    "calculate_file_hash",
    # Ignore rules
    "DEFAULT_IGNORE_FILE",
    "IgnoreRule",
    "IgnoreSet",
    "RuleKind",
]
