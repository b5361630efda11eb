"""
Path utilities for kushn.

Provides relative path normalization and scan root validation used by the
ignore matcher, the scanner, and the CLI.
"""

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Optional


@dataclass
class PathValidationResult:
    """Result of path validation.

    Attributes:
        valid: True if the path can be used as a scan root.
        error_message: Human-readable error message if validation failed.
    """
    valid: bool
    error_message: Optional[str] = None


def normalize_separators(text: str) -> str:
    """Replace Windows separators with forward slashes."""
    return text.replace("\\", "/")


def normalize_pattern_path(text: str) -> str:
    """
    Normalize a path-like string for comparison.

    Converts separators to ``/``, collapses repeated slashes and drops
    ``./`` segments. Leading and trailing slashes are kept since they carry
    meaning in ignore rules.

    Args:
        text: Raw path or pattern text.

    Returns:
        Normalized string.
    """
    text = normalize_separators(text)
    leading = text.startswith("/")
    trailing = text.endswith("/") and len(text) > 1

    parts = [part for part in text.split("/") if part and part != "."]
    normalized = "/".join(parts)

    if leading:
        normalized = "/" + normalized
    if trailing and parts:
        normalized += "/"
    return normalized


def to_relative_posix(path: PurePath, root: PurePath) -> str:
    """
    Express ``path`` relative to ``root`` with forward-slash separators.

    Args:
        path: Path under the root (absolute or already relative).
        root: Scan root.

    Returns:
        Relative path string such as ``folder/b.txt``.

    Raises:
        ValueError: If an absolute ``path`` is not under ``root``.
    """
    if path.is_absolute():
        path = path.relative_to(root)
    return path.as_posix()


def validate_scan_root(path: str | Path) -> PathValidationResult:
    """
    Validate that a path is usable as a scan root.

    Args:
        path: Path to validate (string or Path object).

    Returns:
        PathValidationResult with valid=True if the path is an existing
        directory, otherwise valid=False with an error message.
    """
    try:
        p = Path(path) if isinstance(path, str) else path

        if not p.exists():
            return PathValidationResult(
                valid=False,
                error_message=f"Path '{path}' does not exist"
            )

        if not p.is_dir():
            return PathValidationResult(
                valid=False,
                error_message=f"Path '{path}' is not a directory"
            )

        return PathValidationResult(valid=True)

    except (OSError, ValueError) as e:
        return PathValidationResult(
            valid=False,
            error_message=f"Invalid path '{path}': {e}"
        )
