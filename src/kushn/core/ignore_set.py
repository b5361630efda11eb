"""
IgnoreSet module for kushn.

Parses ``.kushnignore`` content into rules and decides whether a relative
path is excluded from the manifest. Supported rule forms:
- Plain names and nested paths (``folder``, ``folder/sub``)
- Extension wildcards (``*.log``), applied to files only
- Anchored paths (leading /), matched from the scan root only
- Directory-only paths (trailing /)
- Comments (lines starting with #)

Rules form a union: any matching rule excludes the entry.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable

from kushn.core.path_utils import normalize_pattern_path, normalize_separators

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILE = ".kushnignore"


class RuleKind(str, Enum):
    """Match strategy of an ignore rule."""

    EXTENSION_WILDCARD = "extension_wildcard"
    PATH_LITERAL = "path_literal"


@dataclass(frozen=True)
class IgnoreRule:
    """
    A parsed ignore rule.

    Attributes:
        raw: Line text as written in the ignore file (stripped)
        pattern: Normalized pattern used for matching, without anchor or
            trailing slash (e.g. "folder/sub")
        kind: Match strategy selected from the pattern shape
        anchored: True if the rule started with / (root-relative only)
        directory_only: True if the rule ended with / (matches directories only)
    """

    raw: str
    pattern: str
    kind: RuleKind
    anchored: bool = False
    directory_only: bool = False

    @classmethod
    def parse(cls, raw_line: str) -> "IgnoreRule":
        """
        Parse a stripped, non-comment line into an IgnoreRule.

        Never raises: odd patterns are kept as literals and simply never match.
        """
        pattern = normalize_pattern_path(raw_line)

        if pattern.startswith("*.") and "/" not in pattern:
            return cls(raw=raw_line, pattern=pattern, kind=RuleKind.EXTENSION_WILDCARD)

        anchored = False
        directory_only = False

        if pattern.endswith("/"):
            directory_only = True
            pattern = pattern.rstrip("/")

        if pattern.startswith("/"):
            anchored = True
            pattern = pattern.lstrip("/")

        return cls(
            raw=raw_line,
            pattern=pattern,
            kind=RuleKind.PATH_LITERAL,
            anchored=anchored,
            directory_only=directory_only,
        )

    @property
    def suffix(self) -> str:
        """Literal suffix for extension wildcards (e.g. ".log")."""
        return self.pattern[1:]

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        """
        Check whether this rule excludes a normalized relative path.

        Args:
            rel_path: Forward-slash path relative to the scan root
            is_dir: True if the entry is a directory

        Returns:
            True if the entry is excluded by this rule
        """
        if not self.pattern:
            return False

        if self.kind is RuleKind.EXTENSION_WILDCARD:
            if is_dir:
                return False
            return rel_path.rsplit("/", 1)[-1].endswith(self.suffix)

        return self._match_literal(rel_path, is_dir)

    def _match_literal(self, rel_path: str, is_dir: bool) -> bool:
        pattern_parts = self.pattern.split("/")
        path_parts = rel_path.split("/")
        width = len(pattern_parts)

        if width > len(path_parts):
            return False

        starts = [0] if self.anchored else range(len(path_parts) - width + 1)
        for start in starts:
            if path_parts[start:start + width] != pattern_parts:
                continue
            # Exact hit on the final segment: directory-only rules need a directory
            if start + width == len(path_parts):
                if not self.directory_only or is_dir:
                    return True
                continue
            # The entry sits beneath the matched path, which is therefore a directory
            return True

        return False


class IgnoreSet:
    """
    Immutable collection of ignore rules for one scan session.

    Build with ``from_text``, ``from_lines`` or ``load``; query with
    ``is_excluded``.
    """

    def __init__(self, rules: Iterable[IgnoreRule] = ()):
        self._rules: tuple[IgnoreRule, ...] = tuple(rules)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "IgnoreSet":
        """
        Parse ignore rules from lines of text.

        Blank lines and lines starting with # are skipped. Every other line
        becomes one rule.
        """
        rules: list[IgnoreRule] = []
        for line in lines:
            line = line.strip()

            if not line:
                continue

            if line.startswith("#"):
                continue

            rules.append(IgnoreRule.parse(line))

        return cls(rules)

    @classmethod
    def from_text(cls, text: str) -> "IgnoreSet":
        """Parse ignore rules from the full text of an ignore file."""
        return cls.from_lines(text.splitlines())

    @classmethod
    def load(cls, ignore_path: Path) -> "IgnoreSet":
        """
        Load rules from an ignore file.

        A missing file yields an empty set. Unreadable files are logged and
        also yield an empty set, so the scan always proceeds.

        Args:
            ignore_path: Path to the ignore file

        Returns:
            Parsed IgnoreSet
        """
        ignore_path = Path(ignore_path)

        if not ignore_path.is_file():
            logger.debug(f"Ignore file not found: {ignore_path}")
            return cls()

        try:
            content = ignore_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning(f"Invalid UTF-8 encoding in {ignore_path}: {e}")
            return cls()
        except PermissionError as e:
            logger.warning(f"Permission denied reading {ignore_path}: {e}")
            return cls()
        except OSError as e:
            logger.warning(f"Error reading {ignore_path}: {e}")
            return cls()

        ignore_set = cls.from_text(content)
        logger.debug(f"Loaded {len(ignore_set)} rules from {ignore_path}")
        return ignore_set

    def extend(self, patterns: Iterable[str]) -> "IgnoreSet":
        """Return a new IgnoreSet with extra patterns added."""
        return IgnoreSet(self._rules + IgnoreSet.from_lines(patterns).rules)

    @property
    def rules(self) -> tuple[IgnoreRule, ...]:
        """Return the parsed rules."""
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def is_excluded(self, rel_path: str, is_dir: bool = False) -> bool:
        """
        Check whether a path relative to the scan root is excluded.

        Args:
            rel_path: Path relative to the scan root; either separator style
            is accepted
            is_dir: True if the path is a directory

        Returns:
            True if any rule matches
        """
        return self.is_excluded_path(normalize_separators(rel_path), is_dir)

    def is_excluded_path(self, rel_path: str, is_dir: bool = False) -> bool:
        """
        Check a forward-slash relative path taken from the filesystem.

        Unlike ``is_excluded``, backslashes are left alone: on POSIX they are
        ordinary filename characters.
        """
        rel_path = rel_path.strip("/")
        if not rel_path:
            return False

        return any(rule.matches(rel_path, is_dir) for rule in self._rules)
