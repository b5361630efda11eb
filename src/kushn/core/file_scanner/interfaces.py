"""
Abstract interfaces for file scanning operations.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from .models import Manifest


class FileScannerInterface(ABC):
    """
    Abstract interface for manifest-producing scanners.

    Implementations walk a directory tree, filter entries through an
    IgnoreSet and hash every included file.
    """

    @abstractmethod
    def scan(self, root_path: Path) -> Manifest:
        """
        Recursively scan a directory and return its manifest.

        Args:
            root_path: Root directory to scan

        Returns:
            Manifest sorted by relative path

        Raises:
            RootUnreadableError: If the root cannot be listed

        Notes:
            - Excluded directories are never descended into
            - Unreadable files are recorded as failures and skipped
        """
        pass
