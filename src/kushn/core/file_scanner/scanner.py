"""
FileScanner implementation for recursive directory hashing.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator

from kushn.core.errors import EntryUnreadableError, RootUnreadableError
from kushn.core.hashing import DEFAULT_CHUNK_SIZE, calculate_file_hash
from kushn.core.ignore_set import IgnoreSet

from .interfaces import FileScannerInterface
from .models import EntryFailure, HashRecord, Manifest, ScanEntry

logger = logging.getLogger(__name__)


class FileScanner(FileScannerInterface):
    """
    Concrete implementation of FileScannerInterface.

    Provides depth-first directory scanning with:
    - Ignore rule filtering before recursion, so excluded subtrees are never listed
    - Streaming SHA-256 hashing
    - Graceful handling of unreadable files and nested directories
    - Optional thread-pool hashing with output identical to a sequential run
    """

    def __init__(
        self,
        ignore_set: IgnoreSet | None = None,
        follow_symlinks: bool = True,
        max_workers: int = 1,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """
        Initialize the FileScanner.

        Args:
            ignore_set: Rules deciding which entries are excluded. None means
                        nothing is excluded.
            follow_symlinks: Whether to follow symlinked files and directories.
                             When False, symlinks are skipped.
            max_workers: Number of hashing threads. 1 hashes inline during
                         traversal.
            chunk_size: Read size used when streaming files through the digest.
        """
        self._ignore_set = ignore_set if ignore_set is not None else IgnoreSet()
        self._follow_symlinks = follow_symlinks
        self._max_workers = max(1, max_workers)
        self._chunk_size = chunk_size

    def scan(self, root_path: Path) -> Manifest:
        """
        Recursively scan a directory and return its manifest.

        Args:
            root_path: Root directory to scan

        Returns:
            Manifest with records sorted by relative path

        Raises:
            RootUnreadableError: If the root is missing, not a directory or
                                 cannot be listed
        """
        root_path = Path(root_path)

        if not root_path.exists():
            raise RootUnreadableError(root_path, "path does not exist")

        if not root_path.is_dir():
            raise RootUnreadableError(root_path, "path is not a directory")

        root_path = root_path.resolve()
        manifest = Manifest()

        # Track real paths on the current descent to prevent symlink cycles
        visited: set[Path] = set()
        files = self._walk(root_path, "", visited, manifest)

        if self._max_workers > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                futures = [(executor.submit(self._hash_entry, entry), entry) for entry in files]
                for future, entry in futures:
                    self._collect(manifest, entry, future.result())
        else:
            for entry in files:
                self._collect(manifest, entry, self._hash_entry(entry))

        manifest.sort()
        logger.info(
            f"Scanned {root_path}: {len(manifest.records)} files hashed, "
            f"{len(manifest.failures)} skipped"
        )
        return manifest

    def _walk(
        self,
        current_path: Path,
        current_rel: str,
        visited: set[Path],
        manifest: Manifest,
    ) -> Iterator[ScanEntry]:
        """
        Walk one directory and yield every included file beneath it.

        Args:
            current_path: Directory being listed
            current_rel: Its path relative to the root ("" for the root)
            visited: Real paths of directories on the current descent
            manifest: Receives failures for unreadable nested directories

        Yields:
            ScanEntry objects for files that passed the ignore rules
        """
        is_root = current_rel == ""

        try:
            real_path = current_path.resolve()
            if real_path in visited:
                logger.debug(f"Skipping recursive cycle: {current_path} -> {real_path}")
                return

            with os.scandir(current_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            if is_root:
                raise RootUnreadableError(current_path, e.strerror or str(e)) from e
            logger.warning(f"Error accessing directory: {current_path} - {e}")
            manifest.failures.append(EntryFailure(current_rel, e.strerror or str(e)))
            return

        visited.add(real_path)

        for entry in entries:
            rel_path = f"{current_rel}/{entry.name}" if current_rel else entry.name
            entry_path = current_path / entry.name

            is_symlink = entry.is_symlink()
            if is_symlink and not self._follow_symlinks:
                logger.debug(f"Skipping symlink (follow_symlinks=False): {rel_path}")
                continue

            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                logger.warning(f"Error inspecting entry: {entry_path} - {e}")
                manifest.failures.append(EntryFailure(rel_path, str(e)))
                continue

            if self._ignore_set.is_excluded_path(rel_path, is_dir=is_dir):
                logger.debug(f"Ignoring: {rel_path}")
                continue

            if is_dir:
                yield from self._walk(entry_path, rel_path, visited, manifest)
            elif is_file:
                yield ScanEntry(rel_path=rel_path, path=entry_path)
            elif is_symlink:
                # Dangling link: reading it fails like any vanished file
                yield ScanEntry(rel_path=rel_path, path=entry_path)
            else:
                logger.debug(f"Skipping special file: {rel_path}")

        # Remove from visited when backtracking so sibling links may reach this dir
        visited.discard(real_path)

    def _hash_entry(self, entry: ScanEntry) -> HashRecord | EntryFailure:
        try:
            digest = calculate_file_hash(entry.path, self._chunk_size)
        except EntryUnreadableError as e:
            return EntryFailure(entry.rel_path, e.reason)
        return HashRecord(path=entry.rel_path, hash=digest)

    @staticmethod
    def _collect(
        manifest: Manifest, entry: ScanEntry, outcome: HashRecord | EntryFailure
    ) -> None:
        if isinstance(outcome, EntryFailure):
            logger.warning(f"Skipping unreadable file: {entry.path} - {outcome.reason}")
            manifest.failures.append(outcome)
        else:
            manifest.append(outcome)
