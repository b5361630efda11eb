"""
Manifest Service for kushn.

Coordinates the manifest workflow: loading the ignore file from the scan
root, scanning, and writing the JSON manifest (optionally followed by a
record for the manifest file itself).
"""

import logging
import os
import time
from pathlib import Path
from typing import Optional

from kushn.core.config import KushnConfig, load_config
from kushn.core.errors import KushnError
from kushn.core.file_scanner import FileScanner, HashRecord, Manifest
from kushn.core.hashing import calculate_file_hash
from kushn.core.ignore_set import IgnoreSet
from kushn.core.path_utils import to_relative_posix
from kushn.services.manifest_models import ManifestResult

logger = logging.getLogger(__name__)


class ManifestService:
    """
    Service for producing hash manifests.

    The ignore set is built once per run from the root's ignore file, the
    configured extra patterns and the output file itself.
    """

    def __init__(self, config: Optional[KushnConfig] = None):
        """
        Initialize the manifest service.

        Args:
            config: Configuration (default: KushnConfig with packaged defaults)
        """
        self._config = config or KushnConfig()

    @property
    def config(self) -> KushnConfig:
        return self._config

    def load_ignore_set(self, root_path: Path) -> IgnoreSet:
        """
        Build the IgnoreSet for a scan of ``root_path``.

        Combines the ignore file at the root, ``scan.extra_ignore_patterns``
        and an anchored rule for the output manifest when it lives under the
        root.
        """
        root_path = Path(root_path)
        ignore_set = IgnoreSet.load(root_path / self._config.scan.ignore_file)

        extra = list(self._config.scan.extra_ignore_patterns)
        output_rel = self._output_rel_path(root_path)
        if output_rel is not None:
            extra.append("/" + output_rel)

        if extra:
            ignore_set = ignore_set.extend(extra)
        return ignore_set

    def create_scanner(self, ignore_set: IgnoreSet) -> FileScanner:
        """Create a FileScanner configured from ``scan`` settings."""
        scan = self._config.scan
        return FileScanner(
            ignore_set=ignore_set,
            follow_symlinks=scan.follow_symlinks,
            max_workers=scan.max_workers,
            chunk_size=scan.chunk_size,
        )

    def build_manifest(self, root_path: Path) -> Manifest:
        """
        Scan ``root_path`` and return its manifest.

        Raises:
            RootUnreadableError: If the root cannot be listed
        """
        root_path = Path(root_path)
        ignore_set = self.load_ignore_set(root_path)
        logger.debug(f"build_manifest: {len(ignore_set)} ignore rules for {root_path}")
        return self.create_scanner(ignore_set).scan(root_path)

    def write_manifest(self, manifest: Manifest, root_path: Path) -> tuple[Manifest, Path]:
        """
        Write a manifest as JSON.

        When ``output.include_self_hash`` is set the manifest is written, the
        written file is hashed, a record for it is appended and the file is
        written again. The appended record therefore holds the digest of the
        first write.

        Args:
            manifest: Manifest to serialize
            root_path: Scan root; relative output names resolve against it

        Returns:
            Tuple of (manifest as written, output path)
        """
        output_path = self.output_path(root_path)
        indent = self._config.output.indent

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(manifest.to_json(indent=indent), encoding="utf-8")

        if not self._config.output.include_self_hash:
            return manifest, output_path

        output_rel = self._output_rel_path(root_path) or output_path.name
        self_record = HashRecord(path=output_rel, hash=calculate_file_hash(output_path))
        written = Manifest(
            records=list(manifest.records) + [self_record],
            failures=list(manifest.failures),
        )
        output_path.write_text(written.to_json(indent=indent), encoding="utf-8")
        return written, output_path

    def run(self, root_path: Path) -> ManifestResult:
        """
        Build and write the manifest for ``root_path``.

        Returns:
            ManifestResult with the written manifest and timing
        """
        start_time = time.time()

        manifest = self.build_manifest(root_path)
        written, output_path = self.write_manifest(manifest, root_path)

        result = ManifestResult(
            manifest=written,
            output_path=output_path,
            duration_seconds=time.time() - start_time,
        )
        logger.info(
            "Manifest written",
            extra={
                "total_files": result.total_files,
                "failed_files": len(result.failed_files),
                "duration_seconds": result.duration_seconds,
            },
        )
        return result

    def hash_single_file(self, root_path: Path, file_path: Path) -> HashRecord | None:
        """
        Hash one file unless the ignore rules exclude it.

        Args:
            root_path: Scan root used for relativization and the ignore file
            file_path: File to hash, absolute or relative to the root

        Returns:
            HashRecord, or None when the file is ignored

        Raises:
            KushnError: If the file is not under the root
            EntryUnreadableError: If the file cannot be read
        """
        root_path = Path(os.path.abspath(root_path))
        file_path = Path(file_path)
        if not file_path.is_absolute():
            file_path = root_path / file_path
        file_path = Path(os.path.normpath(file_path))

        try:
            rel_path = to_relative_posix(file_path, root_path)
        except ValueError as e:
            raise KushnError(f"'{file_path}' is not under '{root_path}'") from e

        if self.load_ignore_set(root_path).is_excluded_path(rel_path, is_dir=False):
            logger.debug(f"Ignoring: {rel_path}")
            return None

        digest = calculate_file_hash(file_path, self._config.scan.chunk_size)
        return HashRecord(path=rel_path, hash=digest)

    def output_path(self, root_path: Path) -> Path:
        """Return where the manifest for ``root_path`` is written."""
        return Path(root_path) / self._config.output.file_name

    def _output_rel_path(self, root_path: Path) -> str | None:
        output = self.output_path(root_path)
        try:
            return to_relative_posix(output.resolve(), Path(root_path).resolve())
        except ValueError:
            return None


def create_manifest_service(
    config_path: Optional[Path] = None,
    apply_env: bool = True,
) -> ManifestService:
    """
    Create a ManifestService from configuration.

    Args:
        config_path: Optional path to a YAML or JSON config file.
        apply_env: Whether KUSHN_* environment overrides apply.

    Returns:
        Configured ManifestService.
    """
    return ManifestService(load_config(config_path, apply_env=apply_env))
