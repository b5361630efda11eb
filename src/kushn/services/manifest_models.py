"""
Manifest Service data models.
"""

from dataclasses import dataclass
from pathlib import Path

from kushn.core.file_scanner import Manifest


@dataclass
class ManifestResult:
    """Result of building and writing a manifest."""

    manifest: Manifest
    output_path: Path
    duration_seconds: float = 0.0

    @property
    def total_files(self) -> int:
        return len(self.manifest.records)

    @property
    def failed_files(self) -> list[str]:
        return [failure.path for failure in self.manifest.failures]
