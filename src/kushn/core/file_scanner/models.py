"""
Data models for the file scanner module.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ScanEntry:
    """
    A file met during traversal, queued for hashing.

    Attributes:
        rel_path: Forward-slash path relative to the scan root
        path: Path on disk
    """

    rel_path: str
    path: Path


@dataclass(frozen=True)
class HashRecord:
    """
    One manifest line.

    Attributes:
        path: Forward-slash path relative to the scan root
        hash: Lowercase hexadecimal SHA-256 digest of the file content
    """

    path: str
    hash: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "hash": self.hash}


@dataclass(frozen=True)
class EntryFailure:
    """An entry skipped because it could not be read."""

    path: str
    reason: str


@dataclass
class Manifest:
    """
    Ordered collection of HashRecords produced by one scan.

    Failures hold entries that were skipped because of per-file I/O errors.
    """

    records: list[HashRecord] = field(default_factory=list)
    failures: list[EntryFailure] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def paths(self) -> list[str]:
        return [record.path for record in self.records]

    def append(self, record: HashRecord) -> None:
        self.records.append(record)

    def sort(self) -> None:
        """Sort records and failures by relative path."""
        self.records.sort(key=lambda r: r.path)
        self.failures.sort(key=lambda f: f.path)

    def get(self, path: str) -> HashRecord | None:
        """Return the record for ``path`` or None."""
        for record in self.records:
            if record.path == path:
                return record
        return None

    def to_list(self) -> list[dict[str, str]]:
        return [record.to_dict() for record in self.records]

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize records to a JSON array of {path, hash} objects."""
        return json.dumps(self.to_list(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "Manifest":
        """
        Read a manifest previously written by ``to_json``.

        Raises:
            ValueError: If the JSON is not a list of {path, hash} objects
        """
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError("Manifest JSON must be a list of records")

        records = []
        for item in data:
            if not isinstance(item, dict) or "path" not in item or "hash" not in item:
                raise ValueError(f"Invalid manifest record: {item!r}")
            records.append(HashRecord(path=str(item["path"]), hash=str(item["hash"])))
        return cls(records=records)
