"""
FileScanner module for kushn.

Provides recursive directory scanning with ignore rule filtering and
streaming SHA-256 content hashing.
"""

from .interfaces import FileScannerInterface
from .models import EntryFailure, HashRecord, Manifest, ScanEntry
from .scanner import FileScanner

__all__ = [
    # Main classes
    "FileScanner",
    "FileScannerInterface",
    # Models
    "EntryFailure",
    "HashRecord",
    "Manifest",
    "ScanEntry",
]
