"""
kushn - directory hash manifests.

Walks a directory tree, skips entries matched by ``.kushnignore`` and records
the SHA-256 digest of every remaining file.
"""

__version__ = "0.1.0"
