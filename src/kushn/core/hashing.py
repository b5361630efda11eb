"""Streaming SHA-256 helper for file content."""

import hashlib
from pathlib import Path

from kushn.core.errors import EntryUnreadableError

DEFAULT_CHUNK_SIZE = 64 * 1024


def calculate_file_hash(file_path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """
    Stream a file through SHA-256.

    The file is read in fixed-size chunks so memory use does not grow with
    file size.

    Args:
        file_path: File to hash.
        chunk_size: Number of bytes read per iteration.

    Returns:
        64-character lowercase hexadecimal digest.

    Raises:
        EntryUnreadableError: If the file cannot be opened or read.
    """
    hasher = hashlib.sha256()
    try:
        with open(file_path, "rb") as handle:
            while chunk := handle.read(chunk_size):
                hasher.update(chunk)
    except PermissionError as e:
        raise EntryUnreadableError(Path(file_path), f"permission denied ({e.strerror})") from e
    except FileNotFoundError as e:
        raise EntryUnreadableError(Path(file_path), "file not found") from e
    except OSError as e:
        raise EntryUnreadableError(Path(file_path), str(e)) from e
    return hasher.hexdigest()
