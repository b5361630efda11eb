"""Exception types for kushn."""

from pathlib import Path


class KushnError(Exception):
    """Base exception for kushn errors."""

    pass


class RootUnreadableError(KushnError):
    """The scan root does not exist, is not a directory, or cannot be listed.

    This is the only fatal traversal error: nothing can be hashed without
    the root listing, so the whole scan is aborted.
    """

    def __init__(self, root_path: Path, reason: str):
        self.root_path = root_path
        self.reason = reason
        super().__init__(f"Cannot read scan root '{root_path}': {reason}")


class EntryUnreadableError(KushnError):
    """A single file or nested directory could not be opened or read.

    The scanner records the failure and carries on with the rest of the tree.
    """

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read '{path}': {reason}")


class ConfigError(KushnError, ValueError):
    """Raised when a configuration file is missing or has an unsupported format."""

    pass
