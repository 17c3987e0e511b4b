from __future__ import annotations

"""
Domain Error Types.

Exceptions raised at the archive boundaries. The tree builder itself has
no failure modes: path collisions are resolved by policy and directory
synthesis always succeeds.
"""


class ZipScopeError(Exception):
    """Base class for all application errors."""


class ArchiveFormatError(ZipScopeError):
    """Raw bytes cannot be decoded as a valid archive."""


class ArchiveSourceError(ZipScopeError):
    """The archive source (file or URL) could not be loaded or persisted."""


class EntryNotFoundError(ZipScopeError, KeyError):
    """No leaf or directory exists at the requested archive path."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Entry not found in archive: '{self.path}'"


class UnsafeEntryPathError(ZipScopeError, ValueError):
    """Extracting the entry would write outside the target directory."""


class EntryIsFolderError(ZipScopeError, ValueError):
    """A file operation was requested on a folder path."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Entry is a folder, not a file: '{self.path}'"
