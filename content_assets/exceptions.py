"""Exception hierarchy for Content Assets.

This module defines the exception hierarchy used throughout the content_assets library.
All exceptions inherit from ContentAssetsError, providing a consistent error handling interface.
Filesystem failures are not wrapped: they surface as the OSError raised by the operating system.
"""

from pathlib import Path
from typing import Any


class ContentAssetsError(Exception):
    """Base exception for all Content Assets errors."""


class InvalidLengthError(ContentAssetsError, ValueError):
    """Raised when digest bytes don't match the fixed length of their hash kind."""


class HashParseError(ContentAssetsError, ValueError):
    """Base exception for errors in the human-readable digest encoding."""


class MissingDelimiterError(HashParseError):
    """Raised when a digest string has no delimiting ':'."""

    def __init__(self) -> None:
        super().__init__('missing delimiting ":"')


class UnknownKindError(HashParseError):
    """Raised when a hash kind name or id is not recognized.

    May occur when parsing a digest encoded by a future version of this library.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown hash kind: {name}")


class MalformedValueError(HashParseError):
    """Raised when the encoded digest value is not valid base32 of the right length."""


class AssetNotFoundError(ContentAssetsError, LookupError):
    """Raised when a digest is absent from a store."""

    def __init__(self, digest: Any) -> None:
        self.digest = digest
        super().__init__(f"no such asset: {digest}")


class InvalidArchiveError(ContentAssetsError):
    """Raised when an archive file is corrupt or uses an unrecognized hash kind."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(f"{message} ({path})" if path else message)


class ReadOnlyStoreError(ContentAssetsError):
    """Raised when a write is attempted against a read-only store."""


class HasherFinalizedError(ContentAssetsError):
    """Raised when a Hasher is used after result() was called."""


class WriterStateError(ContentAssetsError):
    """Raised when a Writer is used after it was committed or abandoned."""
