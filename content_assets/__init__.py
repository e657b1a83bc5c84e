"""Content Assets - content-addressed blob storage.

@public

Data is identified and retrieved solely by a cryptographic digest of its bytes.
Two backends share one addressing scheme:

    - **LooseFiles**: mutable, one file per asset, crash-safe stage/commit writes
    - **ArchiveSet**: immutable, serves assets from pre-built memory-mapped archives

Both return Asset views: zero-copy windows into a shared memory mapping.

Quick Start:
    >>> from content_assets import LooseFiles, Digest
    >>>
    >>> store = LooseFiles.open("assets")
    >>> digest = store.put(b"hello")
    >>> str(digest)
    'blake2b:...'
    >>> store.get(Digest.parse(str(digest))) == b"hello"
    True

Environment Variables:
    - ASSETS_LOOSE_PATH: Base directory of the loose files store
    - ASSETS_ARCHIVE_PATH: Directory holding archive files
    - CONTENT_ASSETS_LOG_LEVEL: Default log level
"""

from .asset import Asset
from .digests import BLAKE2B_LEN, ContentMap, ContentSet, Digest, Hasher, HashKind
from .exceptions import (
    AssetNotFoundError,
    ContentAssetsError,
    HasherFinalizedError,
    HashParseError,
    InvalidArchiveError,
    InvalidLengthError,
    MalformedValueError,
    MissingDelimiterError,
    ReadOnlyStoreError,
    UnknownKindError,
    WriterStateError,
)
from .logging import LoggingConfig, get_pipeline_logger, setup_logging
from .settings import Settings, settings
from .stores import (
    ArchiveSet,
    AssetStore,
    AsyncAssetStore,
    AsyncWriter,
    LayeredStore,
    LooseFiles,
    Writer,
    WriterState,
    create_asset_store,
)

__version__ = "0.3.0"

__all__ = [
    # Addressing
    "BLAKE2B_LEN",
    "ContentMap",
    "ContentSet",
    "Digest",
    "HashKind",
    "Hasher",
    # Assets and stores
    "ArchiveSet",
    "Asset",
    "AssetStore",
    "AsyncAssetStore",
    "AsyncWriter",
    "LayeredStore",
    "LooseFiles",
    "Writer",
    "WriterState",
    "create_asset_store",
    # Errors
    "AssetNotFoundError",
    "ContentAssetsError",
    "HashParseError",
    "HasherFinalizedError",
    "InvalidArchiveError",
    "InvalidLengthError",
    "MalformedValueError",
    "MissingDelimiterError",
    "ReadOnlyStoreError",
    "UnknownKindError",
    "WriterStateError",
    # Configuration and logging
    "LoggingConfig",
    "Settings",
    "get_pipeline_logger",
    "settings",
    "setup_logging",
]
