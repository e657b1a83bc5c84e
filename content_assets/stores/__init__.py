"""Asset store backends: loose files, archive sets, and their composition."""

from ._layered import LayeredStore
from .aio import AsyncAssetStore, AsyncWriter
from .archive import ArchiveSet
from .factory import create_asset_store
from .loose_files import LooseFiles, Writer, WriterState
from .protocol import AssetStore

__all__ = [
    "ArchiveSet",
    "AssetStore",
    "AsyncAssetStore",
    "AsyncWriter",
    "LayeredStore",
    "LooseFiles",
    "Writer",
    "WriterState",
    "create_asset_store",
]
