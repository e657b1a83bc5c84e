"""Asyncio facade over the synchronous stores.

Each call is offloaded with asyncio.to_thread and awaited before returning,
so independent store() calls are never buffered, merged, or reordered.
"""

import asyncio
from types import TracebackType
from typing import Any, BinaryIO

from content_assets.asset import Asset
from content_assets.digests import Digest
from content_assets.stores.loose_files import Writer, WriterState
from content_assets.stores.protocol import AssetStore


class AsyncWriter:
    """Async wrapper around a Writer.

    Example:
        >>> async with await store.make_writer() as writer:
        ...     await writer.write(b"hello")
        ...     digest = await writer.store()
    """

    def __init__(self, writer: Writer) -> None:
        self._writer = writer

    @property
    def state(self) -> WriterState:
        return self._writer.state

    @property
    def bytes_written(self) -> int:
        return self._writer.bytes_written

    async def write(self, data: bytes | bytearray | memoryview) -> int:
        return await asyncio.to_thread(self._writer.write, data)

    async def store(self) -> Digest:
        return await asyncio.to_thread(self._writer.store)

    async def abandon(self) -> None:
        await asyncio.to_thread(self._writer.abandon)

    async def __aenter__(self) -> "AsyncWriter":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.abandon()


class AsyncAssetStore:
    """Async access to any AssetStore.

    Write methods are available when the wrapped store has them; an
    ArchiveSet raises ReadOnlyStoreError as it does synchronously.
    """

    def __init__(self, store: AssetStore) -> None:
        self._store = store

    @property
    def store(self) -> AssetStore:
        """The wrapped synchronous store."""
        return self._store

    async def get(self, digest: Digest) -> Asset:
        return await asyncio.to_thread(self._store.get, digest)

    async def contains(self, digest: Digest) -> bool:
        return await asyncio.to_thread(self._store.contains, digest)

    async def list(self) -> list[Digest]:
        """Materialized listing. For diagnostics only."""
        return await asyncio.to_thread(lambda: list(self._store.list()))

    async def put(self, data: bytes | bytearray | memoryview) -> Digest:
        return await asyncio.to_thread(self._writable().put, data)

    async def put_stream(self, source: BinaryIO, chunk_size: int | None = None) -> Digest:
        return await asyncio.to_thread(self._writable().put_stream, source, chunk_size)

    async def make_writer(self) -> AsyncWriter:
        writer = await asyncio.to_thread(self._writable().make_writer)
        return AsyncWriter(writer)

    def _writable(self) -> Any:
        if not hasattr(self._store, "put"):
            raise TypeError(f"{type(self._store).__name__} does not support writes")
        return self._store
