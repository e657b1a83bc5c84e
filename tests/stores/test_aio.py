"""Tests for the asyncio store facade."""

import asyncio
import io

import pytest

from content_assets.digests import Hasher
from content_assets.exceptions import AssetNotFoundError, ReadOnlyStoreError
from content_assets.stores import ArchiveSet, AsyncAssetStore, LooseFiles
from content_assets.stores.loose_files import WriterState


class TestAsyncAssetStore:
    @pytest.mark.asyncio
    async def test_put_get(self, loose: LooseFiles):
        store = AsyncAssetStore(loose)
        digest = await store.put(b"async data")
        assert digest == Hasher.digest_of(b"async data")
        assert await store.get(digest) == b"async data"
        assert await store.contains(digest)
        assert await store.list() == [digest]

    @pytest.mark.asyncio
    async def test_missing(self, loose: LooseFiles):
        store = AsyncAssetStore(loose)
        with pytest.raises(AssetNotFoundError):
            await store.get(Hasher.digest_of(b"absent"))

    @pytest.mark.asyncio
    async def test_put_stream(self, loose: LooseFiles):
        store = AsyncAssetStore(loose)
        digest = await store.put_stream(io.BytesIO(b"chunked" * 100), chunk_size=7)
        assert loose.get(digest) == b"chunked" * 100

    @pytest.mark.asyncio
    async def test_writer(self, loose: LooseFiles):
        store = AsyncAssetStore(loose)
        async with await store.make_writer() as writer:
            await writer.write(b"hello ")
            await writer.write(b"world")
            assert writer.bytes_written == 11
            digest = await writer.store()
        assert writer.state is WriterState.COMMITTED
        assert loose.get(digest) == b"hello world"

    @pytest.mark.asyncio
    async def test_writer_abandoned_on_exit(self, loose: LooseFiles):
        store = AsyncAssetStore(loose)
        async with await store.make_writer() as writer:
            await writer.write(b"dropped")
        assert writer.state is WriterState.ABANDONED
        assert list(loose.temp_files()) == []

    @pytest.mark.asyncio
    async def test_concurrent_puts(self, loose: LooseFiles):
        store = AsyncAssetStore(loose)
        payloads = [bytes([i]) * 64 for i in range(10)]
        digests = await asyncio.gather(*(store.put(p) for p in payloads))
        assert digests == [Hasher.digest_of(p) for p in payloads]

    @pytest.mark.asyncio
    async def test_archive_set_is_read_only(self, archives: ArchiveSet):
        store = AsyncAssetStore(archives)
        with pytest.raises(ReadOnlyStoreError):
            await store.put(b"data")

    @pytest.mark.asyncio
    async def test_store_without_writes(self, loose: LooseFiles):
        class ReadOnly:
            def get(self, digest):
                return loose.get(digest)

            def contains(self, digest):
                return loose.contains(digest)

            def list(self):
                return loose.list()

        store = AsyncAssetStore(ReadOnly())
        with pytest.raises(TypeError):
            await store.put(b"data")
