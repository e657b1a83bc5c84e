"""Layered store: reads consult archives first, then loose files.

Writes go to the loose files store only. The two backends never interact;
an asset present in both is simply served from the archive.
"""

from collections.abc import Iterator
from typing import BinaryIO

from content_assets.asset import Asset
from content_assets.digests import Digest
from content_assets.exceptions import AssetNotFoundError
from content_assets.stores.archive import ArchiveSet
from content_assets.stores.loose_files import LooseFiles, Writer


class LayeredStore:
    """Reads from the archive set, falling back to loose files; writes to loose files."""

    def __init__(self, archives: ArchiveSet, loose: LooseFiles) -> None:
        self._archives = archives
        self._loose = loose

    @property
    def archives(self) -> ArchiveSet:
        return self._archives

    @property
    def loose(self) -> LooseFiles:
        return self._loose

    def get(self, digest: Digest) -> Asset:
        """Archive hit if any, else the loose file. Raises AssetNotFoundError if neither has it."""
        try:
            return self._archives.get(digest)
        except AssetNotFoundError:
            return self._loose.get(digest)

    def contains(self, digest: Digest) -> bool:
        return self._archives.contains(digest) or self._loose.contains(digest)

    def __contains__(self, digest: object) -> bool:
        return isinstance(digest, Digest) and self.contains(digest)

    def list(self) -> Iterator[Digest]:
        """Archive digests, then loose digests. Assets in both are listed twice."""
        yield from self._archives.list()
        yield from self._loose.list()

    def make_writer(self) -> Writer:
        return self._loose.make_writer()

    def put(self, data: bytes | bytearray | memoryview) -> Digest:
        return self._loose.put(data)

    def put_stream(self, source: BinaryIO, chunk_size: int | None = None) -> Digest:
        return self._loose.put_stream(source, chunk_size)

    def __repr__(self) -> str:
        return f"LayeredStore({self._archives!r}, {self._loose!r})"
