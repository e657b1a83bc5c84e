"""Zero-copy views over memory-mapped asset bytes.

@public

Both stores return Asset objects. An Asset holds a reference to a shared
read-only mapping plus an (offset, length) window into it. Many Assets may
share one mapping; the mapping is released once the last reference to it
is garbage collected. There is no explicit close.
"""

import mmap
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any, SupportsIndex, overload

Mapping = mmap.mmap | bytes
"""Backing storage of an Asset: a read-only mmap, or bytes for empty files (which can't be mapped)."""


def map_file(path: str | Path) -> Mapping:
    """Map `path` read-only. The file descriptor is closed before returning."""
    with open(path, "rb") as f:
        if os.fstat(f.fileno()).st_size == 0:
            return b""
        return mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ)


class Asset:
    """An immutable window into a memory-mapped region.

    @public

    Supports the buffer protocol, so memoryview(asset) exposes the bytes
    without copying. bytes(asset) copies.

    Example:
        >>> asset = store.get(digest)
        >>> len(asset)
        5
        >>> asset == b"hello"
        True
        >>> memoryview(asset)[:2].tobytes()
        b'he'
    """

    __slots__ = ("_mapping", "_offset", "_length")

    def __init__(self, mapping: Mapping, offset: int = 0, length: int | None = None) -> None:
        size = len(mapping)
        if length is None:
            length = size - offset
        if offset < 0 or length < 0 or offset + length > size:
            raise ValueError(f"asset window [{offset}, {offset + length}) exceeds mapping of {size} bytes")
        self._mapping = mapping
        self._offset = offset
        self._length = length

    @classmethod
    def from_file(cls, path: str | Path) -> "Asset":
        """Map an entire file as one asset."""
        return cls(map_file(path))

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def length(self) -> int:
        return self._length

    @property
    def mapping(self) -> Mapping:
        """The shared mapping backing this view."""
        return self._mapping

    @property
    def view(self) -> memoryview:
        """Read-only memoryview of the asset bytes. No copy."""
        return memoryview(self._mapping)[self._offset : self._offset + self._length].toreadonly()

    def clone(self) -> "Asset":
        """Shallow copy sharing the same mapping."""
        return Asset(self._mapping, self._offset, self._length)

    def __buffer__(self, flags: int) -> memoryview:
        return self.view

    def __len__(self) -> int:
        return self._length

    @overload
    def __getitem__(self, key: SupportsIndex) -> int: ...
    @overload
    def __getitem__(self, key: slice) -> bytes: ...
    def __getitem__(self, key: SupportsIndex | slice) -> int | bytes:
        item = self.view[key]
        return item.tobytes() if isinstance(item, memoryview) else item

    def __iter__(self) -> Iterator[int]:
        return iter(self.view)

    def __bytes__(self) -> bytes:
        return self.view.tobytes()

    def __eq__(self, other: Any) -> bool:
        try:
            other_view = memoryview(other)
        except TypeError:
            return NotImplemented
        return self.view == other_view

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<Asset offset={self._offset} length={self._length}>"
