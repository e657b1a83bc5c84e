"""Reader for the sorted key/value archive format.

Archives are built by an external tool; this module only reads them.
All integers are little-endian.

Layout:
    offset  size  field
    0       8     magic b"CASARCHV"
    8       2     format version (1)
    10      2     key length in bytes (K)
    12      2     extension area length in bytes (E)
    14      2     reserved, zero
    16      8     entry count (N)
    24      E     extension area; bytes 0..2 hold the hash kind id
    24+E    N*(K+16) index records sorted strictly ascending by key:
                  key (K bytes), value offset (u64), value length (u64)
    ...           values; offsets are absolute from the start of the file
"""

import mmap
import struct
from bisect import bisect_left
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import overload

from content_assets.asset import map_file
from content_assets.exceptions import InvalidArchiveError

MAGIC = b"CASARCHV"
FORMAT_VERSION = 1
HEADER = struct.Struct("<8sHHHHQ")
VALUE_REF = struct.Struct("<QQ")


class _KeyIndex(Sequence[bytes]):
    """Keys of the index records, sliced out of the mapping on demand."""

    def __init__(self, archive: "ArchiveFile") -> None:
        self._archive = archive

    def __len__(self) -> int:
        return self._archive.entry_count

    @overload
    def __getitem__(self, i: int) -> bytes: ...
    @overload
    def __getitem__(self, i: slice) -> Sequence[bytes]: ...
    def __getitem__(self, i: int | slice) -> bytes | Sequence[bytes]:
        if isinstance(i, slice):
            return [self[j] for j in range(*i.indices(len(self)))]
        return self._archive.key_at(i)


class ArchiveFile:
    """One memory-mapped archive.

    The mapping is opened once and shared with every Asset built from it.
    """

    def __init__(self, mapping: mmap.mmap | bytes, path: Path | None = None) -> None:
        self._mapping = mapping
        self._path = path
        if len(mapping) < HEADER.size:
            raise InvalidArchiveError("archive is truncated", path)
        magic, version, key_length, ext_length, _reserved, entry_count = HEADER.unpack_from(mapping)
        if magic != MAGIC:
            raise InvalidArchiveError("not an archive file", path)
        if version != FORMAT_VERSION:
            raise InvalidArchiveError(f"unsupported archive version {version}", path)
        self._key_length = key_length
        self._ext_start = HEADER.size
        self._ext_length = ext_length
        self._index_start = HEADER.size + ext_length
        self._record_size = key_length + VALUE_REF.size
        self._entry_count = entry_count
        if self._index_start + entry_count * self._record_size > len(mapping):
            raise InvalidArchiveError("archive index exceeds file size", path)
        # find() requires keys in strictly ascending order.
        previous = None
        for key in self.iter_keys():
            if previous is not None and key <= previous:
                raise InvalidArchiveError("archive index is not sorted", path)
            previous = key

    @classmethod
    def open(cls, path: Path) -> "ArchiveFile":
        """Map and validate the archive at `path`."""
        return cls(map_file(path), path)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def mapping(self) -> mmap.mmap | bytes:
        return self._mapping

    @property
    def key_length(self) -> int:
        return self._key_length

    @property
    def entry_count(self) -> int:
        return self._entry_count

    def extensions(self, length: int) -> bytes | None:
        """First `length` bytes of the extension area, or None if it is shorter."""
        if self._ext_length < length:
            return None
        return bytes(self._mapping[self._ext_start : self._ext_start + length])

    def key_at(self, i: int) -> bytes:
        if not 0 <= i < self._entry_count:
            raise IndexError(i)
        start = self._index_start + i * self._record_size
        return bytes(self._mapping[start : start + self._key_length])

    def value_at(self, i: int) -> tuple[int, int]:
        """(offset, length) of the i-th value, checked against the mapping bounds."""
        start = self._index_start + i * self._record_size + self._key_length
        offset, length = VALUE_REF.unpack_from(self._mapping, start)
        if offset + length > len(self._mapping):
            raise InvalidArchiveError(f"value {i} exceeds file size", self._path)
        return offset, length

    def find(self, key: bytes) -> tuple[int, int] | None:
        """Binary search for `key`; return the (offset, length) of its value."""
        if len(key) != self._key_length:
            return None
        i = bisect_left(_KeyIndex(self), key)
        if i < self._entry_count and self.key_at(i) == key:
            return self.value_at(i)
        return None

    def iter_keys(self) -> Iterator[bytes]:
        """Keys in stored order."""
        for i in range(self._entry_count):
            yield self.key_at(i)

    def __repr__(self) -> str:
        return f"<ArchiveFile {self._path} entries={self._entry_count} key_length={self._key_length}>"
