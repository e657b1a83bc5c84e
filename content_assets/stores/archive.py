"""Archive set: a read-only store formed by a directory of archive files.

Each archive holds many assets keyed by digest payload and declares its
hash kind in a 2-byte little-endian extension field. Archives are grouped by
kind and consulted in open order, which is file-name order. Assets are
returned as views into the archive mappings; nothing is copied.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any, NoReturn

from content_assets.asset import Asset
from content_assets.digests import Digest, HashKind
from content_assets.exceptions import AssetNotFoundError, InvalidArchiveError, ReadOnlyStoreError
from content_assets.logging import get_pipeline_logger
from content_assets.stores._archive_file import ArchiveFile

logger = get_pipeline_logger(__name__)

KIND_EXTENSION_LENGTH = 2


def read_archive_kind(archive: ArchiveFile) -> HashKind:
    """Hash kind declared by `archive`, checked against its key length.

    Raises:
        InvalidArchiveError: If the kind is missing, unknown, or its digest
            length differs from the archive key length.
    """
    ext = archive.extensions(KIND_EXTENSION_LENGTH)
    if ext is None:
        raise InvalidArchiveError("invalid archive", archive.path)
    kind = HashKind.from_id(int.from_bytes(ext, "little"))
    if kind is None:
        raise InvalidArchiveError("archive uses unknown hash kind", archive.path)
    if kind.length != archive.key_length:
        raise InvalidArchiveError("archive key length doesn't match hash kind", archive.path)
    return kind


class ArchiveSet:
    """A repository formed by a collection of archive files.

    Read-only: every write operation raises ReadOnlyStoreError.

    Example:
        >>> archives = ArchiveSet.open(Path("archives"))
        >>> bytes(archives.get(digest))
        b'hello'
    """

    def __init__(self, archives: dict[HashKind, list[ArchiveFile]] | None = None) -> None:
        self._archives: dict[HashKind, list[ArchiveFile]] = archives or {}

    @classmethod
    def open(cls, path: str | Path) -> "ArchiveSet":
        """Open every archive in `path`, creating the directory if necessary.

        A single malformed archive fails the whole open: serving a group with
        an inconsistent key length would return wrong answers.

        Raises:
            InvalidArchiveError: If any archive is corrupt or mismatched.
        """
        directory = Path(path)
        directory.mkdir(parents=True, exist_ok=True)
        archives: dict[HashKind, list[ArchiveFile]] = {}
        for file in sorted(p for p in directory.iterdir() if p.is_file()):
            archive = ArchiveFile.open(file)
            kind = read_archive_kind(archive)
            archives.setdefault(kind, []).append(archive)
            logger.debug(f"Opened archive {file.name}: {archive.entry_count} {kind} assets")
        return cls(archives)

    @property
    def archive_count(self) -> int:
        return sum(len(group) for group in self._archives.values())

    def kinds(self) -> list[HashKind]:
        """Hash kinds with at least one archive."""
        return list(self._archives)

    def get(self, digest: Digest) -> Asset:
        """Access the asset identified by `digest`.

        If several archives hold the digest, the first opened wins.

        Raises:
            AssetNotFoundError: If no archive holds the digest.
        """
        for archive in self._archives.get(digest.kind, ()):
            found = archive.find(digest.payload)
            if found is not None:
                offset, length = found
                return Asset(archive.mapping, offset, length)
        raise AssetNotFoundError(digest)

    def contains(self, digest: Digest) -> bool:
        return any(archive.find(digest.payload) is not None for archive in self._archives.get(digest.kind, ()))

    def __contains__(self, digest: object) -> bool:
        return isinstance(digest, Digest) and self.contains(digest)

    def list(self) -> Iterator[Digest]:
        """Enumerate assets in every archive. For diagnostics only.

        Key lengths were checked at open time, so every key forms a valid digest.
        """
        for kind, group in self._archives.items():
            for archive in group:
                for key in archive.iter_keys():
                    yield Digest(kind, key)

    def _read_only(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise ReadOnlyStoreError("archive sets are read-only")

    put = _read_only
    put_stream = _read_only
    make_writer = _read_only

    def __repr__(self) -> str:
        return f"<ArchiveSet archives={self.archive_count}>"
