"""Loose files store: one file per asset.

Layout:
    {root}/{kind}/{first 2 base32 chars}/{remaining base32 chars}  <- committed asset
    {root}/temp/{random hex}                                        <- in-flight write

Writes are staged in a privately named temp file and published with a single
atomic rename to a path derived from the content digest. Readers therefore see
either no file or the complete file, never a partial one, and two writers of
identical content race harmlessly. Exclusive create and atomic rename are the
only synchronization; no locks are taken, and several processes may write to
the same root at once.

Files left in temp by an interrupted process are orphans. Any temp file not
held open by some writer is safe to delete.
"""

import os
import secrets
from collections.abc import Iterator
from enum import StrEnum
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

from content_assets.asset import Asset
from content_assets.digests import Digest, Hasher, HashKind
from content_assets.digests.digest import decode_base32, encode_base32
from content_assets.exceptions import AssetNotFoundError, MalformedValueError, UnknownKindError, WriterStateError
from content_assets.logging import get_pipeline_logger
from content_assets.settings import settings

logger = get_pipeline_logger(__name__)

TEMP_DIR = "temp"
SHARD_LENGTH = 2


def path_for(root: Path, digest: Digest) -> Path:
    """Canonical sharded path of `digest` under `root`."""
    encoded = encode_base32(digest.payload)
    return root / digest.kind.value / encoded[:SHARD_LENGTH] / encoded[SHARD_LENGTH:]


class WriterState(StrEnum):
    """Lifecycle of a Writer.

    STAGING: Accepting writes into the temp file.
    COMMITTED: store() renamed the temp file into place. Terminal.
    ABANDONED: Temp file discarded without committing. Terminal.
    """

    STAGING = "staging"
    COMMITTED = "committed"
    ABANDONED = "abandoned"


class Writer:
    """A staging area for streaming data into a LooseFiles store in constant memory.

    Data written is hashed and buffered in a temp file on disk. store() must be
    called to commit it; otherwise the temp file is deleted when the writer is
    abandoned, closed, exits its with-block, or is garbage collected.

    Example:
        >>> with store.make_writer() as writer:
        ...     writer.write(b"hello ")
        ...     writer.write(b"world")
        ...     digest = writer.store()
    """

    def __init__(self, root: Path, path: Path, file: BinaryIO, kind: HashKind) -> None:
        self._root = root
        self._path = path
        self._file = file
        self._hasher = Hasher(kind)
        self._state = WriterState.STAGING
        self._bytes_written = 0

    @property
    def path(self) -> Path:
        """Temp file path."""
        return self._path

    @property
    def state(self) -> WriterState:
        return self._state

    @property
    def kind(self) -> HashKind:
        return self._hasher.kind

    @property
    def bytes_written(self) -> int:
        return self._bytes_written

    def _check_staging(self) -> None:
        if self._state is not WriterState.STAGING:
            raise WriterStateError(f"writer is {self._state.value}")

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Append `data` to the temp file.

        Only the byte ranges the OS reports as written are hashed, so the digest
        always matches what is on disk. Loops over short writes and returns len(data).
        """
        self._check_staging()
        view = memoryview(data).cast("B")
        while view:
            written = self._file.write(view)
            self._hasher.process(view[:written])
            self._bytes_written += written
            view = view[written:]
        return memoryview(data).nbytes

    def flush(self) -> None:
        self._check_staging()
        self._file.flush()

    def store(self) -> Digest:
        """Commit the written data and return its digest.

        Syncs file data to stable storage, then renames the temp file to the
        canonical path. If content with this digest already exists it is
        replaced by an identical file. On any failure the writer is abandoned,
        its temp file discarded, and the exception propagates.
        """
        self._check_staging()
        try:
            digest = self._hasher.result()
            dest = path_for(self._root, digest)
            dest.parent.mkdir(parents=True, exist_ok=True)
            os.fsync(self._file.fileno())
            self._file.close()
            os.replace(self._path, dest)
        except BaseException:
            self.abandon()
            raise
        self._state = WriterState.COMMITTED
        logger.debug(f"Committed {digest} ({self._bytes_written} bytes)")
        return digest

    def abandon(self) -> None:
        """Discard the temp file. No-op once committed or already abandoned.

        Deletion is best effort: a leftover temp file is a harmless orphan, so a
        failure is logged rather than raised.
        """
        if self._state is not WriterState.STAGING:
            return
        self._state = WriterState.ABANDONED
        try:
            self._file.close()
            self._path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to remove abandoned temp file {self._path}: {e}")

    close = abandon

    def __enter__(self) -> "Writer":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.abandon()

    def __del__(self) -> None:
        # Partially constructed writers have no state to clean up.
        if getattr(self, "_state", None) is WriterState.STAGING:
            self.abandon()

    def __repr__(self) -> str:
        return f"<Writer {self._path.name} {self._state.value} {self._bytes_written} bytes>"


class LooseFiles:
    """A store that keeps each asset as a separate file.

    Supports easy insertion of new assets, even from several processes at once.
    Every access traverses the filesystem, so reading large numbers of assets
    is slower than from an ArchiveSet.

    Example:
        >>> store = LooseFiles.open(Path("assets"))
        >>> digest = store.put(b"hello")
        >>> store.get(digest) == b"hello"
        True
        >>> list(store.list()) == [digest]
        True
    """

    def __init__(self, root: str | Path, *, kind: HashKind | None = None) -> None:
        self._root = Path(root)
        self._kind = kind or HashKind.default()
        self._root.mkdir(parents=True, exist_ok=True)

    @classmethod
    def open(cls, root: str | Path, *, kind: HashKind | None = None) -> "LooseFiles":
        """Open a store located at `root`, creating it if necessary."""
        return cls(root, kind=kind)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def kind(self) -> HashKind:
        """Hash kind used by new writers."""
        return self._kind

    @property
    def temp_path(self) -> Path:
        return self._root / TEMP_DIR

    def path_for(self, digest: Digest) -> Path:
        """Canonical location of the asset identified by `digest`."""
        return path_for(self._root, digest)

    def get(self, digest: Digest) -> Asset:
        """Map the asset identified by `digest`.

        The path is derived from the digest, so content isn't re-verified on read.

        Raises:
            AssetNotFoundError: If no such asset is stored.
        """
        try:
            return Asset.from_file(self.path_for(digest))
        except FileNotFoundError:
            raise AssetNotFoundError(digest) from None

    def contains(self, digest: Digest) -> bool:
        """Whether the asset exists. Only probes file metadata."""
        return self.path_for(digest).is_file()

    def __contains__(self, digest: object) -> bool:
        return isinstance(digest, Digest) and self.contains(digest)

    def make_writer(self) -> Writer:
        """Create a Writer for streaming data into the store."""
        temp = self.temp_path
        temp.mkdir(exist_ok=True)
        while True:
            path = temp / f"{secrets.randbits(64):08X}"
            try:
                file = open(path, "xb", buffering=0)
            except FileExistsError:
                continue
            logger.debug(f"Staging new asset at {path}")
            return Writer(self._root, path, file, self._kind)

    def put(self, data: bytes | bytearray | memoryview) -> Digest:
        """Write `data` directly into the store."""
        with self.make_writer() as writer:
            writer.write(data)
            return writer.store()

    def put_stream(self, source: BinaryIO, chunk_size: int | None = None) -> Digest:
        """Copy a binary file object into the store in constant memory."""
        size = chunk_size or settings.assets_copy_chunk_size
        with self.make_writer() as writer:
            while chunk := source.read(size):
                writer.write(chunk)
            return writer.store()

    def verify(self, digest: Digest) -> bool:
        """Re-hash a stored asset and check it still matches its name. Diagnostic only."""
        return Hasher.digest_of(self.get(digest).view, digest.kind) == digest

    def list(self) -> Iterator[Digest]:
        """Enumerate stored assets.

        For diagnostics only: it almost never makes sense to access an asset
        whose digest isn't already known. Entries that don't form a valid
        digest are skipped.
        """
        for kind_dir in _scan(self._root, dirs=True):
            if kind_dir.name == TEMP_DIR:
                continue
            try:
                kind = HashKind.from_name(kind_dir.name)
            except UnknownKindError:
                continue
            for shard_dir in _scan(Path(kind_dir.path), dirs=True):
                if len(shard_dir.name) != SHARD_LENGTH:
                    continue
                for leaf in _scan(Path(shard_dir.path), dirs=False):
                    try:
                        payload = decode_base32(shard_dir.name + leaf.name, kind.length)
                    except MalformedValueError:
                        continue
                    yield Digest(kind, payload)

    def temp_files(self) -> Iterator[Path]:
        """Files in the temp directory: in-flight writes or orphans."""
        for entry in _scan(self.temp_path, dirs=False):
            yield Path(entry.path)

    def __repr__(self) -> str:
        return f"LooseFiles({str(self._root)!r})"


def _scan(path: Path, *, dirs: bool) -> Iterator[os.DirEntry[str]]:
    """Subdirectories (dirs=True) or regular files directly under `path`.

    One directory is read at a time. Unreadable directories yield nothing.
    """
    try:
        with os.scandir(path) as it:
            entries = [entry for entry in it if (entry.is_dir() if dirs else entry.is_file())]
    except OSError:
        return
    yield from entries
