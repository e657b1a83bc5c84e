"""Incremental digest computation."""

import hashlib
from collections.abc import Callable
from functools import partial
from typing import Any

from content_assets.digests._kind import BLAKE2B_LEN, HashKind
from content_assets.digests.digest import Digest
from content_assets.exceptions import HasherFinalizedError

_STATE_FACTORIES: dict[HashKind, Callable[[], Any]] = {
    HashKind.BLAKE2B: partial(hashlib.blake2b, digest_size=BLAKE2B_LEN),
}


class Hasher:
    """Accumulates bytes and finalizes to a Digest.

    @public

    Also behaves as a write-only binary file object, so hashing can be
    interleaved with I/O (e.g. as the destination of shutil.copyfileobj).

    Finalization is one-shot: after result() the hasher cannot be used again.

    Example:
        >>> h = Hasher()
        >>> h.process(b"hel")
        >>> h.process(b"lo")
        >>> h.result() == Hasher.digest_of(b"hello")
        True
    """

    def __init__(self, kind: HashKind | None = None) -> None:
        self._kind = kind or HashKind.default()
        self._state: Any = _STATE_FACTORIES[self._kind]()

    @classmethod
    def digest_of(cls, data: bytes | bytearray | memoryview, kind: HashKind | None = None) -> Digest:
        """Digest of `data` in one call."""
        hasher = cls(kind)
        hasher.process(data)
        return hasher.result()

    @property
    def kind(self) -> HashKind:
        """Kind of digest being computed."""
        return self._kind

    @property
    def finalized(self) -> bool:
        """True once result() has been called."""
        return self._state is None

    def _live_state(self) -> Any:
        if self._state is None:
            raise HasherFinalizedError("hasher was already finalized")
        return self._state

    def process(self, data: bytes | bytearray | memoryview) -> None:
        """Incrementally hash `data`."""
        self._live_state().update(data)

    update = process

    def write(self, data: bytes | bytearray | memoryview) -> int:
        self.process(data)
        return memoryview(data).nbytes

    def flush(self) -> None:
        pass

    def copy(self) -> "Hasher":
        """Independent hasher continuing from the current state."""
        clone = Hasher.__new__(Hasher)
        clone._kind = self._kind
        clone._state = self._live_state().copy()
        return clone

    def result(self) -> Digest:
        """Digest of all processed bytes. Consumes the hasher."""
        state = self._live_state()
        self._state = None
        return Digest(self._kind, state.digest())

    def __repr__(self) -> str:
        return f"Hasher(kind={self._kind.value!r}, finalized={self.finalized})"
