"""Hash algorithm registry."""

from enum import StrEnum

from content_assets.exceptions import UnknownKindError

BLAKE2B_LEN = 25
"""Output length of HashKind.BLAKE2B in bytes (200 bits, 40 base32 characters)."""


class HashKind(StrEnum):
    """The algorithm used by a digest.

    @public

    The value is the canonical lowercase name used in the human-readable
    encoding and in loose-file directory names. Each kind also has a stable
    integer id, persisted in the binary encoding and in archive headers.

    Ids are append-only: new kinds may be added, none may be removed or
    renumbered.

    BLAKE2B: 200-bit blake2b. The size divides evenly into both bytes and
        base32 characters.
    """

    BLAKE2B = "blake2b"

    @property
    def id(self) -> int:
        """Integer id of this kind."""
        return _KIND_INFO[self][0]

    @property
    def length(self) -> int:
        """Length in bytes of digests of this kind."""
        return _KIND_INFO[self][1]

    @classmethod
    def default(cls) -> "HashKind":
        """Currently recommended kind."""
        return cls.BLAKE2B

    @classmethod
    def from_name(cls, name: str) -> "HashKind":
        """Look up a kind by canonical name.

        Raises:
            UnknownKindError: If no kind has this name.
        """
        try:
            return cls(name)
        except ValueError:
            raise UnknownKindError(name) from None

    @classmethod
    def from_id(cls, value: int) -> "HashKind | None":
        """Reconstruct a kind from a value previously obtained with `id`."""
        return _KINDS_BY_ID.get(value)


# kind -> (id, length)
_KIND_INFO: dict[HashKind, tuple[int, int]] = {
    HashKind.BLAKE2B: (0, BLAKE2B_LEN),
}

_KINDS_BY_ID: dict[int, HashKind] = {info[0]: kind for kind, info in _KIND_INFO.items()}
