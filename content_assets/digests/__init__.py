"""Content addressing: hash kinds, digests, hashing, and digest-keyed containers.

@public
"""

from ._kind import BLAKE2B_LEN, HashKind
from .containers import ContentMap, ContentSet
from .digest import Digest, identity_hash
from .hasher import Hasher

__all__ = [
    "BLAKE2B_LEN",
    "ContentMap",
    "ContentSet",
    "Digest",
    "HashKind",
    "Hasher",
    "identity_hash",
]
