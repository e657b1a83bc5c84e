"""Asset store protocol.

Defines the read interface shared by every backend. Writing is backend
specific: LooseFiles accepts writes, ArchiveSet rejects them.
"""

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from content_assets.asset import Asset
from content_assets.digests import Digest


@runtime_checkable
class AssetStore(Protocol):
    """Protocol for content-addressed asset stores.

    Implementations: LooseFiles (mutable), ArchiveSet (read-only),
    LayeredStore (archives first, then loose files).
    """

    def get(self, digest: Digest) -> Asset:
        """Return the asset identified by digest. Raises AssetNotFoundError if absent."""
        ...

    def contains(self, digest: Digest) -> bool:
        """Check whether the asset exists without mapping it."""
        ...

    def list(self) -> Iterator[Digest]:
        """Lazily enumerate stored digests. For diagnostics only."""
        ...
