"""Factory function for creating asset store instances based on settings."""

from pathlib import Path

from content_assets.settings import Settings
from content_assets.stores.protocol import AssetStore

DEFAULT_LOOSE_PATH = "assets"


def create_asset_store(settings: Settings) -> AssetStore:
    """Create an AssetStore based on settings.

    Selects LayeredStore when both assets_archive_path and assets_loose_path
    are configured, the single configured backend otherwise, and a
    LooseFiles store under ./assets when neither is set.

    Backends are imported lazily to avoid circular imports.
    """
    from content_assets.stores.loose_files import LooseFiles

    if settings.assets_archive_path:
        from content_assets.stores.archive import ArchiveSet

        archives = ArchiveSet.open(Path(settings.assets_archive_path))
        if not settings.assets_loose_path:
            return archives

        from content_assets.stores._layered import LayeredStore

        loose = LooseFiles.open(Path(settings.assets_loose_path), kind=settings.hash_kind)
        return LayeredStore(archives, loose)

    return LooseFiles.open(Path(settings.assets_loose_path or DEFAULT_LOOSE_PATH), kind=settings.hash_kind)
