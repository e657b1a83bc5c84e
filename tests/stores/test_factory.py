"""Tests for create_asset_store."""

from pathlib import Path

from content_assets.settings import Settings
from content_assets.stores import ArchiveSet, LayeredStore, LooseFiles, create_asset_store


class TestCreateAssetStore:
    def test_loose_only(self, tmp_path: Path):
        store = create_asset_store(Settings(assets_loose_path=str(tmp_path / "loose")))
        assert isinstance(store, LooseFiles)
        assert store.root == tmp_path / "loose"

    def test_archives_only(self, archive_dir: Path):
        store = create_asset_store(Settings(assets_archive_path=str(archive_dir)))
        assert isinstance(store, ArchiveSet)
        assert store.archive_count == 2

    def test_both_layered(self, tmp_path: Path, archive_dir: Path):
        settings = Settings(assets_loose_path=str(tmp_path / "loose"), assets_archive_path=str(archive_dir))
        store = create_asset_store(settings)
        assert isinstance(store, LayeredStore)
        assert store.loose.root == tmp_path / "loose"

    def test_default_location(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        store = create_asset_store(Settings(assets_loose_path="", assets_archive_path=""))
        assert isinstance(store, LooseFiles)
        assert (tmp_path / "assets").is_dir()

    def test_satisfies_protocol(self, tmp_path: Path):
        from content_assets.stores import AssetStore

        store = create_asset_store(Settings(assets_loose_path=str(tmp_path)))
        assert isinstance(store, AssetStore)
