"""Common test fixtures for asset store tests."""

from pathlib import Path

import pytest

from content_assets.stores import ArchiveSet, LooseFiles
from tests.support.archives import key, write_archive


@pytest.fixture
def loose(tmp_path: Path) -> LooseFiles:
    return LooseFiles.open(tmp_path / "loose")


@pytest.fixture
def archive_dir(tmp_path: Path) -> Path:
    """Directory with two blake2b archives sharing key 0x01."""
    directory = tmp_path / "archives"
    write_archive(directory / "a.car", [(key(0x01), b"first"), (key(0x02), b"only in a")])
    write_archive(directory / "b.car", [(key(0x01), b"second"), (key(0x03), b"only in b")])
    return directory


@pytest.fixture
def archives(archive_dir: Path) -> ArchiveSet:
    return ArchiveSet.open(archive_dir)
