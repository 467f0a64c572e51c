"""Shared fixtures for fmcontent tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from fmcontent.storage.base import DiskRegistry
from fmcontent.storage.local import LocalBackend
from fmcontent.storage.memory import MemoryBackend


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a standard local disk tree.

    Structure::

        root/
        ├── Photos/
        │   └── beach.JPG
        ├── docs/
        │   ├── photos/
        │   ├── report.PDF
        │   └── notes.txt
        ├── secret/
        │   └── keys.txt
        ├── README
        └── report.txt
    """
    (tmp_path / "Photos").mkdir()
    (tmp_path / "Photos" / "beach.JPG").write_bytes(b"\xff\xd8")
    (tmp_path / "docs" / "photos").mkdir(parents=True)
    (tmp_path / "docs" / "report.PDF").write_text("pdf")
    (tmp_path / "docs" / "notes.txt").write_text("notes")
    (tmp_path / "secret").mkdir()
    (tmp_path / "secret" / "keys.txt").write_text("keys")
    (tmp_path / "README").write_text("readme")
    (tmp_path / "report.txt").write_text("report")
    return tmp_path


@pytest.fixture
def object_store() -> MemoryBackend:
    """Object-store disk where directories exist only as key prefixes.

    Keys::

        media/2024/clip.mp4
        media/cover.png
        media/empty/.keep
        index.html
    """
    return MemoryBackend(
        {
            "media/2024/clip.mp4": b"\x00\x01",
            "media/cover.png": b"\x89PNG",
            "media/empty/.keep": b"",
            "index.html": "<html></html>",
        }
    )


@pytest.fixture
def disks(sample_tree: Path, object_store: MemoryBackend) -> DiskRegistry:
    """Registry with a ``local`` disk and an ``s3`` object-store disk."""
    return DiskRegistry({"local": LocalBackend(sample_tree), "s3": object_store})


class StaticACL:
    """ACL stub returning fixed levels per path and recording lookups."""

    def __init__(self, levels: dict[str, int], default: int = 2) -> None:
        self.levels = levels
        self.default = default
        self.calls: list[tuple[str, str]] = []

    def get_access_level(self, disk: str, path: str) -> int:
        self.calls.append((disk, path))
        return self.levels.get(path, self.default)


@pytest.fixture
def make_acl() -> type[StaticACL]:
    """Factory for ACL stubs: ``make_acl({"secret": 0})``."""
    return StaticACL
