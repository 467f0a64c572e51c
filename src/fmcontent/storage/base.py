"""Storage backend protocol and disk registry."""

from __future__ import annotations

from typing import Mapping, Protocol

from fmcontent import BackendError
from fmcontent.entry import Entry


class StorageBackend(Protocol):
    """Protocol for a disk's storage backend.

    Keeps the lister decoupled from how a disk stores its data.
    """

    def list_contents(self, path: str = "") -> list[Entry]:
        """Return the entries directly under ``path`` (not recursive)."""
        ...

    def get_metadata(self, path: str) -> Entry | None:
        """Return metadata for ``path``, or ``None`` when there is none."""
        ...

    def directories(self, path: str = "") -> list[str]:
        """Return the paths of the subdirectories directly under ``path``."""
        ...


class DiskRegistry:
    """Map of disk names to storage backends."""

    def __init__(self, disks: Mapping[str, StorageBackend] | None = None) -> None:
        self._disks: dict[str, StorageBackend] = dict(disks) if disks else {}

    def add(self, name: str, backend: StorageBackend) -> None:
        self._disks[name] = backend

    def disk(self, name: str) -> StorageBackend:
        """Return the backend for ``name``.

        Raises:
            BackendError: If no disk with that name is registered.
        """
        try:
            return self._disks[name]
        except KeyError:
            known = ", ".join(self.names()) or "none"
            raise BackendError(f"Unknown disk '{name}'. Known disks: {known}") from None

    def names(self) -> list[str]:
        return sorted(self._disks)
