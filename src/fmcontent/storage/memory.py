"""In-memory object-store backend.

Objects are stored under flat keys such as ``docs/report.pdf``. As in S3
and similar stores there are no directory objects: a directory exists
only as the common prefix of some keys, so ``get_metadata`` has nothing
to return for it.
"""

from __future__ import annotations

from typing import Mapping

from fmcontent.entry import DIR, FILE, Entry, pathinfo


class MemoryBackend:
    """Disk holding objects in a dict of key -> content."""

    def __init__(self, objects: Mapping[str, bytes | str] | None = None) -> None:
        self._objects: dict[str, bytes] = {}
        for key, content in (objects or {}).items():
            self.put(key, content)

    def put(self, key: str, content: bytes | str) -> None:
        data = content.encode("utf-8") if isinstance(content, str) else content
        self._objects[key.strip("/")] = data

    def _object_entry(self, key: str) -> Entry:
        # Shaped like an S3 ListObjects row, then normalized.
        return Entry.from_mapping(
            {
                "path": key,
                "type": FILE,
                "filename": pathinfo(key).filename,
                "size": len(self._objects[key]),
                "visibility": "private",
            }
        )

    def list_contents(self, path: str = "") -> list[Entry]:
        """Return objects and common prefixes one level below ``path``.

        Sorted by key; a key that is both an object and a prefix is listed
        twice, directory first.
        """
        base = path.strip("/")
        prefix = base + "/" if base else ""

        files: list[Entry] = []
        dirs: set[str] = set()
        for key in self._objects:
            if not key.startswith(prefix):
                continue
            head, sep, _ = key[len(prefix):].partition("/")
            if sep:
                dirs.add(prefix + head)
            else:
                files.append(self._object_entry(key))

        entries = [Entry(path=child, type=DIR) for child in dirs] + files
        return sorted(entries, key=lambda entry: (entry.path, entry.type))

    def get_metadata(self, path: str) -> Entry | None:
        """Return metadata for an object key; prefixes have none."""
        key = path.strip("/")
        if key in self._objects:
            return self._object_entry(key)
        return None

    def directories(self, path: str = "") -> list[str]:
        return [entry.path for entry in self.list_contents(path) if entry.is_dir]
