"""Local filesystem backend using os.scandir."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from pathspec import GitIgnoreSpec

from fmcontent import BackendError
from fmcontent.entry import DIR, FILE, Entry, pathinfo

logger = logging.getLogger(__name__)


class LocalBackend:
    """Disk backed by a directory on the local filesystem.

    Paths are disk-relative and ``/``-separated; ``""`` is the disk root.
    """

    def __init__(self, root: str | Path, ignore: list[str] | None = None) -> None:
        """Initialize the backend.

        Args:
            root: Directory that acts as the disk root.
            ignore: Optional gitignore-style patterns hiding entries from listings.
        """
        self.root = Path(root).resolve()
        self._ignore = GitIgnoreSpec.from_lines(ignore) if ignore else None

    def _resolve(self, path: str) -> Path:
        """Return the absolute location of a disk path.

        Raises:
            BackendError: If ``path`` escapes the disk root.
        """
        target = (self.root / path.strip("/")).resolve()
        if target != self.root and self.root not in target.parents:
            raise BackendError(f"Path '{path}' is outside the disk root")
        return target

    def _relative(self, target: Path) -> str:
        return target.relative_to(self.root).as_posix() if target != self.root else ""

    def _is_ignored(self, rel_path: str, is_dir: bool) -> bool:
        if self._ignore is None:
            return False
        return self._ignore.match_file(rel_path + "/" if is_dir else rel_path)

    def _make_entry(self, rel_path: str, st: os.stat_result) -> Entry:
        is_dir = stat.S_ISDIR(st.st_mode)
        info = pathinfo(rel_path)
        meta: dict[str, object] = {"timestamp": int(st.st_mtime)}
        if not is_dir:
            meta["size"] = st.st_size
        meta["visibility"] = "public" if st.st_mode & stat.S_IROTH else "private"
        return Entry(
            path=rel_path,
            type=DIR if is_dir else FILE,
            basename=info.basename,
            filename=None if is_dir else info.filename,
            meta=meta,
        )

    def _scan(self, path: str) -> list[tuple[str, os.stat_result]]:
        current = self._resolve(path)
        try:
            raw_entries = list(os.scandir(current))
        except OSError as exc:
            raise BackendError(f"Cannot list '{path}': {exc.strerror or exc}") from exc

        raw_entries.sort(key=lambda e: e.name)

        result: list[tuple[str, os.stat_result]] = []
        for dir_entry in raw_entries:
            rel_path = self._relative(Path(dir_entry.path))
            try:
                st = dir_entry.stat()
            except OSError:
                logger.debug("Cannot stat: %s", dir_entry.path)
                continue
            if self._is_ignored(rel_path, stat.S_ISDIR(st.st_mode)):
                continue
            result.append((rel_path, st))
        return result

    def list_contents(self, path: str = "") -> list[Entry]:
        """Return entries directly under ``path``, sorted by name.

        Raises:
            BackendError: If the directory is missing, unreadable or outside the root.
        """
        return [self._make_entry(rel_path, st) for rel_path, st in self._scan(path)]

    def get_metadata(self, path: str) -> Entry | None:
        """Return metadata for ``path``, or ``None`` when it does not exist."""
        target = self._resolve(path)
        try:
            st = target.stat()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise BackendError(f"Cannot read metadata of '{path}': {exc.strerror or exc}") from exc
        return self._make_entry(self._relative(target), st)

    def directories(self, path: str = "") -> list[str]:
        """Return paths of subdirectories directly under ``path``."""
        return [rel_path for rel_path, st in self._scan(path) if stat.S_ISDIR(st.st_mode)]
