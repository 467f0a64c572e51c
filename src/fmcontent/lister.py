"""Directory and file listings for a disk, with search and ACL filtering."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Iterable, NamedTuple, cast

from fmcontent import AccessDeniedError, NotFoundError
from fmcontent.acl import NO_ACCESS, AccessControl
from fmcontent.entry import DIR, FILE, Entry, EntryType, pathinfo
from fmcontent.storage.base import DiskRegistry

if TYPE_CHECKING:
    from fmcontent.config import ContentConfig

logger = logging.getLogger(__name__)


class ContentListing(NamedTuple):
    """Result of :meth:`ContentLister.list_content`."""

    directories: list[Entry]
    files: list[Entry]


class ContentLister:
    """List disk contents and entry properties.

    Stateless between calls: every operation queries the backend afresh.
    Backend errors propagate unchanged.
    """

    def __init__(
        self,
        disks: DiskRegistry,
        acl: AccessControl | None = None,
        *,
        acl_enabled: bool = False,
        hide_no_access: bool = False,
    ) -> None:
        """Initialize the lister.

        Args:
            disks: Registry resolving disk names to backends.
            acl: Access-level service, required when ``acl_enabled``.
            acl_enabled: Tag entries with their access level.
            hide_no_access: Drop entries whose access level is zero
                instead of only tagging them.

        Raises:
            ValueError: If ACL is enabled without an ACL service.
        """
        if acl_enabled and acl is None:
            raise ValueError("acl_enabled requires an AccessControl instance")
        self._disks = disks
        self._acl = acl
        self.acl_enabled = acl_enabled
        self.hide_no_access = hide_no_access

    @classmethod
    def from_config(
        cls,
        config: ContentConfig,
        disks: DiskRegistry,
        acl: AccessControl | None = None,
    ) -> ContentLister:
        return cls(
            disks,
            acl,
            acl_enabled=config.acl,
            hide_no_access=config.acl_hide_from_fm,
        )

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------
    def list_content(self, disk: str, path: str = "", search: str | None = None) -> ContentListing:
        """Return directories and files directly under ``path``.

        Directories are searched by full path, files by basename.
        """
        content = self._disks.disk(disk).list_contents(path)
        directories = self._partition(disk, content, DIR, search)
        files = self._partition(disk, content, FILE, search)
        logger.debug(
            "Listed %s:%s -> %d dirs, %d files", disk, path, len(directories), len(files)
        )
        return ContentListing(directories, files)

    def list_directories_with_properties(
        self, disk: str, path: str = "", search: str | None = None
    ) -> list[Entry]:
        content = self._disks.disk(disk).list_contents(path)
        return self._partition(disk, content, DIR, search)

    def list_files_with_properties(self, disk: str, path: str = "") -> list[Entry]:
        """Return files directly under ``path``.

        Takes no search term; searching files goes through :meth:`list_content`.
        """
        content = self._disks.disk(disk).list_contents(path)
        return self._partition(disk, content, FILE)

    def get_directory_tree(self, disk: str, path: str = "", search: str | None = None) -> list[Entry]:
        """Return directories under ``path`` with a ``hasSubdirectories`` prop.

        Issues one extra backend call per returned directory.
        """
        backend = self._disks.disk(disk)
        return [
            dataclasses.replace(
                directory,
                props={"hasSubdirectories": bool(backend.directories(directory.path))},
            )
            for directory in self.list_directories_with_properties(disk, path, search)
        ]

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    def get_file_properties(self, disk: str, path: str) -> Entry:
        """Return backend metadata for a file enriched with path components.

        Raises:
            NotFoundError: If the backend has no metadata for ``path``.
            AccessDeniedError: If the file is hidden by ACL.
        """
        file = self._disks.disk(disk).get_metadata(path)
        if file is None:
            raise NotFoundError(f"File '{path}' not found on disk '{disk}'")

        info = pathinfo(path)
        file = dataclasses.replace(
            file,
            basename=info.basename,
            dirname=info.dirname,
            extension=info.extension,
            filename=info.filename,
        )
        return self._apply_acl_single(disk, file)

    def get_directory_properties(self, disk: str, path: str) -> Entry:
        """Return backend metadata for a directory enriched with path components.

        Object stores keep no directory objects, so a directory without
        metadata gets a minimal ``{path, type: dir}`` entry.

        Raises:
            AccessDeniedError: If the directory is hidden by ACL.
        """
        directory = self._disks.disk(disk).get_metadata(path)
        if directory is None:
            logger.debug("No metadata for %s:%s, treating as prefix directory", disk, path)
            directory = Entry(path=path, type=DIR)

        info = pathinfo(path)
        directory = dataclasses.replace(directory, basename=info.basename, dirname=info.dirname)
        return self._apply_acl_single(disk, directory)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _partition(
        self,
        disk: str,
        content: Iterable[Entry],
        kind: EntryType,
        search: str | None = None,
    ) -> list[Entry]:
        """Select entries of one type, then search, then ACL.

        Directories lose their ``filename`` and are matched by ``path``;
        files are matched by ``basename``. Matching is a case-insensitive
        substring test.
        """
        entries = [entry for entry in content if entry.type == kind]

        if kind == DIR:
            entries = [dataclasses.replace(entry, filename=None) for entry in entries]

        if search:
            needle = search.lower()
            if kind == DIR:
                entries = [entry for entry in entries if needle in entry.path.lower()]
            else:
                entries = [entry for entry in entries if needle in entry.basename.lower()]

        if self.acl_enabled:
            return self._apply_acl(disk, entries)
        return entries

    def _apply_acl(self, disk: str, entries: Iterable[Entry]) -> list[Entry]:
        """Tag entries with their access level; drop zero-access ones if hiding."""
        acl = cast(AccessControl, self._acl)
        tagged = [
            dataclasses.replace(entry, acl=acl.get_access_level(disk, entry.path))
            for entry in entries
        ]
        if self.hide_no_access:
            return [entry for entry in tagged if entry.acl != NO_ACCESS]
        return tagged

    def _apply_acl_single(self, disk: str, entry: Entry) -> Entry:
        if not self.acl_enabled:
            return entry
        visible = self._apply_acl(disk, [entry])
        if not visible:
            raise AccessDeniedError(f"Access denied to '{entry.path}' on disk '{disk}'")
        return visible[0]
