"""Entry record and path splitting helpers."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field, fields
from typing import Any, Final, Literal, Mapping, NamedTuple

EntryType = Literal["dir", "file"]

DIR: Final = "dir"
FILE: Final = "file"

_ENTRY_TYPES: Final[frozenset[str]] = frozenset({DIR, FILE})


class PathInfo(NamedTuple):
    """Components of a disk path.

    Attributes:
        dirname: Parent path, ``""`` for root-level paths.
        basename: Last path segment.
        extension: Text after the last dot of ``basename``, ``""`` if none.
        filename: ``basename`` without the extension.
    """

    dirname: str
    basename: str
    extension: str
    filename: str


def pathinfo(path: str) -> PathInfo:
    """Split a ``/``-separated path into its components.

    Trailing slashes are ignored. The ``"."`` placeholder that a plain
    ``dirname`` produces for root-level paths is normalized to ``""``.

    Args:
        path: Disk-relative (or absolute) path.

    Returns:
        PathInfo: Split components.
    """
    stripped = path.rstrip("/") or path
    basename = posixpath.basename(stripped)
    dirname = posixpath.dirname(stripped)
    if dirname in ("", "."):
        dirname = ""

    stem, dot, extension = basename.rpartition(".")
    if not dot:
        return PathInfo(dirname, basename, "", basename)
    return PathInfo(dirname, basename, extension, stem)


@dataclass(frozen=True, slots=True)
class Entry:
    """A single file or directory record.

    Optional fields set to ``None`` are absent: they are omitted from
    :meth:`to_dict`. Backend-specific metadata (size, timestamp,
    visibility, ...) lives in ``meta`` and is passed through untouched.

    Attributes:
        path: Disk-relative path.
        type: ``"dir"`` or ``"file"``.
        basename: Last path segment.
        filename: Name without extension.
        extension: File extension without the dot.
        dirname: Parent path, ``""`` at the disk root.
        acl: Access level attached by the ACL filter.
        props: Extra view properties (``hasSubdirectories`` for trees).
        meta: Backend-supplied fields.
    """

    path: str
    type: EntryType
    basename: str = ""
    filename: str | None = None
    extension: str | None = None
    dirname: str | None = None
    acl: int | None = None
    props: Mapping[str, Any] | None = None
    meta: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.type not in _ENTRY_TYPES:
            raise ValueError(f"Invalid entry type {self.type!r}, expected 'dir' or 'file'")
        if not self.basename:
            object.__setattr__(self, "basename", pathinfo(self.path).basename)

    @property
    def is_dir(self) -> bool:
        return self.type == DIR

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Entry:
        """Build an entry from a loose backend mapping.

        Keys matching an Entry field populate that field; every other key
        is kept in ``meta``.

        Raises:
            ValueError: If ``path`` or ``type`` is missing or ``type`` is invalid.
        """
        if "path" not in data or "type" not in data:
            raise ValueError("Entry mapping requires 'path' and 'type'")
        known = {f.name for f in fields(cls)} - {"meta"}
        kwargs = {k: v for k, v in data.items() if k in known}
        meta = {k: v for k, v in data.items() if k not in known}
        return cls(**kwargs, meta=meta)

    def to_dict(self) -> dict[str, Any]:
        """Return a flat mapping of present fields followed by ``meta``."""
        result: dict[str, Any] = {"path": self.path, "type": self.type, "basename": self.basename}
        for name in ("filename", "extension", "dirname", "acl"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        result.update(self.meta)
        if self.props is not None:
            result["props"] = dict(self.props)
        return result
