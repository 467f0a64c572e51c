"""fmcontent — directory listings for file-manager disks with optional ACL filtering."""

__version__ = "0.1.0"


class FmContentError(Exception):
    """User-facing error.

    Base class for every error raised by this package on bad input or
    backend failure. The CLI prints the message to stderr and exits
    with code 1.
    """


class BackendError(FmContentError):
    """A storage backend call failed (unknown disk, missing path, I/O error)."""


class NotFoundError(FmContentError):
    """The backend returned no metadata for a file path."""


class AccessDeniedError(FmContentError):
    """A single entry is hidden because its access level is zero."""


class ConfigError(FmContentError):
    """Configuration file is missing, malformed or holds invalid values."""
