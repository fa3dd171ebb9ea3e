"""Structured failures raised while listing a directory.

Every error names the primitive that failed and the directory involved.
They subclass ``OSError`` so generic OS-level handlers still catch them.
"""

from __future__ import annotations

from enum import Enum


class ListingErrorKind(str, Enum):
    """Which step of a directory listing failed."""

    OPEN = "open"
    ENTRY_STAT = "entry_stat"
    READ = "read"
    CLOSE = "close"


class ListingError(OSError):
    """Base class for directory-listing failures.

    ``errno`` and ``strerror`` are copied from the underlying ``OSError``,
    which is also chained as ``__cause__`` by the raising code.
    """

    kind: ListingErrorKind
    operation: str

    def __init__(self, path: str, cause: OSError, entry_name: str | None = None) -> None:
        super().__init__(cause.errno, cause.strerror or str(cause))
        self.path = path
        self.entry_name = entry_name

    @property
    def target(self) -> str:
        """Return the failing path, including the entry name when known."""
        if self.entry_name is None:
            return self.path
        return f"{self.path.rstrip('/')}/{self.entry_name}"

    def __str__(self) -> str:
        return f"[Errno {self.errno}] {self.strerror} @ {self.operation} - {self.target}"

    def __reduce__(self):
        cause = OSError(self.errno, self.strerror)
        return (type(self), (self.path, cause, self.entry_name))


class DirectoryOpenError(ListingError):
    """Opening the directory stream failed."""

    kind = ListingErrorKind.OPEN
    operation = "opendir"


class DirectoryEntryStatError(ListingError):
    """Resolving the real type of a symlink or untyped entry failed."""

    kind = ListingErrorKind.ENTRY_STAT
    operation = "fstatat"


class DirectoryReadError(ListingError):
    """Advancing the directory stream failed before exhaustion."""

    kind = ListingErrorKind.READ
    operation = "readdir"


class DirectoryCloseError(ListingError):
    """Releasing the directory stream failed."""

    kind = ListingErrorKind.CLOSE
    operation = "closedir"


__all__ = [
    "ListingErrorKind",
    "ListingError",
    "DirectoryOpenError",
    "DirectoryEntryStatError",
    "DirectoryReadError",
    "DirectoryCloseError",
]
