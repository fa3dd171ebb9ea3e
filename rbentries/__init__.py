"""Public package surface for rbentries.

Exports the single-level listing API and ``main`` for programmatic CLI
invocation. Loader helpers live in ``rbentries.file_system``.
"""

from __future__ import annotations

from .errors import (
    DirectoryCloseError,
    DirectoryEntryStatError,
    DirectoryOpenError,
    DirectoryReadError,
    ListingError,
    ListingErrorKind,
)
from .listing import EntryKind, ListingEntry, ListingOutcome, list_entries, scan_entries


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "DirectoryCloseError",
    "DirectoryEntryStatError",
    "DirectoryOpenError",
    "DirectoryReadError",
    "EntryKind",
    "ListingEntry",
    "ListingError",
    "ListingErrorKind",
    "ListingOutcome",
    "list_entries",
    "main",
    "scan_entries",
]
