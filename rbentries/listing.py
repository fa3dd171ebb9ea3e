"""Single-level directory listing classified into ``.rb`` files and directories.

``list_entries`` reads one directory stream and keeps only visible regular
files with the ``.rb`` extension and visible directories. Symbolic links and
entries whose type the platform does not report are resolved with one
status query relative to the listed directory.
"""

from __future__ import annotations

import contextlib
import os
import stat
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from .errors import (
    DirectoryCloseError,
    DirectoryEntryStatError,
    DirectoryOpenError,
    DirectoryReadError,
    ListingError,
)

RB_EXTENSION = ".rb"


class EntryKind(str, Enum):
    """Classification of a listed entry."""

    FILE = "file"
    DIRECTORY = "directory"


class ListingEntry(NamedTuple):
    """One ``(name, kind)`` pair of a directory listing."""

    name: str
    kind: EntryKind


class _RawKind(Enum):
    REGULAR_FILE = "regular_file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    UNKNOWN = "unknown"
    OTHER = "other"


def is_hidden(name: str) -> bool:
    """Return whether ``name`` is a dotfile, including ``.`` and ``..``."""
    return name.startswith(".")


def has_rb_extension(name: str) -> bool:
    """Return whether ``name`` has the ``.rb`` extension and a non-empty stem."""
    return len(name) > len(RB_EXTENSION) and name.endswith(RB_EXTENSION)


def _raw_kind(entry: os.DirEntry) -> _RawKind:
    """Return the type reported by the directory stream for ``entry``.

    ``DirEntry`` answers from ``d_type`` when the platform fills it in and
    falls back to ``lstat`` otherwise; a failing fallback means unknown.
    """
    try:
        if entry.is_symlink():
            return _RawKind.SYMLINK
        if entry.is_dir(follow_symlinks=False):
            return _RawKind.DIRECTORY
        if entry.is_file(follow_symlinks=False):
            return _RawKind.REGULAR_FILE
    except OSError:
        return _RawKind.UNKNOWN
    return _RawKind.OTHER


def _resolved_kind(directory: str, entry: os.DirEntry) -> _RawKind:
    raw = _raw_kind(entry)
    if raw in (_RawKind.REGULAR_FILE, _RawKind.DIRECTORY):
        return raw

    # DirEntry reports a vanished untyped entry as "no type"; lstat confirms
    # whether it is a special file or gone.
    follow_symlinks = raw is not _RawKind.OTHER
    try:
        mode = entry.stat(follow_symlinks=follow_symlinks).st_mode
    except OSError as exc:
        raise DirectoryEntryStatError(directory, exc, entry_name=entry.name) from exc

    if stat.S_ISREG(mode):
        return _RawKind.REGULAR_FILE
    if stat.S_ISDIR(mode):
        return _RawKind.DIRECTORY
    return _RawKind.OTHER


def _classify(directory: str, entry: os.DirEntry) -> ListingEntry | None:
    """Return the listing entry for ``entry`` or ``None`` when it is dropped."""
    name = entry.name
    if is_hidden(name):
        return None

    kind = _resolved_kind(directory, entry)
    if kind is _RawKind.REGULAR_FILE:
        if has_rb_extension(name):
            return ListingEntry(name, EntryKind.FILE)
        return None
    if kind is _RawKind.DIRECTORY:
        return ListingEntry(name, EntryKind.DIRECTORY)
    return None


def list_entries(
    directory: str | bytes | os.PathLike,
    *,
    on_entry_error: Callable[[DirectoryEntryStatError], None] | None = None,
) -> list[ListingEntry]:
    """List ``.rb`` files and subdirectories directly inside ``directory``.

    Entries come back in directory-stream order. Failures raise a
    ``ListingError`` subclass and no partial listing is returned; the stream
    is closed on every path out of this function.

    ``on_entry_error`` receives each ``DirectoryEntryStatError`` instead of it
    being raised. The handler re-raises to abort; when it returns, that entry
    is left out and the listing continues.
    """
    path = os.fsdecode(directory)

    try:
        iterator = os.scandir(path)
    except OSError as exc:
        raise DirectoryOpenError(path, exc) from exc

    entries: list[ListingEntry] = []
    try:
        while True:
            try:
                entry = next(iterator)
            except StopIteration:
                break
            except OSError as exc:
                raise DirectoryReadError(path, exc) from exc

            try:
                listing_entry = _classify(path, entry)
            except DirectoryEntryStatError as exc:
                if on_entry_error is None:
                    raise
                on_entry_error(exc)
                continue
            if listing_entry is not None:
                entries.append(listing_entry)
    except BaseException:
        # the in-flight error wins over a secondary close failure
        with contextlib.suppress(OSError):
            iterator.close()
        raise

    try:
        iterator.close()
    except OSError as exc:
        raise DirectoryCloseError(path, exc) from exc

    return entries


@dataclass(frozen=True)
class ListingOutcome:
    """Listing plus the failure that prevented it, if any.

    Exactly one side is meaningful: ``error is None`` means ``entries`` is the
    complete listing, otherwise ``entries`` is empty.
    """

    entries: list[ListingEntry] = field(default_factory=list)
    error: ListingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def scan_entries(directory: str | bytes | os.PathLike) -> ListingOutcome:
    """Return ``list_entries(directory)`` as a ``ListingOutcome`` instead of raising."""
    try:
        return ListingOutcome(entries=list_entries(directory))
    except ListingError as exc:
        return ListingOutcome(error=exc)


__all__ = [
    "RB_EXTENSION",
    "EntryKind",
    "ListingEntry",
    "ListingOutcome",
    "has_rb_extension",
    "is_hidden",
    "list_entries",
    "scan_entries",
]
