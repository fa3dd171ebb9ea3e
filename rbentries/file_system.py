"""Loader-facing helpers built on ``list_entries``.

These helpers encode the project-tree conventions a loader needs: sorted
listings, ignored paths, nested root directories, and directories that hold
no ``.rb`` file at any depth.
"""

from __future__ import annotations

import errno
import logging
import os
from collections import deque
from collections.abc import Callable, Collection, Iterator

from .errors import DirectoryEntryStatError
from .listing import EntryKind, has_rb_extension, is_hidden, list_entries

logger = logging.getLogger(__name__)

IgnoredPredicate = Callable[[str], bool]


def _skip_broken_symlink(error: DirectoryEntryStatError) -> None:
    if error.errno != errno.ENOENT:
        raise error
    logger.warning("ignoring broken symlink %s", error.target)


def _is_root_dir(abspath: str, root_dirs: Collection[str]) -> bool:
    return bool(root_dirs) and abspath in root_dirs


def relevant_dir_entries(
    directory: str,
    *,
    ignored: IgnoredPredicate | None = None,
    root_dirs: Collection[str] = (),
) -> Iterator[tuple[str, str, EntryKind]]:
    """Yield ``(basename, abspath, kind)`` for entries a loader should see.

    Ignored paths are skipped. Directories listed in ``root_dirs`` are skipped
    too: a nested root is its own project tree. Broken symlinks are skipped
    with a warning; other entry failures propagate.
    """
    for basename, kind in list_entries(directory, on_entry_error=_skip_broken_symlink):
        abspath = os.path.join(directory, basename)
        if ignored is not None and ignored(abspath):
            continue
        if kind is EntryKind.DIRECTORY and _is_root_dir(abspath, root_dirs):
            continue
        yield basename, abspath, kind


def has_at_least_one_rb_file(
    directory: str,
    *,
    ignored: IgnoredPredicate | None = None,
    root_dirs: Collection[str] = (),
) -> bool:
    """Return whether any ``.rb`` file lives at or below ``directory``.

    Breadth-first, so the common case of a file directly inside ``directory``
    returns after a single listing.
    """
    to_visit = deque([directory])
    while to_visit:
        current = to_visit.popleft()
        for _basename, abspath, kind in relevant_dir_entries(
            current, ignored=ignored, root_dirs=root_dirs
        ):
            if kind is EntryKind.FILE:
                return True
            to_visit.append(abspath)
    return False


def ls(
    directory: str,
    *,
    ignored: IgnoredPredicate | None = None,
    root_dirs: Collection[str] = (),
    skip_empty_dirs: bool = True,
) -> list[tuple[str, str, EntryKind]]:
    """Return relevant entries of ``directory`` sorted by basename.

    Stream order depends on the filesystem; sorting keeps results stable
    across platforms. With ``skip_empty_dirs`` directories holding no ``.rb``
    file anywhere below them are left out.
    """
    children = sorted(
        relevant_dir_entries(directory, ignored=ignored, root_dirs=root_dirs),
        key=lambda child: child[0],
    )
    if not skip_empty_dirs:
        return children

    kept: list[tuple[str, str, EntryKind]] = []
    for basename, abspath, kind in children:
        if kind is EntryKind.DIRECTORY and not has_at_least_one_rb_file(
            abspath, ignored=ignored, root_dirs=root_dirs
        ):
            logger.debug("directory %s is ignored because it has no Ruby files", abspath)
            continue
        kept.append((basename, abspath, kind))
    return kept


def supported_ftype(abspath: str) -> EntryKind | None:
    """Classify a single path by name and, for non-``.rb`` names, by ``stat``.

    Paths with the ``.rb`` extension are taken to be files without a syscall.
    """
    if has_rb_extension(abspath):
        return EntryKind.FILE
    if os.path.isdir(abspath):
        return EntryKind.DIRECTORY
    return None


def walk_up(abspath: str) -> Iterator[str]:
    """Yield ``abspath`` and each of its ancestors up to the filesystem root."""
    current = abspath
    while True:
        yield current
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


__all__ = [
    "has_at_least_one_rb_file",
    "has_rb_extension",
    "is_hidden",
    "ls",
    "relevant_dir_entries",
    "supported_ftype",
    "walk_up",
]
