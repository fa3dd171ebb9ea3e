"""Command-line front door for rbentries.

Parses CLI options, resolves the target directory, and prints its ``.rb``
files and subdirectories as text, JSON, or an indented tree.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import config
from .errors import ListingError
from .file_system import ls
from .listing import EntryKind, ListingEntry, list_entries

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool, level_name: str | None) -> None:
    if verbose:
        level = logging.DEBUG
    elif level_name is not None:
        level = logging.getLevelName(level_name)
    else:
        level = config.load_log_level()
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def format_entries(entries: list[ListingEntry]) -> str:
    """Render entries as ``<kind>\\t<name>`` lines."""
    return "".join(f"{entry.kind.value}\t{entry.name}\n" for entry in entries)


def format_entries_json(entries: list[ListingEntry]) -> str:
    """Render entries as a JSON array of ``{"name", "kind"}`` objects."""
    payload = [{"name": entry.name, "kind": entry.kind.value} for entry in entries]
    return json.dumps(payload, indent=2) + "\n"


def render_tree(directory: str, skip_empty_dirs: bool, depth: int = 0) -> list[str]:
    """Return indented tree lines below ``directory``, sorted per level."""
    lines: list[str] = []
    indent = "  " * depth
    for basename, abspath, kind in ls(directory, skip_empty_dirs=skip_empty_dirs):
        if kind is EntryKind.DIRECTORY:
            lines.append(f"{indent}{basename}/")
            lines.extend(render_tree(abspath, skip_empty_dirs, depth + 1))
        else:
            lines.append(f"{indent}{basename}")
    return lines


def _save_preferences(args: argparse.Namespace) -> None:
    """Persist the preferences given explicitly on the command line."""
    if args.sort is not None:
        config.save_sort(args.sort)
    if args.skip_empty_dirs is not None:
        config.save_skip_empty_dirs(args.skip_empty_dirs)
    if args.log_level is not None:
        config.save_log_level(args.log_level)


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and list a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. Listing failures exit with the error message. With
    ``--save`` the explicitly given preferences become the new defaults.
    """
    parser = argparse.ArgumentParser(
        description="List .rb files and subdirectories directly inside a directory."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to list. Defaults to current directory.")
    sort_group = parser.add_mutually_exclusive_group()
    sort_group.add_argument("--sort", dest="sort", action="store_true", default=None, help="Sort entries by name.")
    sort_group.add_argument("--no-sort", dest="sort", action="store_false", help="Keep directory-stream order.")
    parser.add_argument("--json", action="store_true", help="Print entries as JSON.")
    parser.add_argument("--tree", action="store_true", help="Descend into subdirectories.")
    empty_group = parser.add_mutually_exclusive_group()
    empty_group.add_argument(
        "--skip-empty",
        dest="skip_empty_dirs",
        action="store_true",
        default=None,
        help="With --tree, drop directories that contain no .rb files.",
    )
    empty_group.add_argument(
        "--keep-empty",
        dest="skip_empty_dirs",
        action="store_false",
        help="With --tree, keep directories that contain no .rb files.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=config.LOG_LEVEL_NAMES,
        default=None,
        help="Logging level (default from config, else WARNING).",
    )
    parser.add_argument("--save", action="store_true", help="Store the given preferences as defaults.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    if args.save:
        _save_preferences(args)
    _configure_logging(args.verbose, args.log_level)

    if default_path is None:
        default_path = Path.cwd()
    directory = str(Path(args.path or default_path).absolute())
    logger.debug("listing %s", directory)

    try:
        if args.tree:
            skip_empty_dirs = (
                config.load_skip_empty_dirs() if args.skip_empty_dirs is None else args.skip_empty_dirs
            )
            lines = render_tree(directory, skip_empty_dirs)
            sys.stdout.write("".join(f"{line}\n" for line in lines))
            return
        entries = list_entries(directory)
    except ListingError as exc:
        raise SystemExit(str(exc)) from exc

    sort = config.load_sort() if args.sort is None else args.sort
    if sort:
        entries.sort(key=lambda entry: entry.name)

    if args.json:
        sys.stdout.write(format_entries_json(entries))
    else:
        sys.stdout.write(format_entries(entries))


if __name__ == "__main__":
    main()
