"""CLI entry point for fmcontent — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from fmcontent import FmContentError
from fmcontent.config import ContentConfig, build_acl, build_disks, load_config
from fmcontent.entry import Entry
from fmcontent.lister import ContentListing, ContentLister
from fmcontent.storage.base import DiskRegistry
from fmcontent.storage.local import LocalBackend

# Disk name used when DISK is a plain directory and no config is given.
DEFAULT_DISK = "local"

MODES = ("content", "dirs", "files", "tree", "file", "dir")


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``fmcontent`` command.
    """
    parser = argparse.ArgumentParser(
        prog="fmcontent",
        description="list directories and files of a file-manager disk",
    )
    parser.add_argument(
        "disk",
        help="Disk name from the config file, or a local directory when no config is given",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="",
        help="Path on the disk (default: disk root)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        dest="config_file",
        help="JSON config file with disks and ACL settings",
    )
    parser.add_argument(
        "-s",
        "--search",
        type=str,
        default=None,
        help="Case-insensitive search term (directories by path, files by name)",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=MODES,
        default="content",
        help="What to list: content (default), dirs, files, tree, file or dir properties",
    )
    parser.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        dest="output_format",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr",
    )
    return parser


def run_fmcontent(argv: list[str] | None = None) -> str:
    """Run fmcontent with provided CLI args and return formatted output.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        str: Final rendered output.

    Raises:
        FmContentError: On any user-facing validation, config or backend error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _build_lister(args: argparse.Namespace) -> tuple[ContentLister, str]:
    """Build a lister from ``--config``, or a single local disk without one.

    Returns:
        tuple[ContentLister, str]: The lister and the disk name to query.

    Raises:
        FmContentError: If the config is invalid or DISK is not a directory.
    """
    if args.config_file:
        config = load_config(args.config_file)
        disks = build_disks(config, base_dir=Path(args.config_file).resolve().parent)
        lister = ContentLister.from_config(config, disks, build_acl(config) if config.acl else None)
        return lister, args.disk

    root = Path(args.disk)
    if not root.is_dir():
        raise FmContentError(f"'{args.disk}' is not a directory")
    disks = DiskRegistry({DEFAULT_DISK: LocalBackend(root)})
    return ContentLister.from_config(ContentConfig(), disks), DEFAULT_DISK


def _list(lister: ContentLister, disk: str, args: argparse.Namespace) -> ContentListing | list[Entry] | Entry:
    if args.mode == "dirs":
        return lister.list_directories_with_properties(disk, args.path, args.search)
    if args.mode == "files":
        return lister.list_files_with_properties(disk, args.path)
    if args.mode == "tree":
        return lister.get_directory_tree(disk, args.path, args.search)
    if args.mode == "file":
        return lister.get_file_properties(disk, args.path)
    if args.mode == "dir":
        return lister.get_directory_properties(disk, args.path)
    return lister.list_content(disk, args.path, args.search)


def _format_output(args: argparse.Namespace, result: ContentListing | list[Entry] | Entry) -> str:
    if args.output_format == "csv":
        from fmcontent.formatter.csv_ import format_csv

        if isinstance(result, ContentListing):
            entries = [*result.directories, *result.files]
        elif isinstance(result, Entry):
            entries = [result]
        else:
            entries = result
        return format_csv(entries)

    from fmcontent.formatter.json_ import format_json

    return format_json(result)


def _run_with_args(args: argparse.Namespace) -> str:
    lister, disk = _build_lister(args)
    result = _list(lister, disk, args)
    return _format_output(args, result)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        output = _run_with_args(args)
    except FmContentError as exc:
        sys.stderr.write(f"fmcontent: {exc}\n")
        sys.exit(1)

    sys.stdout.write(output + "\n")
