"""Command-line front door for bm.

Parses CLI options, normalizes and records new bookmark paths, and otherwise
launches the interactive picker. The chosen path is turned into a shell
command on the clipboard once the terminal has been restored.
"""

from __future__ import annotations

import argparse
import sys

from . import config
from .app import run_session
from .clipboard import SelectionMode, emit_selection
from .logging_config import setup_logging
from .render import CONTROLS_TEXT
from .selection import BookmarkList

USAGE = "bm [paths...] [options...]"
EPILOG = (
    "If bm is run with no paths, it uses the ones that have been previously "
    "saved. If none have been saved, provide some paths before running bm."
)


class _ArgumentParser(argparse.ArgumentParser):
    """argparse variant that reports usage errors with exit status 1."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        raise SystemExit(f"[Error]: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="bm",
        usage=USAGE,
        description="Bookmark directories and copy a shell command for one of them.",
        epilog=EPILOG,
        add_help=False,
    )
    parser.add_argument("paths", nargs="*", help="Paths to add to the bookmark list.")
    parser.add_argument("-h", "--help", action="store_true", help="Print this help message and exit with status 1.")
    parser.add_argument("-c", "--controls", action="store_true", help="Show the controls and exit.")
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--ls",
        dest="mode",
        action="store_const",
        const=SelectionMode.LIST_DIRECTORY,
        help="Copy `ls <path>` on selection.",
    )
    mode_group.add_argument(
        "--cat",
        dest="mode",
        action="store_const",
        const=SelectionMode.SHOW_CONTENTS,
        help="Copy `cat <path>` on selection.",
    )
    mode_group.add_argument(
        "--cd",
        dest="mode",
        action="store_const",
        const=SelectionMode.CHANGE_DIRECTORY,
        help="Copy `cd <path>` on selection (default).",
    )
    parser.set_defaults(mode=SelectionMode.CHANGE_DIRECTORY)
    return parser


def _add_paths(bookmarks: BookmarkList, raw_paths: list[str]) -> None:
    """Resolve and append ``raw_paths``; any unresolvable path is fatal."""
    for raw_path in raw_paths:
        try:
            path = config.to_absolute(raw_path)
        except (OSError, RuntimeError) as exc:
            reason = getattr(exc, "strerror", None) or str(exc)
            raise SystemExit(f"[Error]: {raw_path}: {reason}") from exc
        bookmarks.add(path)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, then either record new bookmarks or run the picker.

    Supplying paths saves them and prints the whole list without entering the
    interactive loop. With no paths and no saved bookmarks the command fails
    with exit status 1, as does ``--help``. Ctrl-C during the session exits
    with status 130 after the list has been saved.
    """
    setup_logging()
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    if args.help:
        parser.print_help()
        raise SystemExit(1)

    if args.controls:
        print(CONTROLS_TEXT)
        return

    bookmarks = BookmarkList(config.load_paths())
    _add_paths(bookmarks, args.paths)

    if not bookmarks:
        raise SystemExit("[Error]: No bookmarks found")

    if args.paths:
        config.save_paths(list(bookmarks))
        for path in bookmarks:
            print(f"Bookmarked {path}")
        return

    if not sys.stdin.isatty():
        raise SystemExit("[Error]: bm needs an interactive terminal on stdin")

    try:
        selected = run_session(bookmarks, args.mode, sys.stdin.fileno(), sys.stdout.fileno())
    except KeyboardInterrupt:
        raise SystemExit(130) from None
    if not bookmarks:
        print("No entries")
        return
    if selected is None:
        return

    command = emit_selection(selected, args.mode)
    if command is not None:
        print(f"copied: {command} to the clipboard")


if __name__ == "__main__":
    main()
