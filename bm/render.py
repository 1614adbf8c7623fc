"""Screen rendering for the bookmark picker.

Everything here is presentation-only and side-effect free: callers write the
returned strings to the terminal themselves.
"""

from __future__ import annotations

import unicodedata

from .clipboard import SelectionMode, build_command
from .selection import BookmarkList
from .terminal import TerminalConfig

CLEAR_SCREEN = "\033[2J\033[H"
INVERT = "\033[7m"
RESET = "\033[0m"

CONTROLS_TEXT = (
    "Controls:\n"
    "[UP ARROW]   - up\n"
    "[DOWN ARROW] - down\n"
    "d            - delete\n"
    "q, Ctrl+Q    - quit\n"
    "[ENTER]      - select\n"
    "\n"
    "Upon selection, cd <path> (or ls/cat with --ls/--cat) is copied\n"
    "to the clipboard with pbcopy, wl-copy, xclip or xsel.\n"
    "Paste using ctrl+shift+v."
)


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def clip_to_width(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    if max_cols <= 0:
        return ""
    out: list[str] = []
    used = 0
    for ch in text:
        width = char_display_width(ch)
        if used + width > max_cols:
            break
        out.append(ch)
        used += width
    return "".join(out)


def visible_window(cursor: int | None, total: int, rows: int) -> range:
    """Return the list indices shown in ``rows`` lines, keeping ``cursor`` on screen."""
    rows = max(1, rows)
    if total <= rows or cursor is None or cursor < rows:
        return range(0, min(total, rows))
    start = cursor - rows + 1
    return range(start, start + rows)


def render_screen(bookmarks: BookmarkList, mode: SelectionMode, config: TerminalConfig) -> str:
    """Build one full frame: header line plus the scrolled bookmark rows."""
    if not bookmarks:
        return render_empty()

    header = f"{len(bookmarks)} Directories, selection: {build_command(bookmarks.current or '', mode)}"
    lines = [CLEAR_SCREEN, clip_to_width(header, config.width), "\n"]
    paths = bookmarks.paths
    for idx in visible_window(bookmarks.cursor, len(paths), config.height - 1):
        row = clip_to_width(paths[idx], config.width)
        if idx == bookmarks.cursor:
            lines.append(f"{INVERT}{row}{RESET}\n")
        else:
            lines.append(f"{row}\n")
    return "".join(lines)


def render_empty() -> str:
    return f"{CLEAR_SCREEN}No entries\n"
