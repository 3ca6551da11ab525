"""Console input for the local REPL.

Uses GNU readline when it is available so the arrow keys edit the line and
recall earlier commands. History is kept in a file between runs.
"""
from __future__ import annotations

import atexit
import os
from typing import Optional


HISTORY_FILE = os.path.expanduser("~/.hcloudrelay_history")
_readline = None  # type: ignore


def init_readline(history_file: Optional[str] = None, history_length: int = 500) -> bool:
    """Load readline history and save it again at exit.

    Returns False (and leaves plain input() in place) if readline is missing.
    """
    global _readline
    try:
        import readline  # type: ignore
    except ImportError:
        _readline = None
        return False
    _readline = readline

    path = history_file or HISTORY_FILE
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        if os.path.exists(path):
            readline.read_history_file(path)
    except OSError:
        # Unreadable history just means starting fresh
        pass
    readline.set_history_length(history_length)
    # read_command() decides what goes into history
    readline.set_auto_history(False)

    def _save_history() -> None:
        try:
            readline.write_history_file(path)
        except OSError:
            pass

    atexit.register(_save_history)
    return True


def read_command(prompt: str = "relay> ") -> str:
    """Read one line, recording it in history unless it repeats the last one."""
    line = input(prompt)
    if _readline is not None and line.strip():
        count = _readline.get_current_history_length()
        if not count or _readline.get_history_item(count) != line:
            _readline.add_history(line)
    return line


__all__ = ["init_readline", "read_command", "HISTORY_FILE"]
