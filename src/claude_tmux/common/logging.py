"""Diagnostics for claude-tmux, written to stderr.

stdout carries the MCP stdio transport and CLI results, so nothing here
prints there. Lines read ``[timestamp] [LEVEL] message`` and are colored when
stderr is a terminal. ``CLAUDE_TMUX_QUIET=1`` keeps only WARN and ERROR.
"""

from __future__ import annotations

import io
import os
import re
import sys
from datetime import datetime, timezone

from claude_tmux.common.config import env_bool

# level -> (color, still shown in quiet mode)
_LEVELS = {
    "INFO": ("\033[0;34m", False),
    "OK": ("\033[0;32m", False),
    "WARN": ("\033[0;33m", True),
    "ERROR": ("\033[0;31m", True),
}
_RESET = "\033[0m"

# Matches CSI, OSC, charset selection and keypad mode sequences
_ANSI_ESCAPE_PATTERN = re.compile(
    r"""
    \x1b
    (?:
        \[ [?0-9;]* [A-Za-z]          # CSI: ESC [ params final
        |
        \] .*? (?:\x07|\x1b\\)        # OSC: ESC ] payload BEL|ST
        |
        [()][0-9AB]                   # charset: ESC ( B
        |
        [=>]                          # keypad: ESC = / ESC >
    )
    """,
    re.VERBOSE,
)


def _stderr_is_tty() -> bool:
    try:
        return os.isatty(sys.stderr.fileno())
    except (OSError, ValueError, io.UnsupportedOperation):
        return False


def _log(level: str, message: str) -> None:
    color, always = _LEVELS[level]
    if not always and env_bool("CLAUDE_TMUX_QUIET"):
        return
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    prefix = f"[{stamp}] [{level}]"
    if _stderr_is_tty():
        prefix = f"{color}{prefix}{_RESET}"
    print(f"{prefix} {message}", file=sys.stderr, flush=True)


def log_info(message: str) -> None:
    """Progress worth seeing outside quiet mode."""
    _log("INFO", message)


def log_success(message: str) -> None:
    _log("OK", message)


def log_warning(message: str) -> None:
    """Something unexpected that did not stop the operation."""
    _log("WARN", message)


def log_error(message: str) -> None:
    """An operation failed."""
    _log("ERROR", message)


def strip_ansi(text: str) -> str:
    """Drop terminal escape sequences from *text*.

    Panes are captured without ``-e``, but programs running in them can
    still leave raw sequences in the buffer.

        >>> strip_ansi("\\x1b[1mbold\\x1b[0m")
        'bold'
    """
    return _ANSI_ESCAPE_PATTERN.sub("", text)
