"""Session naming conventions.

Callers address sessions by a short name (``refactor-auth``); tmux sees the
canonical identifier (``claude-refactor-auth``). Two short names that only
differ in disallowed characters (``a/b`` and ``a-b``) map to the same
session. That ambiguity is accepted.
"""

from __future__ import annotations

import re

from claude_tmux.errors import InvalidNameError

# All managed tmux sessions carry this prefix so ``list`` can ignore the
# user's own sessions on the same server.
SESSION_PREFIX = "claude-"

MAX_NAME_LENGTH = 50

_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def canonicalize(name: str) -> str:
    """Map a caller-supplied short name to its tmux session identifier.

    Names that already carry :data:`SESSION_PREFIX` are treated as canonical,
    so ``canonicalize(canonicalize(x)) == canonicalize(x)``.

    Raises:
        InvalidNameError: if the name is empty or longer than
            :data:`MAX_NAME_LENGTH` characters.
    """
    if not name:
        raise InvalidNameError(name, "must not be empty")
    short = name[len(SESSION_PREFIX):] if name.startswith(SESSION_PREFIX) else name
    if not short:
        raise InvalidNameError(name, "must not be empty")
    if len(short) > MAX_NAME_LENGTH:
        raise InvalidNameError(
            name, f"must be at most {MAX_NAME_LENGTH} characters (got {len(short)})"
        )
    return f"{SESSION_PREFIX}{_DISALLOWED_CHARS.sub('-', short)}"


def short_name(session: str) -> str | None:
    """Return the short name of a managed session, or None for foreign sessions."""
    if not session.startswith(SESSION_PREFIX) or session == SESSION_PREFIX:
        return None
    return session[len(SESSION_PREFIX):]
