"""Typed access to ``CLAUDE_TMUX_*`` environment variables.

Every tunable has a documented default. A value that is unset, unparsable
or out of range falls back to that default instead of raising, so a typo in
the server's environment never keeps it from starting::

    timeout = env_float("CLAUDE_TMUX_TIMEOUT", 900, minimum=0)
    skip = env_bool("CLAUDE_TMUX_SKIP_PERMISSIONS", default=True)
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypeVar

N = TypeVar("N", int, float)

_TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off"})


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default)


def env_bool(name: str, default: bool = False) -> bool:
    """Read a yes/no flag; matching is case-insensitive and ignores padding."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return default


def _env_number(
    name: str, parse: Callable[[str], N], default: N, minimum: N | None
) -> N:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = parse(raw)
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def env_int(name: str, default: int = 0, minimum: int | None = None) -> int:
    """Read an integer; values below *minimum* count as invalid."""
    return _env_number(name, int, default, minimum)


def env_float(name: str, default: float = 0.0, minimum: float | None = None) -> float:
    """Read a float; values below *minimum* count as invalid."""
    return _env_number(name, float, default, minimum)
