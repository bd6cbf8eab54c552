"""Strip Claude Code UI chrome from captured pane text.

The pane of an idle Claude Code session ends with decoration that carries no
task content: horizontal rules around the input box, the example prompt
placeholder, the permission mode banner and keybinding hints. Callers only
want what the agent wrote.

``sanitize_output`` is idempotent: every kept line fails every chrome
pattern, and trimming blank edges twice changes nothing.
"""

from __future__ import annotations

import re

from claude_tmux.common.logging import strip_ansi

# Horizontal rules (box-drawing or ASCII hyphens), 10 or more wide
_RULE_RE = re.compile(r"^[─━═╌╍┄┅\-]{10,}$")

# Input box placeholder: ❯ Try "refactor the auth module"
_EXAMPLE_PROMPT_RE = re.compile(r'^\s*[>❯]\s*Try\s+"')

# Permission mode banner: ⏵⏵ bypass permissions on (shift+tab to cycle)
_PERMISSION_RE = re.compile(r"bypass permissions", re.IGNORECASE)

# Keybinding hints
_SUBMIT_HINT_RE = re.compile(r"\bto submit\b|↵\s*send", re.IGNORECASE)
_CYCLE_HINT_RE = re.compile(r"\bto cycle\b", re.IGNORECASE)

_CHROME_PATTERNS = (
    _EXAMPLE_PROMPT_RE,
    _PERMISSION_RE,
    _SUBMIT_HINT_RE,
    _CYCLE_HINT_RE,
)


def is_ui_chrome(line: str) -> bool:
    """Return True if *line* is decorative or interactive-only UI."""
    if _RULE_RE.match(line.strip()):
        return True
    return any(p.search(line) for p in _CHROME_PATTERNS)


def sanitize_output(text: str) -> str:
    """Drop UI chrome lines and trim blank lines at both ends."""
    # Stray ESC bytes left after stripping could pair up into a new sequence
    # on a second pass, so drop them outright.
    plain = strip_ansi(text).replace("\x1b", "")
    lines = [line for line in plain.split("\n") if not is_ui_chrome(line)]

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    end = len(lines)
    while end > start and not lines[end - 1].strip():
        end -= 1

    return "\n".join(lines[start:end])
