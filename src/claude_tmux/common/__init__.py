"""Common utilities for claude-tmux."""

from claude_tmux.common.naming import SESSION_PREFIX, canonicalize, short_name
from claude_tmux.common.tmux_session import SessionBackend, TmuxBackend

__all__ = ["SESSION_PREFIX", "SessionBackend", "TmuxBackend", "canonicalize", "short_name"]
