"""Deliver follow-up instructions to a running session."""

from __future__ import annotations

from claude_tmux.common.logging import log_info
from claude_tmux.common.tmux_session import SessionBackend


def escape_literal(text: str) -> str:
    """Escape *text* for ``tmux send-keys -l``.

    Arguments reach tmux as argv, not through a shell, so quotes, ``$``,
    backticks and backslashes arrive byte-for-byte. The one exception is a
    trailing ``;``, which tmux reads as a command separator unless escaped.
    """
    if text.endswith(";"):
        return text[:-1] + "\\;"
    return text


def send_message(backend: SessionBackend, session: str, text: str) -> None:
    """Type *text* into *session*, then press Enter as a separate action.

    Submitting separately keeps the Enter from being absorbed into a
    multi-line or special-character payload.

    Raises:
        ExecError: if either tmux action fails.
    """
    backend.send_literal(session, escape_literal(text))
    backend.send_submit(session)
    log_info(f"Sent {len(text)} characters to {session}")
