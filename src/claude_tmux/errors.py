"""Custom exceptions for tmux session orchestration."""

from __future__ import annotations

from collections.abc import Sequence


class ClaudeTmuxError(Exception):
    """Base exception for claude-tmux errors."""


class InvalidNameError(ClaudeTmuxError):
    """Session name failed validation before any side effect."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid session name {name!r}: {reason}")


class SessionNotFoundError(ClaudeTmuxError):
    """Target session does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Session '{name}' does not exist")


class ExecError(ClaudeTmuxError):
    """An external tmux command failed."""

    def __init__(
        self,
        args: Sequence[str],
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or (
            f"exit code {returncode}" if returncode is not None else "command failed"
        )
        super().__init__(f"{' '.join(self.command)}: {detail}")
