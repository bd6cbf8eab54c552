"""tmux access behind a substitutable backend interface.

Everything else in claude-tmux talks to :class:`SessionBackend`, never to
``subprocess`` directly, so the waiter and detector can be driven by a
scripted backend in tests.
"""

from __future__ import annotations

import subprocess
from typing import Protocol

from claude_tmux.common.config import env_str
from claude_tmux.errors import ExecError

# Seconds before an individual tmux command is abandoned
TMUX_COMMAND_TIMEOUT = 10

# stderr fragments tmux prints when no server is running on the socket
_NO_SERVER_MARKERS = ("no server running", "error connecting to")


class SessionBackend(Protocol):
    """Operations the orchestrator needs from a terminal multiplexer."""

    def exists(self, session: str) -> bool: ...

    def create(self, session: str, cwd: str) -> None: ...

    def capture(self, session: str, lines: int) -> str: ...

    def send_literal(self, session: str, text: str) -> None: ...

    def send_submit(self, session: str) -> None: ...

    def kill(self, session: str) -> None: ...

    def list_sessions(self) -> list[str]: ...


def _session_target(session: str) -> str:
    # "=" disables tmux's prefix matching, so "claude-a" never hits "claude-ab"
    return f"={session}"


def _pane_target(session: str) -> str:
    return f"={session}:"


class TmuxBackend:
    """:class:`SessionBackend` backed by the ``tmux`` binary.

    Args:
        socket_name: tmux server socket (``tmux -L``). ``None`` uses the
            default server, which is what a user attaching by hand sees.
        timeout: Per-command timeout in seconds.
    """

    def __init__(
        self, socket_name: str | None = None, timeout: float = TMUX_COMMAND_TIMEOUT
    ) -> None:
        self.socket_name = socket_name
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> TmuxBackend:
        """Build a backend using ``CLAUDE_TMUX_SOCKET`` when set."""
        return cls(socket_name=env_str("CLAUDE_TMUX_SOCKET") or None)

    def _command(self, *args: str) -> list[str]:
        if self.socket_name:
            return ["tmux", "-L", self.socket_name, *args]
        return ["tmux", *args]

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Run a tmux command, translating launch failures into ExecError."""
        cmd = self._command(*args)
        try:
            # Panes can hold arbitrary bytes; undecodable ones become U+FFFD
            return subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise ExecError(cmd, stderr=f"timed out after {self.timeout}s") from None
        except OSError as exc:
            raise ExecError(cmd, stderr=str(exc)) from exc

    def _check(self, *args: str) -> str:
        """Run a tmux command and return stdout, raising ExecError on failure."""
        result = self._run(*args)
        if result.returncode != 0:
            raise ExecError(self._command(*args), result.returncode, result.stderr or "")
        return result.stdout

    def exists(self, session: str) -> bool:
        """Check if a session exists. Any failure counts as absent."""
        try:
            result = self._run("has-session", "-t", _session_target(session))
        except ExecError:
            return False
        return result.returncode == 0

    def create(self, session: str, cwd: str) -> None:
        """Create a detached session whose first shell starts in *cwd*."""
        self._check("new-session", "-d", "-s", session, "-c", cwd)

    def capture(self, session: str, lines: int) -> str:
        """Capture the visible pane plus up to *lines* lines of scrollback."""
        return self._check(
            "capture-pane", "-p", "-t", _pane_target(session), "-S", f"-{lines}"
        )

    def send_literal(self, session: str, text: str) -> None:
        """Type *text* into the pane without interpreting key names."""
        self._check("send-keys", "-t", _pane_target(session), "-l", "--", text)

    def send_submit(self, session: str) -> None:
        """Press Enter in the pane."""
        self._check("send-keys", "-t", _pane_target(session), "Enter")

    def kill(self, session: str) -> None:
        """Kill a session."""
        self._check("kill-session", "-t", _session_target(session))

    def list_sessions(self) -> list[str]:
        """Return all session names on the server ([] when no server runs)."""
        result = self._run("list-sessions", "-F", "#{session_name}")
        if result.returncode != 0:
            stderr = result.stderr or ""
            if any(marker in stderr for marker in _NO_SERVER_MARKERS):
                return []
            raise ExecError(
                self._command("list-sessions", "-F", "#{session_name}"),
                result.returncode,
                stderr,
            )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]
