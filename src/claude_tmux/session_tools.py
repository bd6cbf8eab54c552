"""Text-returning session operations exposed to tool callers.

Every operation returns a string and never raises: failures become
``Error: ...`` text and missing sessions a descriptive message, so one bad
call cannot take down the server process that hosts these tools.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Sequence
from typing import TypeVar

from claude_tmux.agent_send import send_message
from claude_tmux.agent_spawn import spawn_agent
from claude_tmux.common.logging import log_error, log_info
from claude_tmux.common.naming import canonicalize, short_name
from claude_tmux.common.tmux_session import SessionBackend, TmuxBackend
from claude_tmux.errors import SessionNotFoundError
from claude_tmux.models.agent_wait import WaitConfig
from claude_tmux.models.spawn import SpawnConfig
from claude_tmux.parallel_wait import format_wait_results, wait_for_sessions

F = TypeVar("F", bound=Callable[..., str])


def _report_errors(func: F) -> F:
    """Render any exception escaping a tool operation as ``Error: ...``."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> str:
        try:
            return func(*args, **kwargs)
        except SessionNotFoundError as exc:
            return str(exc)
        except Exception as exc:
            log_error(f"{func.__name__} failed: {exc}")
            return f"Error: {exc}"

    return wrapper  # type: ignore[return-value]


class SessionTools:
    """The spawn/read/send/kill/list surface over one backend.

    Configuration is read once and shared read-only by every call.
    """

    def __init__(
        self,
        backend: SessionBackend | None = None,
        wait_config: WaitConfig | None = None,
        spawn_config: SpawnConfig | None = None,
    ) -> None:
        self.backend = backend if backend is not None else TmuxBackend.from_env()
        self.wait_config = wait_config or WaitConfig.from_env()
        self.spawn_config = spawn_config or SpawnConfig.from_env()

    def _existing_session(self, name: str) -> str:
        session = canonicalize(name)
        if not self.backend.exists(session):
            raise SessionNotFoundError(name)
        return session

    @_report_errors
    def spawn(
        self,
        name: str,
        prompt: str,
        workdir: str,
        skip_permissions: bool | None = None,
    ) -> str:
        """Start an agent session; ``Started <session>`` on success."""
        result = spawn_agent(
            self.backend,
            name,
            workdir,
            prompt,
            config=self.spawn_config,
            skip_permissions=skip_permissions,
        )
        return result.render()

    @_report_errors
    def read(
        self, name: str | None = None, names: Sequence[str] | None = None
    ) -> str:
        """Wait for one or more sessions to go idle and return their output."""
        requested = list(names) if names else ([name] if name else [])
        if not requested:
            return "Error: Provide either 'name' or 'names'"
        results = wait_for_sessions(self.backend, requested, self.wait_config)
        return format_wait_results(results)

    @_report_errors
    def send(self, name: str, text: str) -> str:
        """Send a follow-up message; ``Sent to <session>`` on success."""
        session = self._existing_session(name)
        send_message(self.backend, session, text)
        return f"Sent to {session}"

    @_report_errors
    def kill(self, name: str) -> str:
        """Terminate a session; ``Killed <session>`` on success."""
        session = self._existing_session(name)
        self.backend.kill(session)
        log_info(f"Killed session: {session}")
        return f"Killed {session}"

    @_report_errors
    def list(self) -> str:
        """Short names of all managed sessions, one per line."""
        names = [
            short
            for short in (short_name(s) for s in self.backend.list_sessions())
            if short is not None
        ]
        if not names:
            return "No active sessions"
        return "\n".join(names)
