"""Models for waiting on agent sessions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from claude_tmux.common.config import env_bool, env_float, env_int
from claude_tmux.common.time_utils import format_duration

DEFAULT_TIMEOUT = 900  # 15 minutes
DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_INITIAL_DELAY = 10.0
DEFAULT_STABLE_COUNT = 5  # 5 polls * 2s = 10s of no visible change
DEFAULT_CAPTURE_LINES = 100


class WaitStatus(Enum):
    """Outcome of a wait."""

    COMPLETED = "completed"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    ERROR = "error"


# Process exit codes for CLI callers
EXIT_CODES = {
    WaitStatus.COMPLETED: 0,
    WaitStatus.TIMEOUT: 1,
    WaitStatus.NOT_FOUND: 2,
    WaitStatus.ERROR: 2,
}


@dataclass
class WaitConfig:
    """Tunables for the idle-detection poll loop.

    ``initial_delay`` keeps a freshly spawned session, which has not drawn
    anything yet, from being read as idle. ``stable_count`` consecutive
    identical captures count as idle when no completion marker shows up.
    """

    timeout: float = DEFAULT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    initial_delay: float = DEFAULT_INITIAL_DELAY
    stable_count: int = DEFAULT_STABLE_COUNT
    capture_lines: int = DEFAULT_CAPTURE_LINES
    immediate_check: bool = True

    @classmethod
    def from_env(cls) -> WaitConfig:
        """Load wait config from ``CLAUDE_TMUX_*`` environment variables."""
        return cls(
            timeout=env_float("CLAUDE_TMUX_TIMEOUT", DEFAULT_TIMEOUT, minimum=0),
            poll_interval=env_float(
                "CLAUDE_TMUX_POLL_INTERVAL", DEFAULT_POLL_INTERVAL, minimum=0
            ),
            initial_delay=env_float(
                "CLAUDE_TMUX_INITIAL_DELAY", DEFAULT_INITIAL_DELAY, minimum=0
            ),
            stable_count=env_int("CLAUDE_TMUX_STABLE_COUNT", DEFAULT_STABLE_COUNT, minimum=1),
            capture_lines=env_int(
                "CLAUDE_TMUX_CAPTURE_LINES", DEFAULT_CAPTURE_LINES, minimum=1
            ),
            immediate_check=env_bool("CLAUDE_TMUX_IMMEDIATE_CHECK", default=True),
        )


@dataclass
class WaitResult:
    """Result of waiting on one session."""

    status: WaitStatus
    name: str
    session: str = ""
    output: str = ""
    elapsed: int = 0
    reason: str = ""  # "done" or "stable_idle" when completed
    error: str = ""

    def render(self) -> str:
        """Text shown to tool callers."""
        if self.status == WaitStatus.NOT_FOUND:
            return f"Session '{self.name}' does not exist"
        if self.status == WaitStatus.ERROR:
            return f"Error: {self.error}"
        if self.status == WaitStatus.TIMEOUT:
            header = f"Timeout after {format_duration(self.elapsed)}. Session still running."
            return f"{header}\n\n{self.output}" if self.output else header
        return self.output

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict, omitting empty fields."""
        d: dict[str, Any] = {"status": self.status.value, "name": self.name}
        if self.session:
            d["session"] = self.session
        if self.elapsed:
            d["elapsed"] = self.elapsed
        if self.reason:
            d["reason"] = self.reason
        if self.error:
            d["error"] = self.error
        if self.output:
            d["output"] = self.output
        return d

    @property
    def exit_code(self) -> int:
        return EXIT_CODES[self.status]
