"""Models for spawning agent sessions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from claude_tmux.common.config import env_bool, env_str

DEFAULT_AGENT_COMMAND = "claude"
SKIP_PERMISSIONS_FLAG = "--dangerously-skip-permissions"


@dataclass
class SpawnConfig:
    """How the agent program is launched inside a new session.

    ``staging_dir`` is where prompt files are written before launch; ``None``
    uses the system temp directory.
    """

    agent_command: str = DEFAULT_AGENT_COMMAND
    skip_permissions: bool = True
    staging_dir: str | None = None

    @classmethod
    def from_env(cls) -> SpawnConfig:
        return cls(
            agent_command=env_str("CLAUDE_TMUX_AGENT_COMMAND") or DEFAULT_AGENT_COMMAND,
            skip_permissions=env_bool("CLAUDE_TMUX_SKIP_PERMISSIONS", default=True),
            staging_dir=env_str("CLAUDE_TMUX_STAGING_DIR") or None,
        )


@dataclass
class SpawnResult:
    """Result of a spawn operation."""

    status: str  # "spawned", "error"
    name: str
    session: str = ""
    error: str = ""

    def render(self) -> str:
        if self.status == "spawned":
            return f"Started {self.session}"
        return f"Error: {self.error}"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"status": self.status, "name": self.name}
        if self.session:
            d["session"] = self.session
        if self.error:
            d["error"] = self.error
        return d
