"""Data models for claude-tmux results and configuration."""

from claude_tmux.models.agent_wait import EXIT_CODES, WaitConfig, WaitResult, WaitStatus
from claude_tmux.models.spawn import SpawnConfig, SpawnResult

__all__ = [
    # agent_wait
    "EXIT_CODES",
    "WaitConfig",
    "WaitResult",
    "WaitStatus",
    # spawn
    "SpawnConfig",
    "SpawnResult",
]
