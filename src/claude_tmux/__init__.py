"""Drive Claude Code agents running in tmux sessions."""

__version__ = "1.1.0"

from claude_tmux.agent_wait import wait_for_idle
from claude_tmux.idle_detection import DetectionState, IdleDetector

__all__ = ["DetectionState", "IdleDetector", "wait_for_idle", "__version__"]
