"""claude-tmux MCP server (FastMCP implementation).

Exposes spawn/read/send/list/kill over stdio so another agent can run
Claude Code instances in tmux sessions for long-running tasks.
"""

from __future__ import annotations

import asyncio

from fastmcp import FastMCP

from claude_tmux import __version__
from claude_tmux.common.logging import log_info
from claude_tmux.session_tools import SessionTools

INSTRUCTIONS = """\
# claude-tmux

Spawn Claude Code instances in tmux sessions for long-running tasks.

## Tools
- **spawn**: Start a new Claude session with a prompt.
- **read**: Wait for sessions to finish. Use `names` array for parallel waiting on multiple sessions.
- **send**: Send a follow-up message to a session.
- **list**: List active sessions.
- **kill**: Terminate a session.

## Tips
- Verify completion before killing. Idle sessions are fine.
- For multiple sessions, use `read(names: ["a", "b", "c"])` to wait in parallel.
"""

mcp = FastMCP(name="claude-tmux", instructions=INSTRUCTIONS)

_tools: SessionTools | None = None


def get_tools() -> SessionTools:
    """Session tools bound to the tmux backend, created on first use."""
    global _tools
    if _tools is None:
        _tools = SessionTools()
    return _tools


def spawn(
    name: str, prompt: str, workdir: str, skip_permissions: bool | None = None
) -> str:
    """Start a Claude Code instance in a tmux session.

    Args:
        name: Unique session name (e.g., 'refactor-auth', 'debug-api'), 1-50 characters
        prompt: Initial prompt to send to Claude on startup
        workdir: Working directory for Claude to operate in
        skip_permissions: Start Claude with --dangerously-skip-permissions
            (defaults to CLAUDE_TMUX_SKIP_PERMISSIONS, true when unset)
    """
    return get_tools().spawn(name, prompt, workdir, skip_permissions=skip_permissions)


async def read(name: str | None = None, names: list[str] | None = None) -> str:
    """Wait for Claude sessions to finish working and return their terminal output.

    Use 'names' for parallel waiting on multiple sessions.

    Args:
        name: Session name (as provided to spawn)
        names: Multiple session names for parallel waiting (preferred for multiple sessions)
    """
    # Waiting blocks for up to the configured ceiling; keep the event loop free
    return await asyncio.to_thread(get_tools().read, name, names)


def send(name: str, text: str) -> str:
    """Send a message to a running session.

    Args:
        name: Session name (as provided to spawn)
        text: Message to send to Claude
    """
    return get_tools().send(name, text)


def kill(name: str) -> str:
    """Terminate a session.

    Args:
        name: Session name (as provided to spawn)
    """
    return get_tools().kill(name)


def list_sessions() -> str:
    """List active sessions."""
    return get_tools().list()


mcp.tool(spawn)
mcp.tool(read)
mcp.tool(send)
mcp.tool(list_sessions, name="list")
mcp.tool(kill)


def main() -> None:
    """Serve the MCP tools over stdio."""
    log_info(f"Starting claude-tmux MCP server v{__version__}")
    mcp.run()


if __name__ == "__main__":
    main()
