"""Command-line interface for claude-tmux.

``claude-tmux`` with no subcommand (or ``serve``) runs the MCP server on
stdio. The other subcommands run one operation against the local tmux
server and print the same text the MCP tool would return.

Exit codes:
  0 - Success
  1 - Wait timed out
  2 - Session not found, invalid name, or tmux error
"""

from __future__ import annotations

import argparse
import json
import sys

from claude_tmux import __version__
from claude_tmux.agent_send import send_message
from claude_tmux.agent_spawn import spawn_agent
from claude_tmux.common.logging import log_error
from claude_tmux.common.naming import canonicalize
from claude_tmux.common.tmux_session import SessionBackend, TmuxBackend
from claude_tmux.errors import ClaudeTmuxError, SessionNotFoundError
from claude_tmux.models.agent_wait import WaitConfig
from claude_tmux.models.spawn import SpawnConfig
from claude_tmux.parallel_wait import format_wait_results, wait_for_sessions
from claude_tmux.session_tools import SessionTools

EXIT_OK = 0
EXIT_TIMEOUT = 1
EXIT_ERROR = 2


def _require_session(backend: SessionBackend, name: str) -> str:
    session = canonicalize(name)
    if not backend.exists(session):
        raise SessionNotFoundError(name)
    return session


def cmd_spawn(args: argparse.Namespace, backend: SessionBackend) -> int:
    config = SpawnConfig.from_env()
    if args.agent_command:
        config.agent_command = args.agent_command
    prompt = sys.stdin.read() if args.prompt == "-" else args.prompt
    result = spawn_agent(
        backend,
        args.name,
        args.workdir,
        prompt,
        config=config,
        skip_permissions=False if args.no_skip_permissions else None,
    )
    if args.json:
        print(json.dumps(result.to_dict()))
    else:
        print(result.render())
    return EXIT_OK if result.status == "spawned" else EXIT_ERROR


def cmd_read(args: argparse.Namespace, backend: SessionBackend) -> int:
    config = WaitConfig.from_env()
    if args.timeout is not None:
        config.timeout = args.timeout
    results = wait_for_sessions(backend, args.names, config)
    if args.json:
        print(json.dumps([r.to_dict() for r in results]))
    else:
        print(format_wait_results(results))
    return max(r.exit_code for r in results)


def cmd_send(args: argparse.Namespace, backend: SessionBackend) -> int:
    session = _require_session(backend, args.name)
    text = sys.stdin.read().rstrip("\n") if args.text == "-" else args.text
    send_message(backend, session, text)
    print(f"Sent to {session}")
    return EXIT_OK


def cmd_kill(args: argparse.Namespace, backend: SessionBackend) -> int:
    session = _require_session(backend, args.name)
    backend.kill(session)
    print(f"Killed {session}")
    return EXIT_OK


def cmd_list(args: argparse.Namespace, backend: SessionBackend) -> int:
    print(SessionTools(backend).list())
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-tmux",
        description="Run Claude Code agents in tmux sessions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  claude-tmux                          # serve MCP tools on stdio
  claude-tmux spawn refactor-auth ~/src/app "Refactor the auth module"
  claude-tmux read refactor-auth debug-api
  claude-tmux send refactor-auth "Now add tests"
  claude-tmux kill refactor-auth

environment:
  CLAUDE_TMUX_TIMEOUT            Wait ceiling in seconds (default: 900)
  CLAUDE_TMUX_POLL_INTERVAL      Seconds between captures (default: 2)
  CLAUDE_TMUX_INITIAL_DELAY      Warm-up before the first poll (default: 10)
  CLAUDE_TMUX_STABLE_COUNT       Identical captures that count as idle (default: 5)
  CLAUDE_TMUX_CAPTURE_LINES      Scrollback lines per capture (default: 100)
  CLAUDE_TMUX_SOCKET             tmux socket name (default: tmux default server)
  CLAUDE_TMUX_AGENT_COMMAND      Agent program (default: claude)
  CLAUDE_TMUX_SKIP_PERMISSIONS   Pass --dangerously-skip-permissions (default: true)
  CLAUDE_TMUX_STAGING_DIR        Where prompt files are staged (default: system temp)
  CLAUDE_TMUX_QUIET              Only log warnings and errors (default: false)
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Run the MCP server on stdio (default)")

    p_spawn = subparsers.add_parser("spawn", help="Start an agent session")
    p_spawn.add_argument("name", help="Session name (1-50 characters)")
    p_spawn.add_argument("workdir", help="Working directory for the agent")
    p_spawn.add_argument("prompt", help="Initial prompt, or '-' to read stdin")
    p_spawn.add_argument(
        "--no-skip-permissions",
        action="store_true",
        help="Do not pass --dangerously-skip-permissions",
    )
    p_spawn.add_argument("--agent-command", help="Agent program to launch")
    p_spawn.add_argument("--json", action="store_true", help="Output result as JSON")

    p_read = subparsers.add_parser("read", help="Wait for sessions to go idle")
    p_read.add_argument("names", nargs="+", help="Session names")
    p_read.add_argument("--timeout", type=float, help="Wait ceiling in seconds")
    p_read.add_argument("--json", action="store_true", help="Output results as JSON")

    p_send = subparsers.add_parser("send", help="Send a follow-up message")
    p_send.add_argument("name", help="Session name")
    p_send.add_argument("text", help="Message text, or '-' to read stdin")

    p_kill = subparsers.add_parser("kill", help="Terminate a session")
    p_kill.add_argument("name", help="Session name")

    subparsers.add_parser("list", help="List active sessions")

    return parser


COMMANDS = {
    "spawn": cmd_spawn,
    "read": cmd_read,
    "send": cmd_send,
    "kill": cmd_kill,
    "list": cmd_list,
}


def run(argv: list[str] | None = None, backend: SessionBackend | None = None) -> int:
    """Parse *argv* and execute one command. Returns an exit code."""
    args = build_parser().parse_args(argv)

    if args.command in (None, "serve"):
        from claude_tmux.server import main as serve

        serve()
        return EXIT_OK

    backend = backend if backend is not None else TmuxBackend.from_env()
    try:
        return COMMANDS[args.command](args, backend)
    except SessionNotFoundError as exc:
        print(str(exc))
        return EXIT_ERROR
    except ClaudeTmuxError as exc:
        log_error(str(exc))
        print(f"Error: {exc}")
        return EXIT_ERROR


def main() -> None:
    """CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
