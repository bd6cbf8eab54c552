"""Spawn Claude Code agents in tmux sessions.

Spawning is idempotent per name: any existing session with the same
canonical name is killed first, so spawning twice leaves one live session.

The initial prompt never appears on a shell command line. It is staged in a
temp file and the session's shell runs::

    env -u CLAUDECODE claude --dangerously-skip-permissions -- "$(cat <file>)"; rm -f <file>

Once that command is delivered, removing the file belongs to the session's
shell, after the agent exits. The file is only deleted here when delivery
itself failed.
"""

from __future__ import annotations

import os
import pathlib
import shlex
import tempfile

from claude_tmux.agent_send import send_message
from claude_tmux.common.logging import log_info, log_success, log_warning
from claude_tmux.common.naming import canonicalize
from claude_tmux.common.tmux_session import SessionBackend
from claude_tmux.errors import ExecError, InvalidNameError
from claude_tmux.models.spawn import SKIP_PERMISSIONS_FLAG, SpawnConfig, SpawnResult


def build_start_command(
    prompt_file: str, agent_command: str, skip_permissions: bool
) -> str:
    """Shell line that launches the agent on the staged prompt, then cleans up."""
    parts = shlex.split(agent_command)
    if skip_permissions:
        parts.append(SKIP_PERMISSIONS_FLAG)
    quoted_file = shlex.quote(prompt_file)
    # CLAUDECODE is set when the orchestrator itself runs inside Claude Code
    # and makes the child refuse to start as a nested session. "--" keeps a
    # prompt starting with "-" from being parsed as an option.
    return (
        f'env -u CLAUDECODE {shlex.join(parts)} -- "$(cat {quoted_file})"; '
        f"rm -f {quoted_file}"
    )


def stage_prompt(session: str, prompt: str, staging_dir: str | None = None) -> str:
    """Write *prompt* to a fresh temp file and return its path."""
    fd, path = tempfile.mkstemp(
        prefix=f"claude-prompt-{session}-", suffix=".txt", dir=staging_dir
    )
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(prompt)
    return path


def kill_existing(backend: SessionBackend, session: str) -> None:
    """Kill *session* if present; a session that is already gone is fine."""
    try:
        backend.kill(session)
        log_info(f"Killed existing session: {session}")
    except ExecError:
        if backend.exists(session):
            raise


def spawn_agent(
    backend: SessionBackend,
    name: str,
    workdir: str,
    prompt: str,
    config: SpawnConfig | None = None,
    skip_permissions: bool | None = None,
) -> SpawnResult:
    """Start a fresh agent session seeded with *prompt*.

    Args:
        backend: Multiplexer access.
        name: Caller-facing short name.
        workdir: Directory the agent operates in.
        prompt: Initial instruction.
        config: Agent command and staging settings.
        skip_permissions: Overrides ``config.skip_permissions`` when given.

    Returns a SpawnResult; failures are reported in it rather than raised.
    """
    config = config or SpawnConfig()
    if skip_permissions is None:
        skip_permissions = config.skip_permissions

    try:
        session = canonicalize(name)
    except InvalidNameError as exc:
        return SpawnResult(status="error", name=name, error=str(exc))

    working_dir = pathlib.Path(workdir).expanduser()
    if not working_dir.is_dir():
        return SpawnResult(
            status="error",
            name=name,
            session=session,
            error=f"Working directory does not exist: {workdir}",
        )

    try:
        kill_existing(backend, session)
        log_info(f"Creating tmux session: {session} in {working_dir}")
        backend.create(session, str(working_dir))
    except ExecError as exc:
        return SpawnResult(status="error", name=name, session=session, error=str(exc))

    try:
        prompt_file = stage_prompt(session, prompt, config.staging_dir)
    except OSError as exc:
        log_warning(f"Prompt staging failed, removing session {session}")
        try:
            backend.kill(session)
        except ExecError as kill_exc:
            log_warning(f"Could not remove session {session}: {kill_exc}")
        return SpawnResult(
            status="error",
            name=name,
            session=session,
            error=f"Failed to stage prompt: {exc}",
        )

    command = build_start_command(prompt_file, config.agent_command, skip_permissions)
    try:
        send_message(backend, session, command)
    except ExecError as exc:
        log_warning(f"Start command not delivered, removing {prompt_file}")
        pathlib.Path(prompt_file).unlink(missing_ok=True)
        return SpawnResult(status="error", name=name, session=session, error=str(exc))

    log_success(f"Agent spawned: {session}")
    return SpawnResult(status="spawned", name=name, session=session)
