"""Wait on several sessions at once.

Each requested name gets its own worker thread, which checks existence and
then runs :func:`~claude_tmux.agent_wait.wait_for_idle`. A missing or slow
session never delays a sibling's result; the coordinator only joins them all
before returning, in the order the caller asked for.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from claude_tmux.agent_wait import wait_for_idle
from claude_tmux.common.logging import log_error, log_info
from claude_tmux.common.naming import canonicalize
from claude_tmux.common.tmux_session import SessionBackend
from claude_tmux.errors import InvalidNameError
from claude_tmux.models.agent_wait import WaitConfig, WaitResult, WaitStatus


def wait_for_session(
    backend: SessionBackend, name: str, config: WaitConfig
) -> WaitResult:
    """Resolve *name*, short-circuit if absent, otherwise wait on it.

    Never raises: any failure becomes an ERROR result for this name only.
    """
    try:
        session = canonicalize(name)
    except InvalidNameError as exc:
        return WaitResult(status=WaitStatus.ERROR, name=name, error=str(exc))

    try:
        if not backend.exists(session):
            return WaitResult(status=WaitStatus.NOT_FOUND, name=name, session=session)
        return wait_for_idle(backend, session, config, name=name)
    except Exception as exc:
        log_error(f"Wait on '{name}' failed: {exc}")
        return WaitResult(
            status=WaitStatus.ERROR, name=name, session=session, error=str(exc)
        )


def wait_for_sessions(
    backend: SessionBackend,
    names: Sequence[str],
    config: WaitConfig | None = None,
) -> list[WaitResult]:
    """Wait on every name concurrently; results follow the order of *names*."""
    config = config or WaitConfig()
    if not names:
        return []
    if len(names) > 1:
        log_info(f"Waiting on {len(names)} sessions in parallel: {', '.join(names)}")

    with ThreadPoolExecutor(max_workers=len(names)) as pool:
        futures = [pool.submit(wait_for_session, backend, n, config) for n in names]
        return [f.result() for f in futures]


def format_wait_results(results: Sequence[WaitResult]) -> str:
    """Render results as tool text.

    A single result is returned bare; several get a ``=== name ===`` header
    each, separated by blank lines.
    """
    if len(results) == 1:
        return results[0].render()
    return "\n\n".join(f"=== {r.name} ===\n{r.render()}" for r in results)
