"""Wait for a Claude Code session to finish its current turn.

Polls the session's pane on a fixed interval and feeds each capture to an
:class:`~claude_tmux.idle_detection.IdleDetector`:

1. One immediate capture, so a session that already finished returns fast
2. A warm-up delay, so a session that has not started drawing is not idle
3. Sequential polls until DONE / STABLE_IDLE or the ceiling elapses

A capture failure ends the wait with an error result; it is not retried.
Reaching the ceiling is not an error: the result carries the last sanitized
capture and says the session is still running.

Exit codes (``claude-tmux-wait``):
  0 - Agent finished its turn
  1 - Timeout reached
  2 - Session not found or error
"""

from __future__ import annotations

import argparse
import json
import sys
import time

from claude_tmux.common.logging import log_error, log_info, log_success, log_warning
from claude_tmux.common.naming import canonicalize, short_name
from claude_tmux.common.tmux_session import SessionBackend, TmuxBackend
from claude_tmux.errors import ExecError, InvalidNameError
from claude_tmux.idle_detection import DetectionState, IdleDetector
from claude_tmux.models.agent_wait import WaitConfig, WaitResult, WaitStatus
from claude_tmux.output_filter import sanitize_output

_FINISHED_STATES = (DetectionState.DONE, DetectionState.STABLE_IDLE)


def wait_for_idle(
    backend: SessionBackend,
    session: str,
    config: WaitConfig | None = None,
    name: str | None = None,
) -> WaitResult:
    """Block until *session* finishes its turn, errors, or times out.

    Args:
        backend: Multiplexer access.
        session: Canonical tmux session name.
        config: Poll tunables (defaults when omitted).
        name: Caller-facing short name used in results and logs.
    """
    config = config or WaitConfig()
    name = name or short_name(session) or session
    detector = IdleDetector(config.stable_count)
    start = time.monotonic()
    snapshot = ""

    def elapsed() -> int:
        return int(time.monotonic() - start)

    def capture_failed(exc: ExecError) -> WaitResult:
        log_error(f"Capture failed for '{name}': {exc}")
        return WaitResult(
            status=WaitStatus.ERROR,
            name=name,
            session=session,
            elapsed=elapsed(),
            error=str(exc),
        )

    def finished(state: DetectionState) -> WaitResult:
        log_success(f"Agent '{name}' finished ({state.value} after {elapsed()}s)")
        return WaitResult(
            status=WaitStatus.COMPLETED,
            name=name,
            session=session,
            output=sanitize_output(snapshot),
            elapsed=elapsed(),
            reason=state.value,
        )

    if config.immediate_check:
        try:
            snapshot = backend.capture(session, config.capture_lines)
        except ExecError as exc:
            return capture_failed(exc)
        if detector.observe(snapshot) is DetectionState.DONE:
            return finished(DetectionState.DONE)

    log_info(
        f"Waiting for agent '{name}' "
        f"(timeout: {config.timeout}s, poll: {config.poll_interval}s)"
    )
    time.sleep(config.initial_delay)

    while time.monotonic() - start < config.timeout:
        time.sleep(config.poll_interval)
        try:
            snapshot = backend.capture(session, config.capture_lines)
        except ExecError as exc:
            return capture_failed(exc)

        state = detector.observe(snapshot)
        if state in _FINISHED_STATES:
            return finished(state)

    log_warning(f"Timeout waiting for agent '{name}' after {elapsed()}s")
    return WaitResult(
        status=WaitStatus.TIMEOUT,
        name=name,
        session=session,
        output=sanitize_output(snapshot),
        elapsed=elapsed(),
    )


def main() -> None:
    """CLI entry point for waiting on a single session."""
    defaults = WaitConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Wait for a Claude Code tmux session to finish its turn"
    )
    parser.add_argument("name", help="Session name (as given to spawn)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=defaults.timeout,
        help=f"Maximum time to wait in seconds (default: {defaults.timeout:g})",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=defaults.poll_interval,
        help=f"Seconds between captures (default: {defaults.poll_interval:g})",
    )
    parser.add_argument(
        "--initial-delay",
        type=float,
        default=defaults.initial_delay,
        help=f"Warm-up before the first poll (default: {defaults.initial_delay:g})",
    )
    parser.add_argument(
        "--stable-count",
        type=int,
        default=defaults.stable_count,
        help=f"Identical captures that count as idle (default: {defaults.stable_count})",
    )
    parser.add_argument(
        "--capture-lines",
        type=int,
        default=defaults.capture_lines,
        help=f"Scrollback lines per capture (default: {defaults.capture_lines})",
    )
    parser.add_argument("--json", action="store_true", help="Output result as JSON")

    args = parser.parse_args()

    config = WaitConfig(
        timeout=args.timeout,
        poll_interval=args.poll_interval,
        initial_delay=args.initial_delay,
        stable_count=max(1, args.stable_count),
        capture_lines=max(1, args.capture_lines),
        immediate_check=defaults.immediate_check,
    )
    backend = TmuxBackend.from_env()

    try:
        session = canonicalize(args.name)
    except InvalidNameError as exc:
        result = WaitResult(status=WaitStatus.ERROR, name=args.name, error=str(exc))
    else:
        if backend.exists(session):
            result = wait_for_idle(backend, session, config, name=args.name)
        else:
            result = WaitResult(status=WaitStatus.NOT_FOUND, name=args.name, session=session)

    if args.json:
        print(json.dumps(result.to_dict()))
    else:
        print(result.render())

    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
