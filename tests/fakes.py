"""In-memory stand-ins for the tmux backend and Claude Code pane text."""

from __future__ import annotations

from collections.abc import Iterable

from claude_tmux.errors import ExecError


class ScriptedBackend:
    """SessionBackend double that replays scripted pane captures.

    ``snapshots`` maps a session to the captures it returns in order; the
    last capture repeats once the script runs out. An exception in the
    script is raised instead of returned. Literal keys sent to a session are
    appended to its pane so a later capture shows them.
    """

    def __init__(
        self,
        sessions: Iterable[str] = (),
        snapshots: dict[str, list] | None = None,
    ) -> None:
        self.sessions: set[str] = set(sessions)
        self.snapshots = {k: list(v) for k, v in (snapshots or {}).items()}
        self.panes: dict[str, str] = {}
        self.calls: list[tuple] = []

    def exists(self, session: str) -> bool:
        self.calls.append(("exists", session))
        return session in self.sessions

    def create(self, session: str, cwd: str) -> None:
        self.calls.append(("create", session, cwd))
        if session in self.sessions:
            raise ExecError(["new-session"], 1, f"duplicate session: {session}")
        self.sessions.add(session)
        self.panes[session] = ""

    def capture(self, session: str, lines: int) -> str:
        self.calls.append(("capture", session, lines))
        script = self.snapshots.get(session)
        if not script:
            return self.panes.get(session, "")
        item = script.pop(0) if len(script) > 1 else script[0]
        if isinstance(item, Exception):
            raise item
        return item

    def send_literal(self, session: str, text: str) -> None:
        self.calls.append(("send_literal", session, text))
        if session not in self.sessions:
            raise ExecError(["send-keys"], 1, f"can't find pane: {session}")
        self.panes[session] = self.panes.get(session, "") + text

    def send_submit(self, session: str) -> None:
        self.calls.append(("send_submit", session))
        if session not in self.sessions:
            raise ExecError(["send-keys"], 1, f"can't find pane: {session}")
        self.panes[session] = self.panes.get(session, "") + "\n"

    def kill(self, session: str) -> None:
        self.calls.append(("kill", session))
        if session not in self.sessions:
            raise ExecError(["kill-session"], 1, f"can't find session: {session}")
        self.sessions.discard(session)
        self.panes.pop(session, None)

    def list_sessions(self) -> list[str]:
        self.calls.append(("list_sessions",))
        return sorted(self.sessions)

    def captures(self, session: str) -> int:
        return sum(1 for c in self.calls if c[0] == "capture" and c[1] == session)


# Pane fragments as Claude Code draws them
WORKING_LINE = "✽ Cogitating… (12s · ↑ 1.2k tokens · esc to interrupt)"
DONE_LINE = "✻ Worked for 1m 12s"
RULE_LINE = "─" * 60
PROMPT_HINT = '❯ Try "refactor the auth module"'
BYPASS_BANNER = "  ⏵⏵ bypass permissions on (shift+tab to cycle)"


def make_pane(*body: str, chrome: bool = True) -> str:
    """Build a pane capture: body lines followed by the idle input box."""
    lines = list(body)
    if chrome:
        lines += ["", RULE_LINE, PROMPT_HINT, RULE_LINE, BYPASS_BANNER]
    return "\n".join(lines) + "\n"
