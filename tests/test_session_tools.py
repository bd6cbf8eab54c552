"""Tests for the text-returning tool surface."""

from __future__ import annotations

import pathlib
from unittest import mock

import pytest

from claude_tmux.errors import ExecError
from claude_tmux.models.agent_wait import WaitConfig
from claude_tmux.models.spawn import SpawnConfig
from claude_tmux.session_tools import SessionTools

from .fakes import DONE_LINE, ScriptedBackend, make_pane


@pytest.fixture
def tools(backend: ScriptedBackend, fast_config: WaitConfig, tmp_path: pathlib.Path):
    return SessionTools(
        backend,
        wait_config=fast_config,
        spawn_config=SpawnConfig(staging_dir=str(tmp_path)),
    )


class TestSpawn:
    def test_started(self, tools: SessionTools, tmp_path: pathlib.Path) -> None:
        assert tools.spawn("refactor-auth", "go", str(tmp_path)) == (
            "Started claude-refactor-auth"
        )

    def test_error_text(self, tools: SessionTools, tmp_path: pathlib.Path) -> None:
        text = tools.spawn("", "go", str(tmp_path))
        assert text.startswith("Error: Invalid session name")


class TestRead:
    def test_requires_a_name(self, tools: SessionTools) -> None:
        assert tools.read() == "Error: Provide either 'name' or 'names'"
        assert tools.read(names=[]) == "Error: Provide either 'name' or 'names'"

    def test_single(self, tools: SessionTools, backend: ScriptedBackend) -> None:
        backend.sessions.add("claude-a")
        backend.snapshots["claude-a"] = [make_pane("answer", DONE_LINE)]
        assert tools.read("a") == f"answer\n{DONE_LINE}"

    def test_missing(self, tools: SessionTools) -> None:
        assert tools.read("ghost") == "Session 'ghost' does not exist"

    def test_names_preferred_over_name(
        self, tools: SessionTools, backend: ScriptedBackend
    ) -> None:
        backend.sessions.add("claude-a")
        backend.snapshots["claude-a"] = [DONE_LINE]
        text = tools.read("ignored", names=["a", "b"])
        assert text == (
            f"=== a ===\n{DONE_LINE}\n\n=== b ===\nSession 'b' does not exist"
        )

    def test_one_broken_session_keeps_sibling_output(
        self, tools: SessionTools, backend: ScriptedBackend
    ) -> None:
        backend.sessions.update({"claude-a", "claude-b"})
        backend.snapshots["claude-a"] = [RuntimeError("pane vanished")]
        backend.snapshots["claude-b"] = [DONE_LINE]
        assert tools.read(names=["a", "b"]) == (
            f"=== a ===\nError: pane vanished\n\n=== b ===\n{DONE_LINE}"
        )


class TestSend:
    def test_sent(self, tools: SessionTools, backend: ScriptedBackend) -> None:
        backend.sessions.add("claude-a")
        assert tools.send("a", "next step") == "Sent to claude-a"
        assert ("send_literal", "claude-a", "next step") in backend.calls

    def test_missing(self, tools: SessionTools, backend: ScriptedBackend) -> None:
        assert tools.send("ghost", "hello") == "Session 'ghost' does not exist"
        assert not any(c[0] == "send_literal" for c in backend.calls)

    def test_exec_error_rendered(
        self, tools: SessionTools, backend: ScriptedBackend
    ) -> None:
        backend.sessions.add("claude-a")
        with mock.patch.object(
            backend, "send_submit", side_effect=ExecError(["tmux", "send-keys"], 1, "boom")
        ):
            assert tools.send("a", "x") == "Error: tmux send-keys: boom"


class TestKill:
    def test_killed(self, tools: SessionTools, backend: ScriptedBackend) -> None:
        backend.sessions.add("claude-a")
        assert tools.kill("a") == "Killed claude-a"
        assert backend.sessions == set()

    def test_missing(self, tools: SessionTools) -> None:
        assert tools.kill("ghost") == "Session 'ghost' does not exist"

    def test_invalid_name(self, tools: SessionTools) -> None:
        assert tools.kill("").startswith("Error: Invalid session name")


class TestList:
    def test_empty(self, tools: SessionTools) -> None:
        assert tools.list() == "No active sessions"

    def test_only_managed_sessions(
        self, tools: SessionTools, backend: ScriptedBackend
    ) -> None:
        backend.sessions.update({"main", "claude-b", "claude-a", "claude-"})
        assert tools.list() == "a\nb"

    def test_only_foreign_sessions(
        self, tools: SessionTools, backend: ScriptedBackend
    ) -> None:
        backend.sessions.update({"main", "work"})
        assert tools.list() == "No active sessions"

    def test_backend_error(self, tools: SessionTools, backend: ScriptedBackend) -> None:
        with mock.patch.object(
            backend, "list_sessions", side_effect=ExecError(["tmux"], 1, "broken")
        ):
            assert tools.list() == "Error: tmux: broken"


class TestDefaults:
    def test_configs_from_env(self, backend: ScriptedBackend) -> None:
        with mock.patch.dict(
            "os.environ",
            {"CLAUDE_TMUX_TIMEOUT": "42", "CLAUDE_TMUX_AGENT_COMMAND": "my-claude"},
        ):
            tools = SessionTools(backend)
        assert tools.wait_config.timeout == 42
        assert tools.spawn_config.agent_command == "my-claude"
