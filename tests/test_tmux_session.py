"""Tests for the tmux backend."""

from __future__ import annotations

import os
import pathlib
import shutil
import subprocess
from unittest import mock

import pytest

from claude_tmux.common.tmux_session import TMUX_COMMAND_TIMEOUT, TmuxBackend
from claude_tmux.errors import ExecError


def completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> mock.Mock:
    return mock.Mock(returncode=returncode, stdout=stdout, stderr=stderr)


class TestCommandLine:
    def test_default_server(self) -> None:
        with mock.patch("subprocess.run", return_value=completed()) as run:
            TmuxBackend().kill("claude-a")
        run.assert_called_once_with(
            ["tmux", "kill-session", "-t", "=claude-a"],
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=TMUX_COMMAND_TIMEOUT,
        )

    def test_socket_name(self) -> None:
        with mock.patch("subprocess.run", return_value=completed()) as run:
            TmuxBackend(socket_name="agents").kill("claude-a")
        assert run.call_args.args[0][:3] == ["tmux", "-L", "agents"]

    def test_from_env(self) -> None:
        with mock.patch.dict(os.environ, {"CLAUDE_TMUX_SOCKET": "orchestra"}):
            assert TmuxBackend.from_env().socket_name == "orchestra"

    def test_from_env_unset(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            assert TmuxBackend.from_env().socket_name is None


class TestOperations:
    @pytest.fixture
    def run(self):
        with mock.patch("subprocess.run", return_value=completed()) as run:
            yield run

    def argv(self, run: mock.Mock) -> list[str]:
        return run.call_args.args[0]

    def test_create(self, run: mock.Mock) -> None:
        TmuxBackend().create("claude-a", "/work")
        assert self.argv(run) == [
            "tmux", "new-session", "-d", "-s", "claude-a", "-c", "/work",
        ]

    def test_capture(self, run: mock.Mock) -> None:
        run.return_value = completed(stdout="pane text\n")
        assert TmuxBackend().capture("claude-a", 100) == "pane text\n"
        assert self.argv(run) == [
            "tmux", "capture-pane", "-p", "-t", "=claude-a:", "-S", "-100",
        ]

    def test_send_literal(self, run: mock.Mock) -> None:
        TmuxBackend().send_literal("claude-a", "-starts with dash")
        assert self.argv(run) == [
            "tmux", "send-keys", "-t", "=claude-a:", "-l", "--", "-starts with dash",
        ]

    def test_send_submit(self, run: mock.Mock) -> None:
        TmuxBackend().send_submit("claude-a")
        assert self.argv(run) == ["tmux", "send-keys", "-t", "=claude-a:", "Enter"]

    def test_exists_true(self, run: mock.Mock) -> None:
        assert TmuxBackend().exists("claude-a") is True
        assert self.argv(run) == ["tmux", "has-session", "-t", "=claude-a"]

    def test_exists_false(self, run: mock.Mock) -> None:
        run.return_value = completed(returncode=1, stderr="can't find session")
        assert TmuxBackend().exists("claude-a") is False

    def test_list_sessions(self, run: mock.Mock) -> None:
        run.return_value = completed(stdout="claude-a\nmain\n\n claude-b \n")
        assert TmuxBackend().list_sessions() == ["claude-a", "main", "claude-b"]
        assert self.argv(run) == ["tmux", "list-sessions", "-F", "#{session_name}"]

    def test_list_sessions_no_server(self, run: mock.Mock) -> None:
        run.return_value = completed(
            returncode=1, stderr="no server running on /tmp/tmux-0/default"
        )
        assert TmuxBackend().list_sessions() == []

    def test_list_sessions_other_failure(self, run: mock.Mock) -> None:
        run.return_value = completed(returncode=1, stderr="protocol version mismatch")
        with pytest.raises(ExecError, match="protocol version mismatch"):
            TmuxBackend().list_sessions()


class TestErrors:
    def test_nonzero_exit(self) -> None:
        with mock.patch(
            "subprocess.run", return_value=completed(returncode=1, stderr="can't find pane\n")
        ):
            with pytest.raises(ExecError) as exc_info:
                TmuxBackend().capture("claude-a", 10)
        err = exc_info.value
        assert err.returncode == 1
        assert err.stderr == "can't find pane"
        assert err.command[:2] == ["tmux", "capture-pane"]

    def test_exit_code_without_stderr(self) -> None:
        with mock.patch("subprocess.run", return_value=completed(returncode=3)):
            with pytest.raises(ExecError, match="exit code 3"):
                TmuxBackend().kill("claude-a")

    def test_timeout(self) -> None:
        with mock.patch(
            "subprocess.run", side_effect=subprocess.TimeoutExpired(["tmux"], 10)
        ):
            with pytest.raises(ExecError, match="timed out after 10s"):
                TmuxBackend().send_submit("claude-a")

    def test_missing_binary(self) -> None:
        with mock.patch("subprocess.run", side_effect=FileNotFoundError("tmux")):
            with pytest.raises(ExecError):
                TmuxBackend().create("claude-a", "/work")

    def test_exists_swallows_launch_failure(self) -> None:
        with mock.patch("subprocess.run", side_effect=FileNotFoundError("tmux")):
            assert TmuxBackend().exists("claude-a") is False


class TestDecoding:
    @pytest.mark.skipif(shutil.which("sh") is None, reason="needs a POSIX shell")
    def test_undecodable_pane_bytes_replaced(self, tmp_path: pathlib.Path) -> None:
        stub = tmp_path / "tmux"
        stub.write_text("#!/bin/sh\nprintf 'ok \\377\\376 bytes\\n'\n")
        stub.chmod(0o755)
        path = f"{tmp_path}{os.pathsep}{os.environ.get('PATH', '')}"
        with mock.patch.dict(os.environ, {"PATH": path}):
            text = TmuxBackend().capture("claude-a", 10)
        assert text == "ok \ufffd\ufffd bytes\n"
