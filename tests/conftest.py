"""Shared fixtures."""

from __future__ import annotations

import pytest

from claude_tmux.models.agent_wait import WaitConfig

from .fakes import ScriptedBackend


@pytest.fixture
def backend() -> ScriptedBackend:
    return ScriptedBackend()


@pytest.fixture
def fast_config() -> WaitConfig:
    """Wait config with no real sleeping."""
    return WaitConfig(
        timeout=60, poll_interval=0, initial_delay=0, stable_count=3, capture_lines=50
    )
