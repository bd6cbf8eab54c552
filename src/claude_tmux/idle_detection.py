"""Decide from pane text alone whether a Claude Code turn has finished.

Two signals are read from each snapshot, scanning top to bottom and keeping
the *last* matching line index:

- the working indicator (``esc to interrupt``), drawn only while the agent
  is producing output;
- the completion marker (``✻ Worked for 1m 12s``), drawn when a turn ends.

A completion marker counts only when it sits below every working indicator.
Markers from earlier turns stay in scrollback and must not be mistaken for
the current turn finishing.

Short turns can finish and clear the working indicator without ever drawing
a completion marker. When neither signal decides, the detector falls back to
stability: enough consecutive identical snapshots mean the agent is idle.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# Claude Code status line while busy; the key name changed between releases
WORKING_INDICATORS = ("esc to interrupt", "ctrl+c to interrupt")

# "✻ Cogitated for 12s", "✻ Worked for 3m 4s"
DONE_PATTERN = re.compile(r"[✻✶✽✳✢]\s+\S+\s+for\s+\d+[ms]")


class DetectionState(Enum):
    """Verdict for one poll."""

    BUSY = "busy"
    DONE = "done"
    STABLE_IDLE = "stable_idle"
    UNKNOWN = "unknown"


@dataclass
class PaneSignals:
    """Last line index of each signal in a snapshot, -1 when absent."""

    working_idx: int = -1
    done_idx: int = -1


def scan_signals(snapshot: str) -> PaneSignals:
    """Record the last line carrying each signal."""
    signals = PaneSignals()
    for idx, line in enumerate(snapshot.split("\n")):
        if any(indicator in line for indicator in WORKING_INDICATORS):
            signals.working_idx = idx
        if DONE_PATTERN.search(line):
            signals.done_idx = idx
    return signals


def classify_markers(signals: PaneSignals) -> DetectionState:
    """Apply the marker ordering rule; UNKNOWN means it did not decide."""
    if signals.done_idx > signals.working_idx:
        return DetectionState.DONE
    if signals.working_idx >= 0:
        return DetectionState.BUSY
    return DetectionState.UNKNOWN


class IdleDetector:
    """Per-wait detector combining the marker rule with the stability fallback.

    ``stable_run`` counts consecutive byte-identical snapshots, the first
    snapshot of a run included. With a threshold of 5, five identical
    marker-free snapshots yield UNKNOWN four times and then STABLE_IDLE.
    """

    def __init__(self, stable_threshold: int = 5) -> None:
        if stable_threshold < 1:
            raise ValueError("stable_threshold must be at least 1")
        self.stable_threshold = stable_threshold
        self.previous: str | None = None
        self.stable_run = 0

    def observe(self, snapshot: str) -> DetectionState:
        """Feed the latest snapshot and return the state for this poll."""
        if snapshot == self.previous:
            self.stable_run += 1
        else:
            self.stable_run = 1
            self.previous = snapshot

        state = classify_markers(scan_signals(snapshot))
        if state is not DetectionState.UNKNOWN:
            return state

        if self.stable_run >= self.stable_threshold:
            return DetectionState.STABLE_IDLE
        return DetectionState.UNKNOWN

