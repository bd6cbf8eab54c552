"""Human-readable durations for wait results."""

from __future__ import annotations

_UNITS = (("h", 3600), ("m", 60), ("s", 1))


def format_duration(seconds: float) -> str:
    """Render *seconds* as ``1h 2m 3s``, leaving out zero units.

    Fractions are truncated, so ``format_duration(900)`` is ``"15m"`` and
    anything below one second (negative values included) is ``"0s"``.
    """
    remaining = max(int(seconds), 0)
    parts: list[str] = []
    for suffix, size in _UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count}{suffix}")
    return " ".join(parts) or "0s"
