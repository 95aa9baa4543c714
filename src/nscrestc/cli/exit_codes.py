"""Plugin exit codes and the severity → exit code lookup.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

from dataclasses import dataclass

OK: int = 0
WARNING: int = 1
CRITICAL: int = 2
UNKNOWN: int = 3
"""Also used for every argument, network and structural failure."""

SEVERITY_CODES: dict[str, int] = {
    "OK": OK,
    "WARNING": WARNING,
    "CRITICAL": CRITICAL,
    "UNKNOWN": UNKNOWN,
}


@dataclass(frozen=True, slots=True)
class SeverityLookup:
    """Outcome of :func:`lookup_severity`."""

    exit_code: int
    recognized: bool
    """``False`` when the severity text was not one of the four codes."""


def lookup_severity(result: str) -> SeverityLookup:
    """Map the agent's severity text to a plugin exit code.

    The match is exact (case-sensitive).  Unrecognized text falls back
    to :data:`OK`, which existing installations rely on; callers can
    inspect ``recognized`` to report it.
    """
    code = SEVERITY_CODES.get(result)
    if code is None:
        return SeverityLookup(exit_code=OK, recognized=False)
    return SeverityLookup(exit_code=code, recognized=True)
