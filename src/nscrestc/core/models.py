"""Domain models for nscrestc.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  Optional numeric fields are ``None`` when
the agent did not send them; zero is a real value and never stands in
for "absent".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlencode


# ---------------------------------------------------------------------------
# Outgoing request
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class QueryRequest:
    """Fully resolved GET request against an NSClient++ agent."""

    base_url: str
    """Scheme and authority of the agent, e.g. ``https://10.1.2.3:8443``."""

    path: str
    """Request path, ``.../`` for a reachability check or ``.../query/<command>``."""

    params: tuple[tuple[str, str], ...] = ()
    """Query parameters, already ordered by key."""

    command: str | None = None
    """Check name, or ``None`` for a reachability check."""

    @property
    def is_reachability_check(self) -> bool:
        return self.command is None

    @property
    def query_string(self) -> str:
        # '~' stays literal, like the agent's own query escaping.
        return urlencode(self.params, safe="~")

    @property
    def url(self) -> str:
        query = self.query_string
        if query:
            return f"{self.base_url}{self.path}?{query}"
        return f"{self.base_url}{self.path}"


# ---------------------------------------------------------------------------
# Decoded agent response
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PerfValue:
    """The ``int_value`` object of a performance entry."""

    value: float | None = None
    unit: str | None = None
    warning: float | None = None
    critical: float | None = None
    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True, slots=True)
class PerfEntry:
    """One labelled metric attached to a result line."""

    alias: str = ""
    int_value: PerfValue = field(default_factory=PerfValue)


@dataclass(frozen=True, slots=True)
class ResultLine:
    message: str = ""
    perf: tuple[PerfEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class PayloadEntry:
    """Result of one executed check command."""

    command: str = ""
    result: str = ""
    """Severity text reported by the agent (``OK``, ``WARNING``, …)."""

    lines: tuple[ResultLine, ...] = ()


@dataclass(frozen=True, slots=True)
class QueryHeader:
    source_id: str = ""


@dataclass(frozen=True, slots=True)
class QueryResponse:
    """Decoded ``/query/<command>`` document.

    ``QueryResponse()`` is the zero value produced when the body could
    not be decoded.
    """

    header: QueryHeader = field(default_factory=QueryHeader)
    payload: tuple[PayloadEntry, ...] = ()


# ---------------------------------------------------------------------------
# Plugin result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CheckResult:
    """Interpreted outcome ready to be printed as a plugin line."""

    result: str
    """Severity text taken from the first payload entry."""

    message: str
    """Trimmed message of the last result line."""

    perfdata: tuple[str, ...] = ()
    """Rendered performance tags in encounter order."""

    def render(self) -> str:
        """Return ``message`` or ``message|tag tag …``."""
        if not self.perfdata:
            return self.message
        return f"{self.message}|{' '.join(self.perfdata).strip()}"
