"""Core / service layer — pure request building and response interpretation.

Rules
-----
* No ``print()`` calls.
* No network I/O (the transport is injected through a protocol).
* No imports from ``cli`` or ``infra``.
"""

from nscrestc.core.models import (
    CheckResult,
    PayloadEntry,
    PerfEntry,
    PerfValue,
    QueryHeader,
    QueryRequest,
    QueryResponse,
    ResultLine,
)
from nscrestc.core.protocols import AgentTransport
from nscrestc.core.query_service import QueryService
from nscrestc.core.request_builder import build_request

__all__: list[str] = [
    "AgentTransport",
    "CheckResult",
    "PayloadEntry",
    "PerfEntry",
    "PerfValue",
    "QueryHeader",
    "QueryRequest",
    "QueryResponse",
    "QueryService",
    "ResultLine",
    "build_request",
]
