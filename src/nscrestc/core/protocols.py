"""Protocols (interfaces) consumed by the core layer.

Core code depends ONLY on these protocols — never on the concrete
``requests`` backed transport — so the service can be driven by a fake
in tests.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from nscrestc.core.models import QueryRequest

TraceCallback = Callable[[str, str], None]
"""Receives ``(label, text)`` pairs such as ``("REQUEST", "GET / …")``."""


class AgentTransport(Protocol):
    """Contract for the single HTTP exchange with the agent.

    Any object implementing :meth:`fetch` with this signature satisfies
    the protocol structurally (no explicit inheritance required).
    """

    def fetch(
        self,
        request: QueryRequest,
        *,
        trace: TraceCallback | None = None,
    ) -> bytes:
        """Perform one GET for *request* and return the full body.

        When *trace* is given it is called with the serialized request
        before sending and with the serialized response afterwards.

        Raises
        ------
        AgentUnreachableError
            For any transport-level failure (DNS, refused, TLS, timeout).
        """
        ...  # pragma: no cover
