"""Core query service — drives one agent exchange and interprets it.

The service depends on an :class:`~nscrestc.core.protocols.AgentTransport`
injected at construction time, keeping the core free of any HTTP
library imports.

Guarantees
----------
* Pure orchestration — no ``print()``, no filesystem access.
* Only :class:`~nscrestc.exceptions.NscRestError` subclasses escape.
* Exactly one transport call per public method invocation.
"""

from __future__ import annotations

from nscrestc.core.models import CheckResult, QueryRequest, QueryResponse
from nscrestc.core.perfdata import format_perf_tags
from nscrestc.core.protocols import AgentTransport, TraceCallback
from nscrestc.core.response_parser import decode_query_response
from nscrestc.exceptions import AgentUnreachableError, EmptyPayloadError, NscRestError


class QueryService:
    """Stateless service wrapping the agent transport.

    Parameters
    ----------
    transport:
        Any object satisfying the :class:`AgentTransport` protocol.
    """

    def __init__(self, transport: AgentTransport) -> None:
        self._transport: AgentTransport = transport

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check_reachable(
        self,
        request: QueryRequest,
        *,
        trace: TraceCallback | None = None,
    ) -> None:
        """Check that the agent answers at all.

        The body is discarded; any completed HTTP exchange counts as
        reachable.
        """
        self._fetch(request, trace=trace)

    def fetch_response(
        self,
        request: QueryRequest,
        *,
        trace: TraceCallback | None = None,
    ) -> tuple[QueryResponse, str | None]:
        """Run *request* and decode the body.

        Returns the decoded response and the decoder error message, if
        any.  An undecodable body is not an error here; it simply yields
        the zero-valued :class:`QueryResponse`.
        """
        body = self._fetch(request, trace=trace)
        return decode_query_response(body)

    @staticmethod
    def interpret(response: QueryResponse) -> CheckResult:
        """Reduce *response* to the plugin result of its first payload.

        Only the last line's message survives; perf tags from every line
        are kept in order.

        Raises
        ------
        EmptyPayloadError
            If the response carries no payload entries.
        """
        if not response.payload:
            raise EmptyPayloadError("The resultpayload size is 0")

        first = response.payload[0]
        message = ""
        perfdata: list[str] = []
        for line in first.lines:
            message = line.message.strip()
            perfdata.extend(format_perf_tags(line.perf))

        return CheckResult(
            result=first.result,
            message=message,
            perfdata=tuple(perfdata),
        )

    # ------------------------------------------------------------------
    # Transport delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch(
        self,
        request: QueryRequest,
        *,
        trace: TraceCallback | None,
    ) -> bytes:
        """Call the transport and ensure only our exceptions escape."""
        try:
            return self._transport.fetch(request, trace=trace)
        except NscRestError:
            raise
        except Exception as exc:
            raise AgentUnreachableError(
                f"Unexpected transport error: {exc}",
            ) from exc
