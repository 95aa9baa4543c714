"""``requests`` backed implementation of :class:`~nscrestc.core.protocols.AgentTransport`.

This module is the **only** place in the codebase that sends HTTP
requests.  All ``requests`` exceptions are caught here and re-raised as
:class:`~nscrestc.exceptions.AgentUnreachableError` — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import time

import requests
import urllib3

from nscrestc.core.models import QueryRequest
from nscrestc.core.protocols import TraceCallback
from nscrestc.exceptions import AgentUnreachableError
from nscrestc.infra.http_dump import dump_request, dump_response

DEFAULT_TIMEOUT: int = 10
"""Seconds allowed for the connect/TLS handshake, each read, and the whole exchange."""

PASSWORD_HEADER: str = "password"
_CHUNK_SIZE: int = 8192


class RequestsAgentTransport:
    """Concrete :class:`AgentTransport` performing a single GET.

    Usage::

        transport = RequestsAgentTransport("secret", timeout=5, insecure=True)
        body = transport.fetch(request)

    Parameters
    ----------
    password:
        Shared secret sent verbatim in the ``password`` header.
    timeout:
        Seconds for the connect phase, for each read, and as a deadline
        for the whole exchange.  ``0`` or a negative value disables all
        three.
    insecure:
        Skip TLS certificate verification.
    session:
        Optional pre-built session.  When omitted a fresh session is
        opened and closed around each call.
    """

    def __init__(
        self,
        password: str,
        *,
        timeout: int = DEFAULT_TIMEOUT,
        insecure: bool = False,
        session: requests.Session | None = None,
    ) -> None:
        self._password: str = password
        self._deadline_seconds: int | None = timeout if timeout > 0 else None
        self._timeout: tuple[int, int] | None = (timeout, timeout) if timeout > 0 else None
        self._verify: bool = not insecure
        self._session: requests.Session | None = session
        if insecure:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def fetch(
        self,
        request: QueryRequest,
        *,
        trace: TraceCallback | None = None,
    ) -> bytes:
        """GET ``request.url`` and return the complete body.

        Raises
        ------
        AgentUnreachableError
            For DNS, connection, TLS, timeout and read failures, and when
            the whole exchange outlasts the timeout.
        """
        if self._session is not None:
            return self._exchange(self._session, request, trace)
        with requests.Session() as session:
            return self._exchange(session, request, trace)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _exchange(
        self,
        session: requests.Session,
        request: QueryRequest,
        trace: TraceCallback | None,
    ) -> bytes:
        prepared = session.prepare_request(
            requests.Request(
                "GET",
                request.url,
                headers={PASSWORD_HEADER: self._password},
            )
        )
        if trace is not None:
            trace("REQUEST", dump_request(prepared))

        # Same proxy / CA bundle resolution as Session.request(); streamed so
        # the body can be read against the overall deadline.
        settings = session.merge_environment_settings(
            prepared.url, {}, True, self._verify, None,
        )

        started = time.monotonic()
        try:
            response = session.send(prepared, timeout=self._timeout, **settings)
            with response:
                body = self._read_body(response, started)
                if trace is not None:
                    trace("RESPONSE", dump_response(response, body))
        except requests.RequestException as exc:
            raise AgentUnreachableError(
                str(exc),
                hint="Check the URL, the agent's WEBServer module and the network path.",
            ) from exc

        return body

    def _read_body(self, response: requests.Response, started: float) -> bytes:
        """Read the whole body, failing once the overall deadline passes."""
        chunks: list[bytes] = []
        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            chunks.append(chunk)
            if (
                self._deadline_seconds is not None
                and time.monotonic() - started > self._deadline_seconds
            ):
                raise AgentUnreachableError(
                    f"Timeout: no complete response within {self._deadline_seconds} seconds",
                    hint="Raise -t or check the load on the agent.",
                )
        return b"".join(chunks)
