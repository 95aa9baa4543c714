"""Shared pytest fixtures and configuration for the nscrestc test suite.

Guidelines
----------
* No network access in any test.
* The agent transport is faked at the protocol boundary; the
  ``requests`` session is mocked in the infra tests.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

from typing import Any

import pytest

from nscrestc.core.models import QueryRequest


class FakeTransport:
    """In-memory :class:`AgentTransport` returning a canned body.

    Emits ``REQUEST``/``RESPONSE`` traces so verbose paths are exercised.
    """

    def __init__(self, body: bytes = b"", error: Exception | None = None) -> None:
        self.body = body
        self.error = error
        self.requests: list[QueryRequest] = []

    def fetch(self, request: QueryRequest, *, trace: Any = None) -> bytes:
        self.requests.append(request)
        if trace is not None:
            trace("REQUEST", f"GET {request.path} HTTP/1.1")
        if self.error is not None:
            raise self.error
        if trace is not None:
            trace("RESPONSE", "HTTP/1.1 200 OK")
        return self.body


@pytest.fixture()
def fake_transport() -> FakeTransport:
    return FakeTransport()
