"""Tests for QueryService (core/query_service.py).

The :class:`AgentTransport` dependency is faked — no network.  These
tests verify:

* Transport delegation and exception mapping
* Reachability semantics (body ignored)
* Interpretation of the first payload entry
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from nscrestc.core.models import (
    CheckResult,
    PayloadEntry,
    PerfEntry,
    PerfValue,
    QueryResponse,
    ResultLine,
)
from nscrestc.core.query_service import QueryService
from nscrestc.core.request_builder import build_request
from nscrestc.exceptions import AgentUnreachableError, EmptyPayloadError

BASE = "https://agent:8443"


def _fake_transport(body: bytes | Exception) -> MagicMock:
    transport = MagicMock()
    if isinstance(body, Exception):
        transport.fetch.side_effect = body
    else:
        transport.fetch.return_value = body
    return transport


def _line(message: str, *perf: PerfEntry) -> ResultLine:
    return ResultLine(message=message, perf=perf)


def _perf(alias: str, value: float | None, **fields: Any) -> PerfEntry:
    return PerfEntry(alias=alias, int_value=PerfValue(value=value, **fields))


def _response(result: str, *lines: ResultLine) -> QueryResponse:
    return QueryResponse(payload=(PayloadEntry(command="check", result=result, lines=lines),))


# ---------------------------------------------------------------------------
# Transport delegation
# ---------------------------------------------------------------------------

class TestTransportDelegation:
    def test_reachability_ignores_body(self) -> None:
        transport = _fake_transport(b"<html>whatever</html>")
        request = build_request(BASE, [])
        QueryService(transport).check_reachable(request)
        transport.fetch.assert_called_once_with(request, trace=None)

    def test_trace_forwarded(self) -> None:
        transport = _fake_transport(b"{}")
        trace = MagicMock()
        request = build_request(BASE, ["check_cpu"])
        QueryService(transport).fetch_response(request, trace=trace)
        transport.fetch.assert_called_once_with(request, trace=trace)

    def test_fetch_response_decodes(self) -> None:
        body = json.dumps({"payload": [{"result": "OK", "lines": []}]}).encode()
        response, error = QueryService(_fake_transport(body)).fetch_response(
            build_request(BASE, ["check_ok"]),
        )
        assert error is None
        assert response.payload[0].result == "OK"

    def test_undecodable_body_is_not_an_error(self) -> None:
        response, error = QueryService(_fake_transport(b"denied")).fetch_response(
            build_request(BASE, ["check_ok"]),
        )
        assert response == QueryResponse()
        assert error

    def test_our_errors_propagate(self) -> None:
        service = QueryService(_fake_transport(AgentUnreachableError("refused")))
        with pytest.raises(AgentUnreachableError, match="refused"):
            service.check_reachable(build_request(BASE, []))

    def test_unexpected_error_wrapped_and_chained(self) -> None:
        original = RuntimeError("kaboom")
        service = QueryService(_fake_transport(original))
        with pytest.raises(AgentUnreachableError, match="Unexpected") as exc_info:
            service.check_reachable(build_request(BASE, []))
        assert exc_info.value.__cause__ is original


# ---------------------------------------------------------------------------
# Interpretation
# ---------------------------------------------------------------------------

class TestInterpret:
    def test_empty_payload_raises(self) -> None:
        with pytest.raises(EmptyPayloadError, match="The resultpayload size is 0"):
            QueryService.interpret(QueryResponse())

    def test_single_line(self) -> None:
        result = QueryService.interpret(
            _response(
                "WARNING",
                _line(
                    "disk low",
                    _perf("used", 95.5, unit="%", warning=80.0, critical=90.0),
                ),
            )
        )
        assert result == CheckResult(
            result="WARNING",
            message="disk low",
            perfdata=("'used'=95.5%;80;90",),
        )
        assert result.render() == "disk low|'used'=95.5%;80;90"

    def test_last_line_message_wins_perf_from_all_lines(self) -> None:
        result = QueryService.interpret(
            _response(
                "CRITICAL",
                _line("first", _perf("a", 1.0)),
                _line("  second  ", _perf("b", 2.0), _perf("c", None)),
                _line("third", _perf("d", 4.0, unit="B")),
            )
        )
        assert result.message == "third"
        assert result.perfdata == ("'a'=1", "'b'=2", "'d'=4B")

    def test_no_lines(self) -> None:
        result = QueryService.interpret(_response("OK"))
        assert result.message == ""
        assert result.render() == ""

    def test_without_perf_renders_message_only(self) -> None:
        result = QueryService.interpret(_response("OK", _line(" all fine \n")))
        assert result.render() == "all fine"

    def test_only_first_payload_consulted(self) -> None:
        response = QueryResponse(
            payload=(
                PayloadEntry(result="OK", lines=(_line("one"),)),
                PayloadEntry(result="CRITICAL", lines=(_line("two"),)),
            )
        )
        result = QueryService.interpret(response)
        assert (result.result, result.message) == ("OK", "one")
