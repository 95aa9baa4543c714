"""Tests for JSON decoding (core/response_parser.py).

The decoder is lenient: malformed bodies yield the zero-valued
:class:`QueryResponse`, wrong-typed fields count as absent.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from nscrestc.core.models import PerfValue, QueryResponse
from nscrestc.core.response_parser import (
    decode_query_response,
    load_document,
    parse_perf_value,
    parse_query_response,
)


def _body(document: Any) -> bytes:
    return json.dumps(document).encode("utf-8")


def _latin1_body(message: str) -> bytes:
    document = {"payload": [{"result": "CRITICAL", "lines": [{"message": message}]}]}
    return json.dumps(document, ensure_ascii=False).encode("latin-1")


def _sample_document() -> dict[str, Any]:
    return {
        "header": {"source_id": "agent-01"},
        "payload": [
            {
                "command": "check_drivesize",
                "result": "WARNING",
                "lines": [
                    {
                        "message": " disk low ",
                        "perf": [
                            {
                                "alias": "used",
                                "int_value": {
                                    "value": 95.5,
                                    "unit": "%",
                                    "warning": 80,
                                    "critical": 90,
                                },
                            }
                        ],
                    }
                ],
            }
        ],
    }


# ---------------------------------------------------------------------------
# Raw document loading
# ---------------------------------------------------------------------------

class TestLoadDocument:
    def test_leading_whitespace_skipped(self) -> None:
        assert load_document(b'\n  {"a": 1}') == {"a": 1}

    def test_trailing_data_ignored(self) -> None:
        assert load_document('{"a": 1}\n{"b": 2}') == {"a": 1}

    @pytest.mark.parametrize("body", [b"", b"<html>403</html>", b"\xff\xfe", b"   "])
    def test_invalid_raises_value_error(self, body: bytes) -> None:
        with pytest.raises(ValueError):
            load_document(body)


# ---------------------------------------------------------------------------
# decode_query_response
# ---------------------------------------------------------------------------

class TestDecodeQueryResponse:
    def test_full_document(self) -> None:
        response, error = decode_query_response(_body(_sample_document()))
        assert error is None
        assert response.header.source_id == "agent-01"
        assert len(response.payload) == 1
        entry = response.payload[0]
        assert entry.command == "check_drivesize"
        assert entry.result == "WARNING"
        assert entry.lines[0].message == " disk low "
        perf = entry.lines[0].perf[0]
        assert perf.alias == "used"
        assert perf.int_value == PerfValue(
            value=95.5, unit="%", warning=80.0, critical=90.0,
        )

    def test_malformed_body_yields_zero_value(self) -> None:
        response, error = decode_query_response(b"not json")
        assert response == QueryResponse()
        assert error is not None

    def test_wrong_shape_yields_empty_payload(self) -> None:
        response, error = decode_query_response(_body([1, 2, 3]))
        assert error is None
        assert response.payload == ()

    def test_legacy_code_page_message_keeps_payload(self) -> None:
        body = _latin1_body("Speicher f\u00fcr C: 91%")
        response, error = decode_query_response(body)
        assert error is None
        assert response.payload[0].result == "CRITICAL"
        assert response.payload[0].lines[0].message == "Speicher f\ufffdr C: 91%"

    def test_payload_not_a_list(self) -> None:
        response, _ = decode_query_response(_body({"payload": {"result": "OK"}}))
        assert response.payload == ()


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

class TestParsePerfValue:
    def test_absent_fields_are_none(self) -> None:
        assert parse_perf_value({}) == PerfValue()

    def test_zero_is_not_absent(self) -> None:
        value = parse_perf_value({"value": 0, "warning": 0})
        assert value.value == 0.0
        assert value.warning == 0.0
        assert value.critical is None

    def test_integers_become_floats(self) -> None:
        value = parse_perf_value({"value": 3})
        assert isinstance(value.value, float)

    def test_agent_minimum_spelling(self) -> None:
        assert parse_perf_value({"mininum": 1}).minimum == 1.0

    def test_corrected_minimum_spelling(self) -> None:
        assert parse_perf_value({"minimum": 2}).minimum == 2.0

    @pytest.mark.parametrize("raw", [True, "95", None, [1], {"v": 1}])
    def test_non_numbers_are_absent(self, raw: object) -> None:
        assert parse_perf_value({"value": raw}).value is None

    def test_non_string_unit_is_absent(self) -> None:
        assert parse_perf_value({"value": 1, "unit": 5}).unit is None

    def test_not_an_object(self) -> None:
        assert parse_perf_value(None) == PerfValue()


class TestParseQueryResponse:
    def test_missing_header(self) -> None:
        response = parse_query_response({"payload": []})
        assert response.header.source_id == ""

    def test_lines_keep_order(self) -> None:
        response = parse_query_response(
            {
                "payload": [
                    {
                        "result": "OK",
                        "lines": [{"message": "first"}, {"message": "second"}],
                    }
                ]
            }
        )
        assert [line.message for line in response.payload[0].lines] == ["first", "second"]

    def test_malformed_entries_become_defaults(self) -> None:
        response = parse_query_response({"payload": ["junk", {"result": 2}]})
        assert len(response.payload) == 2
        assert response.payload[0].result == ""
        assert response.payload[1].result == ""
