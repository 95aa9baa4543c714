"""Lenient decoding of the agent's JSON body into domain models.

Decoding never raises.  A body that is not JSON, or JSON of the wrong
shape, yields the zero value :class:`QueryResponse` (and an empty
payload further down the line).  Individual fields of the wrong type are
treated as absent rather than failing the whole document.
"""

from __future__ import annotations

import json
from typing import Any

from nscrestc.core.models import (
    PayloadEntry,
    PerfEntry,
    PerfValue,
    QueryHeader,
    QueryResponse,
    ResultLine,
)

# The agent spells the key "mininum"; accept the corrected spelling too.
_MINIMUM_KEYS: tuple[str, ...] = ("mininum", "minimum")


# ---------------------------------------------------------------------------
# Raw JSON
# ---------------------------------------------------------------------------

def load_document(body: bytes | str) -> Any:
    """Decode the first JSON value in *body*.

    Leading whitespace is skipped and anything after the first complete
    value is ignored.  Invalid UTF-8 is replaced with U+FFFD rather than
    rejected, so a message in a legacy code page keeps its document.

    Raises
    ------
    ValueError
        If no JSON value can be decoded.
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    document, _ = json.JSONDecoder().raw_decode(text.lstrip())
    return document


def decode_query_response(body: bytes | str) -> tuple[QueryResponse, str | None]:
    """Decode *body* and return ``(response, error)``.

    *error* is ``None`` on success and the decoder message otherwise, in
    which case *response* is the zero value.
    """
    try:
        document = load_document(body)
    except ValueError as exc:
        return QueryResponse(), str(exc)
    return parse_query_response(document), None


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def _as_dict(raw: object) -> dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def _as_list(raw: object) -> list[Any]:
    return raw if isinstance(raw, list) else []


def _as_str(raw: object) -> str:
    return raw if isinstance(raw, str) else ""


def _optional_float(raw: object) -> float | None:
    """Return *raw* as ``float`` when it is a JSON number, else ``None``."""
    # bool is an int subclass but JSON true/false is not a number.
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    return float(raw)


def _optional_str(raw: object) -> str | None:
    return raw if isinstance(raw, str) else None


# ---------------------------------------------------------------------------
# Document → models
# ---------------------------------------------------------------------------

def parse_perf_value(raw: object) -> PerfValue:
    data = _as_dict(raw)
    minimum: float | None = None
    for key in _MINIMUM_KEYS:
        minimum = _optional_float(data.get(key))
        if minimum is not None:
            break
    return PerfValue(
        value=_optional_float(data.get("value")),
        unit=_optional_str(data.get("unit")),
        warning=_optional_float(data.get("warning")),
        critical=_optional_float(data.get("critical")),
        minimum=minimum,
        maximum=_optional_float(data.get("maximum")),
    )


def parse_perf_entry(raw: object) -> PerfEntry:
    data = _as_dict(raw)
    return PerfEntry(
        alias=_as_str(data.get("alias")),
        int_value=parse_perf_value(data.get("int_value")),
    )


def parse_result_line(raw: object) -> ResultLine:
    data = _as_dict(raw)
    return ResultLine(
        message=_as_str(data.get("message")),
        perf=tuple(parse_perf_entry(entry) for entry in _as_list(data.get("perf"))),
    )


def parse_payload_entry(raw: object) -> PayloadEntry:
    data = _as_dict(raw)
    return PayloadEntry(
        command=_as_str(data.get("command")),
        result=_as_str(data.get("result")),
        lines=tuple(parse_result_line(line) for line in _as_list(data.get("lines"))),
    )


def parse_query_response(document: object) -> QueryResponse:
    """Convert a decoded JSON document into a :class:`QueryResponse`."""
    data = _as_dict(document)
    header = _as_dict(data.get("header"))
    return QueryResponse(
        header=QueryHeader(source_id=_as_str(header.get("source_id"))),
        payload=tuple(
            parse_payload_entry(entry) for entry in _as_list(data.get("payload"))
        ),
    )
