"""Plain-text serialization of HTTP exchanges for verbose mode.

Produces the on-the-wire view (request line or status line, headers,
blank line, body) of a ``requests`` exchange.  Output is for humans
only; nothing parses it back.
"""

from __future__ import annotations

from urllib.parse import urlsplit

import requests

_HTTP_VERSIONS: dict[int, str] = {
    10: "HTTP/1.0",
    11: "HTTP/1.1",
    20: "HTTP/2",
}


def _body_text(body: bytes | str | None) -> str:
    if body is None:
        return ""
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def dump_request(prepared: requests.PreparedRequest) -> str:
    """Serialize *prepared* as it will be sent, including ``Host``."""
    netloc = urlsplit(prepared.url or "").netloc
    lines = [f"{prepared.method} {prepared.path_url} HTTP/1.1", f"Host: {netloc}"]
    lines.extend(f"{name}: {value}" for name, value in prepared.headers.items())
    lines.append("")
    lines.append(_body_text(prepared.body))
    return "\n".join(lines)


def dump_response(response: requests.Response, body: bytes) -> str:
    """Serialize *response* with the *body* already read from it."""
    version = _HTTP_VERSIONS.get(getattr(response.raw, "version", 11), "HTTP/1.1")
    lines = [f"{version} {response.status_code} {response.reason or ''}".rstrip()]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    lines.append("")
    lines.append(_body_text(body))
    return "\n".join(lines)
