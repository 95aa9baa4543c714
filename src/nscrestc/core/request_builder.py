"""Translate command-line positionals into a :class:`QueryRequest`.

Every function in this module is a **pure** transformation — no I/O,
no side effects.

Positional forms
----------------
* no positionals              → ``<base>/`` (reachability check)
* ``<command>``               → ``<base>/query/<command>``
* ``<command> k=v k2 …``      → ``<base>/query/<command>?k=v&k2=``
"""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import quote, urlsplit

from nscrestc.core.models import QueryRequest
from nscrestc.exceptions import InvalidURLError, RequestBuildError

QUERY_PATH: str = "/query/"
_SCHEMES: tuple[str, ...] = ("http", "https")
# Left unescaped in a path, like the agent client's own URL encoding.
_PATH_SAFE: str = "/:@!$&'()*+,;="


# ---------------------------------------------------------------------------
# Base URL
# ---------------------------------------------------------------------------

def parse_base_url(url: str) -> tuple[str, str]:
    """Split *url* into ``(scheme://authority, path)``.

    The returned path has its trailing ``/`` removed so request paths
    can be appended directly.

    Raises
    ------
    InvalidURLError
        If *url* is empty, unparsable, not http(s), or has no host.
    """
    stripped = url.strip()
    if not stripped:
        raise InvalidURLError("URL must not be empty.")

    try:
        parts = urlsplit(stripped)
        # Accessing .port validates the numeric port range.
        _ = parts.port
    except ValueError as exc:
        raise InvalidURLError(f"Invalid URL {stripped!r}: {exc}") from exc

    if parts.scheme.lower() not in _SCHEMES:
        raise InvalidURLError(
            f"Invalid URL {stripped!r}: unsupported scheme {parts.scheme!r}",
            hint="URL must start with http:// or https://",
        )
    if not parts.hostname:
        raise InvalidURLError(f"Invalid URL {stripped!r}: missing host")

    return f"{parts.scheme}://{parts.netloc}", parts.path.rstrip("/")


# ---------------------------------------------------------------------------
# Query parameters
# ---------------------------------------------------------------------------

def parse_parameter(token: str) -> tuple[str, str]:
    """Split ``key=value`` on the first ``=``; a bare ``key`` maps to ``""``."""
    key, _, value = token.partition("=")
    return key, value


def parse_parameters(tokens: Sequence[str]) -> tuple[tuple[str, str], ...]:
    """Parse *tokens* and order them by key.

    The sort is stable, so repeated keys keep their command-line order.
    """
    pairs = [parse_parameter(token) for token in tokens]
    return tuple(sorted(pairs, key=lambda pair: pair[0]))


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------

def build_request(base_url: str, positionals: Sequence[str]) -> QueryRequest:
    """Build the reachability or query request for *positionals*.

    Raises
    ------
    InvalidURLError
        If *base_url* is malformed.
    RequestBuildError
        If a command name is given but empty.
    """
    root, base_path = parse_base_url(base_url)

    if not positionals:
        return QueryRequest(base_url=root, path=f"{base_path}/")

    command = positionals[0]
    if not command:
        raise RequestBuildError("Command name must not be empty.")

    return QueryRequest(
        base_url=root,
        path=f"{base_path}{QUERY_PATH}{quote(command, safe=_PATH_SAFE)}",
        params=parse_parameters(positionals[1:]),
        command=command,
    )
