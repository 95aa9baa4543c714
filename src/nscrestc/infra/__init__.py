"""Infrastructure layer — external system integration.

This layer wraps all interaction with the NSClient++ agent over HTTP.
Every raw ``requests`` exception must be caught here and re-raised as a
:class:`~nscrestc.exceptions.NscRestError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from nscrestc.infra.http_dump import dump_request, dump_response
from nscrestc.infra.http_transport import DEFAULT_TIMEOUT, RequestsAgentTransport

__all__: list[str] = [
    "DEFAULT_TIMEOUT",
    "RequestsAgentTransport",
    "dump_request",
    "dump_response",
]
