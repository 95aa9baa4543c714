"""Custom exception hierarchy for nscrestc.

All exceptions that cross layer boundaries must inherit from
:class:`NscRestError`.  Raw third-party exceptions (e.g. from requests)
must NEVER propagate beyond the infrastructure layer — they are caught
there and re-raised as a typed subclass defined here.

Every subclass ends up as an ``UNKNOWN:`` plugin line with exit code 3;
the hierarchy exists so callers and tests can tell the causes apart.

Hierarchy
---------
NscRestError
├── UsageError
├── InvalidURLError
├── RequestBuildError
├── AgentUnreachableError
└── EmptyPayloadError
"""

from __future__ import annotations


class NscRestError(Exception):
    """Base exception for all nscrestc errors.

    The CLI error boundary renders ``str(exc)`` after an ``UNKNOWN:``
    prefix, so messages should read well in that position.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional guidance written to stderr below the plugin line."""


# --- Command line ------------------------------------------------------------

class UsageError(NscRestError):
    """Raised when the command line is incomplete or cannot be parsed."""


# --- Request construction ---------------------------------------------------

class InvalidURLError(NscRestError):
    """Raised when the agent base URL fails validation."""


class RequestBuildError(NscRestError):
    """Raised when the query request cannot be assembled."""


# --- Transport ----------------------------------------------------------------

class AgentUnreachableError(NscRestError):
    """Raised when the HTTP exchange with the agent fails."""


# --- Response -------------------------------------------------------------------

class EmptyPayloadError(NscRestError):
    """Raised when the agent answered with no payload entries."""
