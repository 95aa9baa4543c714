"""CLI application entry point for nscrestc.

This module is the **sole error boundary** for the entire application.
It catches :class:`~nscrestc.exceptions.NscRestError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, turning each into an ``UNKNOWN:``
plugin line with exit code 3.

Architecture notes
------------------
* No business logic lives here — request building and interpretation
  are delegated to the core layer, the HTTP exchange to infra.
* The plugin line is written with plain ``print()`` to stdout; Rich is
  used for diagnostics only.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from rich.markup import escape

from nscrestc.cli import exit_codes
from nscrestc.cli.console import console, stdout_console
from nscrestc.core.models import QueryRequest
from nscrestc.core.query_service import QueryService
from nscrestc.core.request_builder import build_request
from nscrestc.exceptions import EmptyPayloadError, NscRestError, UsageError
from nscrestc.infra.http_transport import DEFAULT_TIMEOUT, RequestsAgentTransport
from nscrestc.version import __version__

PROG: str = "check_nscrestc"

_VALUE_FLAGS: frozenset[str] = frozenset({"-u", "-p", "-t"})


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _PluginArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors as :class:`UsageError`.

    argparse normally exits with status 2, which a monitoring framework
    would read as CRITICAL.
    """

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, hint=self.format_help())


def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser.

    Option processing stops at the first positional, so everything after
    the command name is passed through as a query parameter.
    """
    parser = _PluginArgumentParser(
        prog=PROG,
        description="Query an NSClient++ agent through its REST API.",
        epilog="positional: [<command> [key=value|key ...]]",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-u",
        dest="url",
        default=None,
        help="NSClient++ URL, for example https://10.1.2.3:8443.",
    )
    parser.add_argument(
        "-p",
        dest="password",
        default=None,
        help="NSClient++ webserver password.",
    )
    parser.add_argument(
        "-t",
        dest="timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"Connection timeout in seconds, defaults to {DEFAULT_TIMEOUT}.",
    )
    parser.add_argument(
        "-v",
        dest="verbose",
        action="store_true",
        help="Enable verbose output.",
    )
    parser.add_argument(
        "-k",
        dest="insecure",
        action="store_true",
        help="Insecure mode - skip TLS verification.",
    )
    parser.add_argument(
        "query",
        nargs=argparse.REMAINDER,
        help="Check command followed by optional key=value or key arguments.",
    )
    return parser


def _attach_flag_values(argv: list[str]) -> list[str]:
    """Join ``-p -secret`` into ``-p-secret`` so argparse keeps the value.

    argparse reads a separate token starting with ``-`` as another option.
    Rewriting stops at the first positional (or ``--``).
    """
    attached: list[str] = []
    index = 0
    while index < len(argv):
        token = argv[index]
        if token == "--" or not token.startswith("-"):
            attached.extend(argv[index:])
            break
        following = argv[index + 1] if index + 1 < len(argv) else None
        if token in _VALUE_FLAGS and following is not None and following.startswith("-"):
            attached.append(token + following)
            index += 2
            continue
        attached.append(token)
        index += 1
    return attached


def _require(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    for flag, value in (("u", args.url), ("p", args.password)):
        if value is None:
            raise UsageError(
                f"Missing required -{flag} argument",
                hint=parser.format_help(),
            )


# ---------------------------------------------------------------------------
# Verbose output
# ---------------------------------------------------------------------------

def _print_trace(label: str, text: str) -> None:
    """Write a labelled wire dump to stdout."""
    stdout_console.print(f"{label}:")
    stdout_console.print(text)


def _note(message: str) -> None:
    console.print(f"[dim]{escape(message)}[/dim]")


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_reachability(
    service: QueryService,
    request: QueryRequest,
    url: str,
    *,
    verbose: bool,
) -> int:
    """Report the agent as reachable once any HTTP exchange completes."""
    service.check_reachable(request, trace=_print_trace if verbose else None)
    print(f"OK: NSClient API reachable on {url}")
    return exit_codes.OK


def _handle_query(service: QueryService, request: QueryRequest, *, verbose: bool) -> int:
    """Run a named check and print its plugin line.

    Flow:
    1. Fetch and decode the ``/query/<command>`` document.
    2. Interpret the first payload entry.
    3. Map its severity text to the exit code.
    """
    response, decode_error = service.fetch_response(
        request,
        trace=_print_trace if verbose else None,
    )
    if verbose and decode_error is not None:
        _note(f"Response body is not a query document: {decode_error}")

    try:
        result = service.interpret(response)
    except EmptyPayloadError:
        if verbose:
            _print_trace("QUERY RESULT", repr(response))
        raise

    print(result.render())

    severity = exit_codes.lookup_severity(result.result)
    if verbose and not severity.recognized:
        _note(f"Unrecognized result {result.result!r}, exiting with OK.")
    return severity.exit_code


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the plugin.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        Plugin exit code (0-3).

    Raises
    ------
    NscRestError
        For every failure; :func:`cli` renders it as ``UNKNOWN:``.
    """
    parser = _build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(_attach_flag_values(argv))
    _require(parser, args)

    request = build_request(args.url, args.query)
    transport = RequestsAgentTransport(
        args.password,
        timeout=args.timeout,
        insecure=args.insecure,
    )
    service = QueryService(transport)

    if request.is_reachability_check:
        return _handle_reachability(service, request, args.url, verbose=args.verbose)
    return _handle_query(service, request, verbose=args.verbose)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(argv: list[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Guarantees the process exits with a plugin status (0-3) and a single
    stdout line, never a raw stack trace.
    """
    try:
        code = main(argv)
        sys.exit(code)
    except NscRestError as exc:
        print(f"UNKNOWN: {exc}")
        if exc.hint:
            console.print(escape(exc.hint))
        sys.exit(exit_codes.UNKNOWN)
    except KeyboardInterrupt:
        print("UNKNOWN: Aborted by user.")
        sys.exit(exit_codes.UNKNOWN)
    except Exception as exc:  # noqa: BLE001
        print(f"UNKNOWN: Unexpected error: {type(exc).__name__}: {exc}")
        sys.exit(exit_codes.UNKNOWN)
