"""Rich consoles used by the CLI layer.

``console`` writes diagnostics to stderr so they never mix with the
plugin line.  ``stdout_console`` carries the verbose wire dumps, with
markup, highlighting and wrapping disabled so raw HTTP text prints
unchanged.
"""

from __future__ import annotations

from rich.console import Console

console = Console(stderr=True)
"""Hints, usage guidance and verbose-only notes."""

stdout_console = Console(markup=False, highlight=False, soft_wrap=True, emoji=False)
"""Verbose ``REQUEST:`` / ``RESPONSE:`` / ``QUERY RESULT:`` dumps."""
