"""Allow ``python -m nscrestc`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m nscrestc`` behaves identically to the ``check_nscrestc``
console script.
"""

from __future__ import annotations

from nscrestc.cli.app import cli

if __name__ == "__main__":
    cli()
