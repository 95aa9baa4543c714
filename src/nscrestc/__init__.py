"""nscrestc — NSClient++ REST API check plugin.

Queries an NSClient++ agent over HTTP and re-emits the check result as
a Nagios/Icinga compatible plugin line and exit code.
"""

from nscrestc.version import __version__

__all__: list[str] = ["__version__"]
