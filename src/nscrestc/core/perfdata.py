"""Plugin performance-data formatting.

Reference format::

    'label'=value[UOM];[warn];[crit];[min];[max]

Optional fields are appended positionally and only when present — an
absent field is skipped outright, never written as an empty ``;``
placeholder.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import Decimal

from nscrestc.core.models import PerfEntry


def format_number(value: float) -> str:
    """Render *value* in minimal decimal notation.

    No exponent and no forced trailing zeros: ``80.0`` → ``80``,
    ``95.5`` → ``95.5``, ``1e-05`` → ``0.00001``,
    ``1e23`` → ``100000000000000000000000``, ``-0.0`` → ``-0``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    # repr() is the shortest round-tripping form; normalize() drops trailing
    # zeros and "f" drops the exponent.
    return format(Decimal(repr(value)).normalize(), "f")


def format_perf_tag(entry: PerfEntry) -> str | None:
    """Return the perf tag for *entry*, or ``None`` when it has no value."""
    data = entry.int_value
    if data.value is None:
        return None

    tag = f"'{entry.alias}'={format_number(data.value)}"
    if data.unit is not None:
        tag += data.unit
    for threshold in (data.warning, data.critical, data.minimum, data.maximum):
        if threshold is not None:
            tag += f";{format_number(threshold)}"
    return tag


def format_perf_tags(entries: Iterable[PerfEntry]) -> list[str]:
    """Render every entry that carries a value, preserving order."""
    tags: list[str] = []
    for entry in entries:
        tag = format_perf_tag(entry)
        if tag is not None:
            tags.append(tag)
    return tags
