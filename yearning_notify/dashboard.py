"""Dashboard statistics rows and date helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any


@dataclass
class GroupBy:
    """An aggregated count of orders by database, day or type."""

    data_base: str = ""
    count: int = 0
    time: str = ""
    type: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape of the row."""
        return {
            "data_base": self.data_base,
            "count": self.count,
            "time": self.time,
            "type": self.type,
        }


def time_add(hours: str | int | float, now: datetime | None = None) -> str:
    """The date ``hours`` hours from ``now`` as ``YYYY-MM-DD``.

    An unparsable offset counts as zero.
    """
    base = datetime.now() if now is None else now
    try:
        offset = float(hours)
    except (TypeError, ValueError):
        offset = 0.0
    return (base + timedelta(hours=offset)).strftime("%Y-%m-%d")