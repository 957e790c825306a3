"""
Meter records served by the lookup layer
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MeterRecord:
    """A meter as stored by a lookup. Only ``id`` is required."""

    id: str
    name: str | None = None
    location: str | None = None
    unit: str | None = None
    author_id: str | None = None
