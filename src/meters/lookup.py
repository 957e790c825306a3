"""
Meter lookup collaborators.

The query dispatcher only depends on the ``MeterLookup`` protocol. The bundled
implementation keeps meters in memory and is seeded from a YAML file whose path
comes from ``settings.meter_source_path``::

    meters:
      - id: m1
        name: Main supply
        location: Basement
        unit: m3
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

import yaml

from .logging import get_logger
from .models import MeterRecord

logger = get_logger(__name__)

METER_FIELDS = ("name", "location", "unit", "author_id")


class MeterSourceError(Exception):
    """Raised when a meter seed file cannot be read or is invalid."""


class MeterLookup(Protocol):
    """Read access to meter records."""

    def get_by_id(self, id: str) -> MeterRecord | None: ...

    def get_all(self) -> list[MeterRecord]: ...


class InMemoryMeterLookup:
    """Insertion-ordered, read-only meter store."""

    def __init__(self, meters: Iterable[MeterRecord] = ()):
        self._meters: dict[str, MeterRecord] = {}
        for meter in meters:
            if meter.id in self._meters:
                raise ValueError(f"Meter '{meter.id}' is already registered")
            self._meters[meter.id] = meter

    def get_by_id(self, id: str) -> MeterRecord | None:
        return self._meters.get(id)

    def get_all(self) -> list[MeterRecord]:
        return list(self._meters.values())

    def __len__(self) -> int:
        return len(self._meters)


def _meter_from_entry(entry: Any, position: int) -> MeterRecord:
    if not isinstance(entry, dict):
        raise MeterSourceError(f"Meter entry #{position} must be a mapping, got {type(entry)}")

    meter_id = entry.get("id")
    if meter_id is None or str(meter_id) == "":
        raise MeterSourceError(f"Meter entry #{position} is missing an id")

    # camelCase keys are accepted so exported GraphQL payloads can be reused as seeds
    if "authorId" in entry and "author_id" not in entry:
        entry = {**entry, "author_id": entry["authorId"]}

    values = {
        field: str(entry[field]) for field in METER_FIELDS if entry.get(field) is not None
    }
    return MeterRecord(id=str(meter_id), **values)


def load_meters_from_file(path: str | Path) -> list[MeterRecord]:
    """Load meters from a YAML seed file.

    Raises:
        MeterSourceError: If the file is missing, is not valid YAML, or holds
            an entry without an id
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise MeterSourceError(f"Meter source not found: {path}") from e
    except yaml.YAMLError as e:
        raise MeterSourceError(f"Failed to parse meter source {path}: {e}") from e

    if not isinstance(data, dict):
        raise MeterSourceError(f"Meter source {path} must be a mapping with a 'meters' key")

    entries = data.get("meters") or []
    if not isinstance(entries, list):
        raise MeterSourceError(f"'meters' in {path} must be a list")

    meters = [_meter_from_entry(entry, i) for i, entry in enumerate(entries, 1)]
    logger.info("Loaded meters from source", path=str(path), count=len(meters))
    return meters


def create_lookup(source_path: str | Path | None = None) -> InMemoryMeterLookup:
    """Build the in-memory lookup, seeded from ``source_path`` when given."""
    if not source_path:
        logger.info("No meter source configured; starting with an empty lookup")
        return InMemoryMeterLookup()

    meters = load_meters_from_file(source_path)
    try:
        return InMemoryMeterLookup(meters)
    except ValueError as e:
        raise MeterSourceError(f"Invalid meter source {source_path}: {e}") from e
