"""
Meter GraphQL type definitions
"""

import strawberry

from ...models import MeterRecord


@strawberry.type
class Meter:
    """Meter type for GraphQL API."""

    id: str
    name: str | None = None
    location: str | None = None
    unit: str | None = None
    # Plain reference only; the author relation is not resolved here
    author_id: str | None = None

    @classmethod
    def from_record(cls, record: MeterRecord) -> "Meter":
        return cls(
            id=record.id,
            name=record.name,
            location=record.location,
            unit=record.unit,
            author_id=record.author_id,
        )
