"""
Root GraphQL query definitions
"""

import strawberry

from ..types.meter import Meter


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def get_meter_by_id(self, info: strawberry.Info, id: str) -> Meter | None:
        """Get a meter by ID."""
        from ..resolvers.meter import resolve_meter_by_id

        return await resolve_meter_by_id(info, id)

    @strawberry.field
    async def get_all_meters(self, info: strawberry.Info) -> list[Meter]:
        """Get all meters."""
        from ..resolvers.meter import resolve_all_meters

        return await resolve_all_meters(info)
