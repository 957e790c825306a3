"""
Meter resolvers for GraphQL
"""

import strawberry

from ...dispatcher import GET_ALL_METERS, GET_METER_BY_ID, QueryDispatcher
from ..types.meter import Meter


def get_dispatcher(info: strawberry.Info) -> QueryDispatcher:
    """Get the query dispatcher from the GraphQL context."""
    return info.context["dispatcher"]


async def resolve_meter_by_id(info: strawberry.Info, id: str) -> Meter | None:
    record = get_dispatcher(info).dispatch(GET_METER_BY_ID, id=id)
    if record is None:
        return None
    return Meter.from_record(record)


async def resolve_all_meters(info: strawberry.Info) -> list[Meter]:
    records = get_dispatcher(info).dispatch(GET_ALL_METERS)
    return [Meter.from_record(record) for record in records]
