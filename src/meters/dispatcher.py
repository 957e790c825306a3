"""
Query dispatcher mapping GraphQL operation names to meter lookups.
"""

from collections.abc import Callable, Sequence
from typing import Any

from .lookup import MeterLookup
from .models import MeterRecord

GET_METER_BY_ID = "getMeterById"
GET_ALL_METERS = "getAllMeters"


class UnknownOperationError(LookupError):
    """Raised when dispatching an operation name that is not registered."""


class QueryDispatcher:
    """
    Routes named read operations to an injected meter lookup.

    Results and exceptions from the lookup are passed through unchanged.
    """

    def __init__(self, lookup: MeterLookup):
        self.lookup = lookup
        self._operations: dict[str, Callable[..., Any]] = {
            GET_METER_BY_ID: self.get_by_id,
            GET_ALL_METERS: self.get_all,
        }

    @property
    def operations(self) -> list[str]:
        """Names of the registered operations."""
        return list(self._operations)

    def get_by_id(self, id: str) -> MeterRecord | None:
        return self.lookup.get_by_id(id)

    def get_all(self) -> Sequence[MeterRecord]:
        return self.lookup.get_all()

    def dispatch(self, operation: str, **arguments: Any) -> Any:
        """
        Invoke a registered operation by name.

        Args:
            operation: Operation name, e.g. ``getMeterById``
            **arguments: Arguments forwarded to the operation

        Raises:
            UnknownOperationError: If no operation is registered under that name
        """
        handler = self._operations.get(operation)
        if handler is None:
            raise UnknownOperationError(f"Unknown query operation: '{operation}'")
        return handler(**arguments)
