"""
Sync Layer Protocols (Interfaces)

ResourceBinding names the async functions that connect a SyncedCollection
to one remote resource. NO import-time I/O dependencies - safe to import
anywhere.
"""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Union

from core.errors import BindingUnavailableError

from .models import ItemT


Patch = Union[Dict[str, Any], Any]

FetchAll = Callable[[], Awaitable[List[ItemT]]]
FetchOne = Callable[[str], Awaitable[Optional[ItemT]]]
Create = Callable[[Patch], Awaitable[ItemT]]
Update = Callable[[str, Patch], Awaitable[Optional[ItemT]]]
IdAction = Callable[[str], Awaitable[bool]]

OPERATIONS = ("fetch_all", "fetch_one", "create", "update", "remove", "trash", "restore")


@dataclass(frozen=True)
class ResourceBinding(Generic[ItemT]):
    """
    Remote operations for one entity type

    Only ``fetch_all`` is mandatory. Every bound function performs exactly
    one round trip per call and signals failure by raising.
    """
    resource: str
    fetch_all: FetchAll
    fetch_one: Optional[FetchOne] = None
    create: Optional[Create] = None
    update: Optional[Update] = None
    remove: Optional[IdAction] = None
    trash: Optional[IdAction] = None
    restore: Optional[IdAction] = None

    # Singular label for messages ("task"); defaults to the resource name
    entity: Optional[str] = None

    def supports(self, operation: str) -> bool:
        """Whether ``operation`` is configured"""
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown binding operation: {operation}")
        return getattr(self, operation) is not None

    def require(self, operation: str) -> Callable[..., Awaitable[Any]]:
        """
        Get the bound function for ``operation``

        Raises:
            BindingUnavailableError: The operation is not configured
        """
        if not self.supports(operation):
            raise BindingUnavailableError(operation, self.resource)
        return getattr(self, operation)


__all__ = ["ResourceBinding", "Patch", "OPERATIONS"]
