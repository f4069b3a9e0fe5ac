"""
Data synchronization layer

Generic machinery for mirroring remote collections in memory:
    - models: SyncItem base model, SyncState, response envelopes
    - protocols: ResourceBinding
    - synced_collection: SyncedCollection engine
    - store: SyncStore, the shared reference-counted registry
    - cancellation: CancellationToken
"""

from .cancellation import CancellationToken
from .models import ApiEnvelope, ListEnvelope, Page, SyncItem, SyncState
from .protocols import ResourceBinding
from .store import SyncStore, get_sync_store
from .synced_collection import SyncedCollection

__all__ = [
    "ApiEnvelope",
    "CancellationToken",
    "ListEnvelope",
    "Page",
    "ResourceBinding",
    "SyncItem",
    "SyncState",
    "SyncStore",
    "SyncedCollection",
    "get_sync_store",
]
