"""
Shared Sync Store

Process-wide keyed store of synced collections. Consumers asking for the
same resource key share one collection and one initial fetch; the
collection is disposed when the last consumer releases it.

Usage:
    store = get_sync_store()
    async with store.shared("posts", lambda: SyncedCollection(post_binding)) as posts:
        render(posts.items)
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .synced_collection import Listener, SyncedCollection

logger = logging.getLogger(__name__)

CollectionFactory = Callable[[], SyncedCollection]


@dataclass
class _StoreEntry:
    collection: SyncedCollection
    initial_fetch: "asyncio.Future[None]"
    ref_count: int = 0
    unsubscribers: list = field(default_factory=list)


class SyncStore:
    """Reference-counted registry of shared collections"""

    def __init__(self):
        self._entries: Dict[str, _StoreEntry] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[SyncedCollection]:
        """Shared collection for ``key`` if some consumer holds it"""
        entry = self._entries.get(key)
        return entry.collection if entry else None

    def ref_count(self, key: str) -> int:
        entry = self._entries.get(key)
        return entry.ref_count if entry else 0

    async def acquire(self, key: str, factory: CollectionFactory) -> SyncedCollection:
        """
        Get the shared collection for ``key``, creating it on first use

        The first acquirer starts the initial fetch; every acquirer waits for
        that same fetch.

        Args:
            key: Resource key ("posts", "tasks", ...)
            factory: Builds the collection when none exists yet

        Returns:
            The shared collection (fetched at least once)
        """
        entry = self._entries.get(key)
        if entry is None:
            collection = factory()
            entry = _StoreEntry(
                collection=collection,
                initial_fetch=asyncio.ensure_future(collection.refresh()),
            )
            self._entries[key] = entry
            logger.info(f"Created shared collection '{key}'")

        entry.ref_count += 1
        try:
            await asyncio.shield(entry.initial_fetch)
        except BaseException:
            # The acquirer never got the collection, so it cannot release it
            self.release(key)
            raise
        return entry.collection

    def release(self, key: str) -> None:
        """Drop one reference; dispose the collection when none remain"""
        entry = self._entries.get(key)
        if entry is None:
            logger.warning(f"Release of unknown shared collection '{key}'")
            return

        entry.ref_count -= 1
        if entry.ref_count > 0:
            return

        del self._entries[key]
        for unsubscribe in entry.unsubscribers:
            unsubscribe()
        entry.collection.dispose()
        logger.info(f"Disposed shared collection '{key}'")

    def subscribe(self, key: str, listener: Listener) -> Callable[[], None]:
        """
        Listen to state changes of a held collection

        Raises:
            KeyError: No consumer holds ``key``
        """
        entry = self._entries[key]
        unsubscribe = entry.collection.subscribe(listener)
        entry.unsubscribers.append(unsubscribe)
        return unsubscribe

    @asynccontextmanager
    async def shared(self, key: str, factory: CollectionFactory):
        """Hold the shared collection for the duration of the block"""
        collection = await self.acquire(key, factory)
        try:
            yield collection
        finally:
            self.release(key)

    def clear(self) -> None:
        """Dispose every held collection"""
        for key in list(self._entries):
            entry = self._entries.pop(key)
            entry.collection.dispose()


_store: Optional[SyncStore] = None


def get_sync_store() -> SyncStore:
    """Get the process-wide store"""
    global _store
    if _store is None:
        _store = SyncStore()
    return _store


__all__ = ["SyncStore", "get_sync_store", "CollectionFactory"]
