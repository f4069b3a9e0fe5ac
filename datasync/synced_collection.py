"""
Synced Collection

In-memory, ordered mirror of one remote collection. Every remote call goes
through the RetryExecutor; local state changes only after the server has
confirmed an operation, and a failed operation only ever sets ``error`` and
returns a failure sentinel (None / False).

Usage:
    tasks = await SyncedCollection.open(task_binding)
    task = await tasks.create({"title": "Draft launch post"})
    if task is None:
        show_banner(tasks.error)
"""

import asyncio
import dataclasses
import logging
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, Generic, List, Optional, Set

from core.config import SyncConfig, get_settings
from core.errors import BindingUnavailableError, describe_error
from core.retry_executor import RetryExecutor, RetryPolicy

from .cancellation import CancellationToken
from .models import ItemT, SyncState
from .protocols import Patch, ResourceBinding

logger = logging.getLogger(__name__)

Listener = Callable[[SyncState], None]


class SyncedCollection(Generic[ItemT]):
    """
    Stateful controller mirroring one remote resource

    Mutations are pessimistic: ``create`` appends, ``update`` replaces and
    ``remove`` filters only after the binding returns successfully.
    ``trash`` and ``restore`` never patch items; they re-fetch the whole
    collection instead.
    """

    def __init__(
        self,
        binding: ResourceBinding[ItemT],
        *,
        entity: Optional[str] = None,
        executor: Optional[RetryExecutor] = None,
        policy: Optional[RetryPolicy] = None,
        notify_progress: Optional[bool] = None,
        serialize_mutations: Optional[bool] = None,
        config: Optional[SyncConfig] = None,
    ):
        """
        Args:
            binding: Remote operations for the mirrored resource
            entity: Label used in error messages (defaults to the binding's entity)
            executor: Retry executor (a fresh one by default)
            policy: Retry policy for every call (defaults from SyncConfig)
            notify_progress: Emit retry progress notifications
            serialize_mutations: Run at most one mutation at a time
            config: SyncConfig (defaults to global settings)
        """
        config = config or get_settings().sync

        self.binding = binding
        self.entity = entity or binding.entity or binding.resource
        self.executor = executor or RetryExecutor()
        self.policy = policy or RetryPolicy(
            max_attempts=config.retry_max_attempts,
            base_delay_ms=config.retry_base_delay_ms,
        )
        self.notify_progress = config.retry_notify_progress if notify_progress is None else notify_progress
        self.serialize_mutations = config.serialize_mutations if serialize_mutations is None else serialize_mutations

        self._state: SyncState[ItemT] = SyncState()
        self._in_flight = 0
        self._listeners: List[Listener] = []
        self._pending: Set[CancellationToken] = set()
        self._mutation_lock = asyncio.Lock()
        self._disposed = False

    @classmethod
    async def open(cls, binding: ResourceBinding[ItemT], **kwargs: Any) -> "SyncedCollection[ItemT]":
        """Create a collection and run its initial fetch"""
        collection = cls(binding, **kwargs)
        await collection.refresh()
        return collection

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> SyncState[ItemT]:
        return self._state

    @property
    def items(self) -> List[ItemT]:
        return list(self._state.items)

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def disposed(self) -> bool:
        return self._disposed

    def find(self, item_id: str) -> Optional[ItemT]:
        """Mirrored item with ``item_id``, if present"""
        for item in self._state.items:
            if item.id == item_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self._state.items)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new SyncState after every change

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispose(self) -> None:
        """Stop reconciling: cancel pending requests and refuse new ones"""
        if self._disposed:
            return
        self._disposed = True
        for token in list(self._pending):
            token.cancel()
        self._listeners.clear()
        logger.info(f"Disposed {self.entity} collection ({len(self._pending)} request(s) pending)")

    def _set_state(self, **changes: Any) -> None:
        self._state = dataclasses.replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.error(f"{self.entity} listener failed: {e}")

    # =========================================================================
    # Plumbing
    # =========================================================================

    def _bound(self, operation: str) -> Optional[Callable[..., Awaitable[Any]]]:
        if self._disposed:
            logger.warning(f"{operation} on disposed {self.entity} collection ignored")
            return None
        try:
            return self.binding.require(operation)
        except BindingUnavailableError as e:
            logger.warning(str(e))
            return None

    async def _execute(self, call: Callable[[], Awaitable[Any]]) -> Any:
        return await self.executor.execute_with_policy(
            call, self.policy, notify_progress=self.notify_progress
        )

    @asynccontextmanager
    async def _in_flight_request(self, token: CancellationToken, mutation: bool, clear_error: bool = False):
        self._pending.add(token)
        self._in_flight += 1
        if clear_error:
            self._set_state(loading=True, error=None)
        else:
            self._set_state(loading=True)
        try:
            if mutation and self.serialize_mutations:
                async with self._mutation_lock:
                    yield
            else:
                yield
        finally:
            self._pending.discard(token)
            self._in_flight -= 1
            self._set_state(loading=self._in_flight > 0)

    def _record_failure(self, error: Exception, operation: str, token: CancellationToken) -> None:
        message = describe_error(error, operation, self.entity)
        logger.error(f"Error {operation} {self.entity}: {error}")
        if not token.cancelled:
            self._set_state(error=message)

    # =========================================================================
    # Operations
    # =========================================================================

    async def refresh(self, token: Optional[CancellationToken] = None) -> None:
        """Re-fetch the whole collection, replacing items (emptied on failure)"""
        if self._disposed:
            logger.warning(f"refresh on disposed {self.entity} collection ignored")
            return
        token = token or CancellationToken(f"{self.entity}.refresh")

        async with self._in_flight_request(token, mutation=False, clear_error=True):
            try:
                items = await self._execute(self.binding.fetch_all)
            except Exception as e:
                self._record_failure(e, "fetching", token)
                if not token.cancelled:
                    self._set_state(items=[])
                return

            if token.cancelled:
                logger.debug(f"Dropped {self.entity} refresh result after cancellation")
                return
            self._set_state(items=list(items))
            logger.debug(f"Fetched {len(items)} {self.entity}")

    async def get(self, item_id: str, token: Optional[CancellationToken] = None) -> Optional[ItemT]:
        """Fetch one item from the server without touching the mirror"""
        fetch_one = self._bound("fetch_one")
        if fetch_one is None:
            return None
        token = token or CancellationToken(f"{self.entity}.get")

        async with self._in_flight_request(token, mutation=False):
            try:
                return await self._execute(lambda: fetch_one(item_id))
            except Exception as e:
                self._record_failure(e, "fetching", token)
                return None

    async def create(self, data: Patch, token: Optional[CancellationToken] = None) -> Optional[ItemT]:
        """Create an item remotely and append the confirmed item"""
        create = self._bound("create")
        if create is None:
            return None
        token = token or CancellationToken(f"{self.entity}.create")

        async with self._in_flight_request(token, mutation=True):
            try:
                item = await self._execute(lambda: create(data))
            except Exception as e:
                self._record_failure(e, "creating", token)
                return None

            if item is None:
                return None
            if token.cancelled:
                logger.debug(f"Dropped {self.entity} create result after cancellation")
                return item
            self._set_state(items=[*self._state.items, item])
            return item

    async def update(self, item_id: str, patch: Patch, token: Optional[CancellationToken] = None) -> Optional[ItemT]:
        """Update an item remotely and replace it in place once confirmed"""
        update = self._bound("update")
        if update is None:
            return None
        token = token or CancellationToken(f"{self.entity}.update")

        async with self._in_flight_request(token, mutation=True):
            try:
                item = await self._execute(lambda: update(item_id, patch))
            except Exception as e:
                self._record_failure(e, "updating", token)
                return None

            if item is None:
                return None
            if token.cancelled:
                logger.debug(f"Dropped {self.entity} update result after cancellation")
                return item
            # An item removed meanwhile stays removed
            self._set_state(items=[item if existing.id == item_id else existing for existing in self._state.items])
            return item

    async def remove(self, item_id: str, token: Optional[CancellationToken] = None) -> bool:
        """Delete an item remotely and drop it from the mirror once confirmed"""
        remove = self._bound("remove")
        if remove is None:
            return False
        token = token or CancellationToken(f"{self.entity}.remove")

        async with self._in_flight_request(token, mutation=True):
            try:
                removed = await self._execute(lambda: remove(item_id))
            except Exception as e:
                self._record_failure(e, "deleting", token)
                return False

            if not removed:
                return False
            if not token.cancelled:
                self._set_state(items=[existing for existing in self._state.items if existing.id != item_id])
            return True

    async def trash(self, item_id: str, token: Optional[CancellationToken] = None) -> bool:
        """Soft-delete an item, then re-fetch the collection"""
        return await self._soft_delete_action("trash", "trashing", item_id, token)

    async def restore(self, item_id: str, token: Optional[CancellationToken] = None) -> bool:
        """Restore a soft-deleted item, then re-fetch the collection"""
        return await self._soft_delete_action("restore", "restoring", item_id, token)

    async def _soft_delete_action(
        self,
        operation: str,
        verb: str,
        item_id: str,
        token: Optional[CancellationToken],
    ) -> bool:
        action = self._bound(operation)
        if action is None:
            return False
        token = token or CancellationToken(f"{self.entity}.{operation}")

        async with self._in_flight_request(token, mutation=True):
            try:
                succeeded = await self._execute(lambda: action(item_id))
            except Exception as e:
                self._record_failure(e, verb, token)
                return False

        if not succeeded:
            return False
        if not token.cancelled:
            await self.refresh()
        return True


__all__ = ["SyncedCollection", "Listener"]
