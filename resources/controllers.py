"""
Per-entity Controllers

Each ``use_*`` function opens a SyncedCollection for one resource: it binds
the resource client, runs the initial fetch and returns the collection.

With a ``store`` the collection is shared: consumers asking for the same
resource (and query) reuse one mirror, and must hand it back with
``store.release(controller_key(resource, params))``.

Usage:
    tasks = await use_tasks(params={"status": "OPEN"})
    await tasks.trash(task_id)
"""

import logging
from typing import Any, Dict, Optional

from datasync.store import SyncStore
from datasync.synced_collection import SyncedCollection

from .bindings import bind_resource
from .factory import ResourceClientFactory, get_client_factory
from .models import Activity, Ambassador, Asset, Campaign, Goal, Post, Task, User

logger = logging.getLogger(__name__)


def controller_key(resource: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Store key for a resource listing with the given query"""
    if not params:
        return resource
    query = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] is not None)
    return f"{resource}?{query}" if query else resource


async def use_resource(
    resource: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    clients: Optional[ResourceClientFactory] = None,
    store: Optional[SyncStore] = None,
    **collection_options: Any,
) -> SyncedCollection:
    """
    Open the synced collection for ``resource``

    Args:
        resource: Resource path segment ("users", "tasks", ...)
        params: List query forwarded to every fetch
        clients: Client factory (defaults to the process-wide one)
        store: Shared store; when given the collection is acquired from it
        **collection_options: Passed to SyncedCollection (policy, executor, ...)

    Returns:
        Collection whose initial fetch has completed
    """
    client = (clients or get_client_factory()).get(resource)

    def build() -> SyncedCollection:
        return SyncedCollection(bind_resource(client, params), **collection_options)

    if store is not None:
        return await store.acquire(controller_key(resource, params), build)

    collection = build()
    await collection.refresh()
    logger.debug(f"Opened {resource} collection with {len(collection)} item(s)")
    return collection


async def use_users(**options: Any) -> SyncedCollection[User]:
    """Users collection"""
    return await use_resource("users", **options)


async def use_posts(**options: Any) -> SyncedCollection[Post]:
    """Posts collection"""
    return await use_resource("posts", **options)


async def use_campaigns(**options: Any) -> SyncedCollection[Campaign]:
    """Campaigns collection"""
    return await use_resource("campaigns", **options)


async def use_tasks(**options: Any) -> SyncedCollection[Task]:
    """Tasks collection (supports trash/restore)"""
    return await use_resource("tasks", **options)


async def use_goals(**options: Any) -> SyncedCollection[Goal]:
    """Goals collection"""
    return await use_resource("goals", **options)


async def use_assets(**options: Any) -> SyncedCollection[Asset]:
    """Assets collection"""
    return await use_resource("assets", **options)


async def use_ambassadors(**options: Any) -> SyncedCollection[Ambassador]:
    """Ambassadors collection"""
    return await use_resource("ambassadors", **options)


async def use_activities(**options: Any) -> SyncedCollection[Activity]:
    """Activities collection"""
    return await use_resource("activities", **options)


__all__ = [
    "controller_key",
    "use_resource",
    "use_users",
    "use_posts",
    "use_campaigns",
    "use_tasks",
    "use_goals",
    "use_assets",
    "use_ambassadors",
    "use_activities",
]
