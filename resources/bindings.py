"""
Resource Bindings

Wires a resource client's CRUD methods into a ResourceBinding. Only the
tasks client contributes trash/restore.
"""

from functools import partial
from typing import Any, Dict, Optional

from datasync.protocols import ResourceBinding

from .clients import ResourceClient


def bind_resource(
    client: ResourceClient,
    params: Optional[Dict[str, Any]] = None,
) -> ResourceBinding:
    """
    Build the binding for one resource client

    Args:
        client: Resource client performing the round trips
        params: Query parameters sent with every list call (filters, search, paging)

    Returns:
        ResourceBinding with fetch_all/fetch_one/create/update/remove, plus
        trash/restore when the resource supports soft delete
    """
    return ResourceBinding(
        resource=client.resource,
        entity=client.label,
        fetch_all=partial(client.list_items, dict(params) if params else None),
        fetch_one=client.get_item,
        create=client.create_item,
        update=client.update_item,
        remove=client.delete_item,
        trash=client.trash_item if client.supports_soft_delete else None,
        restore=client.restore_item if client.supports_soft_delete else None,
    )


__all__ = ["bind_resource"]
