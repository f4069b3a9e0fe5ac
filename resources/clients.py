"""
Resource Clients

One client per remote resource. Every resource follows the same REST
convention:

    GET    /{resource}          list (page, limit, search, entity filters)
    GET    /{resource}/{id}     fetch one
    POST   /{resource}          create
    PUT    /{resource}/{id}     update
    DELETE /{resource}/{id}     delete

Tasks additionally expose PUT /tasks/{id}/trash and PUT /tasks/{id}/restore.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type

from pydantic import BaseModel, ValidationError
from pydantic_core import to_jsonable_python

from core.api_client import BaseApiClient
from core.errors import EnvelopeError
from datasync.models import ApiEnvelope, ItemT, ListEnvelope, Page, SyncItem

from .models import (
    Activity,
    Ambassador,
    Asset,
    Campaign,
    Goal,
    Post,
    Role,
    Task,
    User,
)

logger = logging.getLogger(__name__)


def to_payload(data: Any) -> Dict[str, Any]:
    """Serialize a create/update input (model or dict) to a JSON body"""
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, exclude_unset=True, mode="json")
    return to_jsonable_python(dict(data))


def clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Drop unset query parameters"""
    if not params:
        return None
    return {key: value for key, value in params.items() if value is not None}


class ResourceClient(BaseApiClient, Generic[ItemT]):
    """
    CRUD client for one resource

    Subclasses set ``resource`` (path segment), ``model`` (entity model)
    and ``entity`` (singular label used in messages).
    """

    resource: str = None
    model: Type[SyncItem] = SyncItem
    entity: str = None
    supports_soft_delete: bool = False

    def __init__(self, **kwargs: Any):
        if not self.resource:
            raise ValueError(f"{self.__class__.__name__} must define 'resource'")
        super().__init__(**kwargs)

    @property
    def path(self) -> str:
        return f"/{self.resource}"

    @property
    def label(self) -> str:
        return self.entity or self.resource

    def _parse(self, data: Any) -> ItemT:
        """
        Validate one record from a response

        Raises:
            EnvelopeError: The API answered with a record that does not fit the model
        """
        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Malformed {self.label} in response: {e}")
            raise EnvelopeError(
                f"The server returned invalid {self.label} data.", payload=data
            ) from e

    # =========================================================================
    # CRUD
    # =========================================================================

    async def list_page(self, params: Optional[Dict[str, Any]] = None) -> Page[ItemT]:
        """
        Fetch one page of the resource

        Args:
            params: Query parameters (page, limit, search, entity filters)

        Returns:
            Page with parsed items and the pagination fields the API sent
        """
        body = await self.get(self.path, params=clean_params(params))
        envelope = ListEnvelope.model_validate(body)
        items = [self._parse(record) for record in envelope.data]
        logger.debug(f"Listed {len(items)} {self.resource}")
        return Page(
            items=items,
            total=envelope.total,
            page=envelope.page,
            pages=envelope.pages,
            count=envelope.count,
        )

    async def list_items(self, params: Optional[Dict[str, Any]] = None) -> List[ItemT]:
        """Fetch the resource listing as a list of items"""
        page = await self.list_page(params)
        return page.items

    async def get_item(self, item_id: str) -> Optional[ItemT]:
        """Fetch one item, None when the envelope carries no data"""
        body = await self.get(f"{self.path}/{item_id}")
        envelope = ApiEnvelope.model_validate(body)
        return self._parse(envelope.data) if envelope.data else None

    async def create_item(self, data: Any) -> ItemT:
        """
        Create an item

        Raises:
            EnvelopeError: The API confirmed the call but returned no item
        """
        body = await self.post(self.path, json=to_payload(data))
        envelope = ApiEnvelope.model_validate(body)
        if not envelope.data:
            raise EnvelopeError(f"Create {self.label} returned no {self.label}", payload=body)
        item = self._parse(envelope.data)
        logger.info(f"Created {self.label} {item.id}")
        return item

    async def update_item(self, item_id: str, patch: Any) -> Optional[ItemT]:
        """Update an item, None when the envelope carries no data"""
        body = await self.put(f"{self.path}/{item_id}", json=to_payload(patch))
        envelope = ApiEnvelope.model_validate(body)
        if not envelope.data:
            return None
        return self._parse(envelope.data)

    async def delete_item(self, item_id: str) -> bool:
        """Delete an item; failures raise"""
        await self.delete(f"{self.path}/{item_id}")
        logger.info(f"Deleted {self.label} {item_id}")
        return True


class UserClient(ResourceClient[User]):
    """Client for /users"""
    resource = "users"
    model = User
    entity = "user"

    async def update_role(self, user_id: str, role: Role) -> Optional[User]:
        """Change a user's role"""
        body = await self.put(f"{self.path}/{user_id}/role", json={"role": Role(role).value})
        envelope = ApiEnvelope.model_validate(body)
        return self._parse(envelope.data) if envelope.data else None


class PostClient(ResourceClient[Post]):
    """Client for /posts"""
    resource = "posts"
    model = Post
    entity = "post"

    async def publish(self, post_id: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Publish a post now; returns the publish result from the API"""
        body = await self.post(f"{self.path}/{post_id}/publish", json=to_payload(data or {}))
        envelope = ApiEnvelope.model_validate(body)
        logger.info(f"Published post {post_id}")
        return envelope.data or {}


class CampaignClient(ResourceClient[Campaign]):
    """Client for /campaigns"""
    resource = "campaigns"
    model = Campaign
    entity = "campaign"


class TaskClient(ResourceClient[Task]):
    """Client for /tasks, with trash/restore"""
    resource = "tasks"
    model = Task
    entity = "task"
    supports_soft_delete = True

    async def trash_item(self, item_id: str) -> bool:
        """Move a task to the trash"""
        await self.put(f"{self.path}/{item_id}/trash")
        logger.info(f"Trashed task {item_id}")
        return True

    async def restore_item(self, item_id: str) -> bool:
        """Restore a trashed task"""
        await self.put(f"{self.path}/{item_id}/restore")
        logger.info(f"Restored task {item_id}")
        return True


class GoalClient(ResourceClient[Goal]):
    """Client for /goals"""
    resource = "goals"
    model = Goal
    entity = "goal"


class AssetClient(ResourceClient[Asset]):
    """Client for /assets"""
    resource = "assets"
    model = Asset
    entity = "asset"


class AmbassadorClient(ResourceClient[Ambassador]):
    """Client for /ambassadors"""
    resource = "ambassadors"
    model = Ambassador
    entity = "ambassador"


class ActivityClient(ResourceClient[Activity]):
    """Client for /activities"""
    resource = "activities"
    model = Activity
    entity = "activity"


RESOURCE_CLIENTS: Dict[str, Type[ResourceClient]] = {
    client.resource: client
    for client in (
        UserClient,
        PostClient,
        CampaignClient,
        TaskClient,
        GoalClient,
        AssetClient,
        AmbassadorClient,
        ActivityClient,
    )
}


__all__ = [
    "ResourceClient",
    "UserClient",
    "PostClient",
    "CampaignClient",
    "TaskClient",
    "GoalClient",
    "AssetClient",
    "AmbassadorClient",
    "ActivityClient",
    "RESOURCE_CLIENTS",
    "to_payload",
    "clean_params",
]
