"""
Marketing platform resources

Entity models, resource clients, bindings and the per-entity controllers
built on the datasync layer.
"""

from .bindings import bind_resource
from .clients import (
    RESOURCE_CLIENTS,
    ActivityClient,
    AmbassadorClient,
    AssetClient,
    CampaignClient,
    GoalClient,
    PostClient,
    ResourceClient,
    TaskClient,
    UserClient,
)
from .controllers import (
    controller_key,
    use_activities,
    use_ambassadors,
    use_assets,
    use_campaigns,
    use_goals,
    use_posts,
    use_resource,
    use_tasks,
    use_users,
)
from .factory import ResourceClientFactory, get_client_factory, set_client_factory

__all__ = [
    "RESOURCE_CLIENTS",
    "ResourceClient",
    "UserClient",
    "PostClient",
    "CampaignClient",
    "TaskClient",
    "GoalClient",
    "AssetClient",
    "AmbassadorClient",
    "ActivityClient",
    "bind_resource",
    "ResourceClientFactory",
    "get_client_factory",
    "set_client_factory",
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
