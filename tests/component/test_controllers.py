"""
Controller Component Tests

use_* controllers end to end: factory-built clients over a mocked HTTP
client, bound into synced collections with test retry plumbing.
"""
import pytest

from core.errors import error_for_status
from datasync.store import SyncStore
from resources.clients import TaskClient
from resources.controllers import (
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
from resources.factory import ResourceClientFactory, get_client_factory, set_client_factory
from resources.models import Post, Task
from tests.fixtures import make_envelope, make_list_envelope, make_post_record, make_task_record

pytestmark = [pytest.mark.component, pytest.mark.asyncio]

BASE = "http://test/api"


@pytest.fixture
def clients(api_config, mock_http_client):
    return ResourceClientFactory(config=api_config, http_client=mock_http_client)


@pytest.fixture
def options(clients, executor, sync_config):
    """Keyword arguments every controller call in this module uses"""
    return {"clients": clients, "executor": executor, "config": sync_config}


# =============================================================================
# Factory
# =============================================================================

class TestResourceClientFactory:
    """Client construction"""

    async def test_builds_client_once_per_resource(self, clients, mock_http_client):
        tasks = clients.get("tasks")

        assert isinstance(tasks, TaskClient)
        assert clients.get("tasks") is tasks
        assert tasks.client is mock_http_client

    async def test_unknown_resource(self, clients):
        with pytest.raises(ValueError, match="Unknown resource: invoices"):
            clients.get("invoices")

    async def test_close_keeps_injected_http_client_open(self, clients, mock_http_client):
        clients.get("posts")
        await clients.close()
        assert mock_http_client.closed is False

    async def test_process_wide_factory_can_be_replaced(self, clients):
        set_client_factory(clients)
        try:
            assert get_client_factory() is clients
        finally:
            set_client_factory(None)


# =============================================================================
# Controllers
# =============================================================================

class TestControllers:
    """Opening collections"""

    @pytest.mark.parametrize("controller,resource", [
        (use_users, "users"),
        (use_posts, "posts"),
        (use_campaigns, "campaigns"),
        (use_tasks, "tasks"),
        (use_goals, "goals"),
        (use_assets, "assets"),
        (use_ambassadors, "ambassadors"),
        (use_activities, "activities"),
    ])
    async def test_each_controller_lists_its_resource(self, controller, resource, options, mock_http_client):
        mock_http_client.set_response(
            "GET", f"{BASE}/{resource}", json_data=make_list_envelope([{"_id": "r1"}])
        )

        collection = await controller(**options)

        assert collection.binding.resource == resource
        assert [item.id for item in collection.items] == ["r1"]
        mock_http_client.assert_request_made("GET", f"{BASE}/{resource}")

    async def test_only_tasks_support_soft_delete(self, options):
        tasks = await use_tasks(**options)
        posts = await use_posts(**options)

        assert tasks.binding.supports("trash") is True
        assert posts.binding.supports("trash") is False

    async def test_params_reach_every_fetch(self, options, mock_http_client):
        tasks = await use_tasks(params={"status": "OPEN"}, **options)
        await tasks.refresh()

        gets = mock_http_client.get_requests("GET")
        assert len(gets) == 2
        assert all(request["params"] == {"status": "OPEN"} for request in gets)

    async def test_uses_process_wide_factory_by_default(self, clients, executor, sync_config, mock_http_client):
        set_client_factory(clients)
        try:
            await use_resource("goals", executor=executor, config=sync_config)
        finally:
            set_client_factory(None)

        mock_http_client.assert_request_made("GET", f"{BASE}/goals")


class TestTasksFlow:
    """Tasks over HTTP, soft delete included"""

    async def test_initial_fetch_retries_server_errors(self, options, mock_http_client, recording_sleep):
        mock_http_client.queue_response("GET", f"{BASE}/tasks", status_code=503, json_data={"success": False})
        mock_http_client.set_response(
            "GET", f"{BASE}/tasks", json_data=make_list_envelope([make_task_record("t1")])
        )

        tasks = await use_tasks(**options)

        assert [task.id for task in tasks.items] == ["t1"]
        assert isinstance(tasks.items[0], Task)
        assert recording_sleep.delays_ms == [1000]

    async def test_trash_refetches_listing(self, options, mock_http_client):
        mock_http_client.set_response(
            "GET", f"{BASE}/tasks",
            json_data=make_list_envelope([make_task_record("t1"), make_task_record("t2")]),
        )
        tasks = await use_tasks(**options)
        mock_http_client.queue_response(
            "GET", f"{BASE}/tasks", json_data=make_list_envelope([make_task_record("t2")])
        )

        assert await tasks.trash("t1") is True

        mock_http_client.assert_request_made("PUT", f"{BASE}/tasks/t1/trash")
        assert len(mock_http_client.get_requests("GET")) == 2
        assert [task.id for task in tasks.items] == ["t2"]


class TestPostsFlow:
    """Posts over HTTP"""

    async def test_create_appends_server_item(self, options, mock_http_client):
        mock_http_client.set_response("GET", f"{BASE}/posts", json_data=make_list_envelope([make_post_record("p1")]))
        mock_http_client.set_response(
            "POST", f"{BASE}/posts", json_data=make_envelope(make_post_record("p2", title="Recap"))
        )
        posts = await use_posts(**options)

        created = await posts.create({"title": "Recap"})

        assert isinstance(created, Post)
        assert [post.id for post in posts.items] == ["p1", "p2"]

    async def test_validation_error_is_shown_not_retried(self, options, mock_http_client, recording_sleep):
        mock_http_client.set_response(
            "POST", f"{BASE}/posts", status_code=422,
            json_data={"success": False, "message": "Caption is too long"},
        )
        posts = await use_posts(**options)

        assert await posts.create({"caption": "x" * 5000}) is None

        assert posts.error == "Caption is too long"
        assert len(mock_http_client.get_requests("POST")) == 1
        assert recording_sleep.delays == []

    async def test_forbidden_delete(self, options, mock_http_client):
        mock_http_client.set_response("GET", f"{BASE}/posts", json_data=make_list_envelope([make_post_record("p1")]))
        mock_http_client.set_response("DELETE", f"{BASE}/posts/p1", status_code=403, json_data={"success": False})
        posts = await use_posts(**options)

        assert await posts.remove("p1") is False

        assert posts.find("p1") is not None
        assert posts.error == "Access denied while deleting post. You don't have permission for this action."

    async def test_trash_is_unavailable_for_posts(self, options, mock_http_client):
        posts = await use_posts(**options)

        assert await posts.trash("p1") is False
        assert mock_http_client.get_requests("PUT") == []


# =============================================================================
# Shared store
# =============================================================================

class TestSharedControllers:
    """Controllers backed by a SyncStore"""

    async def test_consumers_share_one_fetch(self, options, mock_http_client):
        store = SyncStore()
        mock_http_client.set_response("GET", f"{BASE}/posts", json_data=make_list_envelope([make_post_record("p1")]))

        first = await use_posts(store=store, **options)
        second = await use_posts(store=store, **options)

        assert first is second
        assert len(mock_http_client.get_requests("GET")) == 1
        assert store.ref_count(controller_key("posts")) == 2

    async def test_different_queries_are_different_collections(self, options):
        store = SyncStore()

        open_tasks = await use_tasks(store=store, params={"status": "OPEN"}, **options)
        done_tasks = await use_tasks(store=store, params={"status": "DONE"}, **options)

        assert open_tasks is not done_tasks
        assert controller_key("tasks", {"status": "OPEN"}) in store

    async def test_release_disposes_last_consumer(self, options):
        store = SyncStore()
        posts = await use_posts(store=store, **options)

        store.release(controller_key("posts"))

        assert posts.disposed is True


class TestControllerKey:
    """Store keys"""

    async def test_plain_resource(self):
        assert controller_key("posts") == "posts"
        assert controller_key("posts", {}) == "posts"

    async def test_params_sorted_and_unset_dropped(self):
        key = controller_key("tasks", {"status": "OPEN", "assignee": "u1", "search": None})
        assert key == "tasks?assignee=u1&status=OPEN"


async def test_error_for_forbidden_matches_entity_label(options, mock_http_client):
    """Collection errors name the resource"""
    mock_http_client.set_error(error_for_status(403, "Forbidden"))

    goals = await use_goals(**options)

    assert goals.items == []
    assert goals.error == "Access denied while fetching goal. You don't have permission for this action."


async def test_missing_task_message_uses_singular_label(options, mock_http_client):
    """Not-found errors name one task, not the collection"""
    mock_http_client.set_response(
        "GET", f"{BASE}/tasks/t404", status_code=404, json_data={"success": False}
    )
    tasks = await use_tasks(**options)

    assert await tasks.get("t404") is None
    assert tasks.error == "Task not found."


async def test_malformed_record_fails_once_with_readable_error(options, mock_http_client, recording_sleep):
    """A 200 listing with an unparseable record is not retried"""
    mock_http_client.set_response(
        "GET", f"{BASE}/tasks", json_data={"success": True, "data": [{"title": "no id"}]}
    )

    tasks = await use_tasks(**options)

    assert len(mock_http_client.get_requests("GET")) == 1
    assert recording_sleep.delays == []
    assert tasks.items == []
    assert tasks.error == "The server returned invalid task data."
