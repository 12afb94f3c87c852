"""
TodoApiClient and TodoListState.

The happy paths run against the real app through TestClient (which is an
httpx.Client); failure paths use httpx.MockTransport.
"""

import json

import httpx
import pytest

from app.client.api import TodoApiClient, TodoApiError
from app.client.state import TodoListState

pytestmark = pytest.mark.api


@pytest.fixture
def api(client):
    return TodoApiClient(client=client)


@pytest.fixture
def state(api):
    return TodoListState(api=api)


class FakeServer:
    """Minimal stand-in for the API with switchable failures."""

    def __init__(self, todos=None):
        self.todos = list(todos or [])
        self.requests = []
        self.fail = set()

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        if request.method in self.fail:
            return httpx.Response(500, json={"success": False, "error": "Failed"})
        if request.method == "GET":
            return httpx.Response(200, json={"success": True, "data": self.todos, "count": len(self.todos)})
        if request.method == "PUT":
            todo_id = int(request.url.path.rsplit("/", 1)[1])
            record = next(todo for todo in self.todos if todo["id"] == todo_id)
            record.update(json.loads(request.content))
            return httpx.Response(200, json={"success": True, "data": record})
        return httpx.Response(404, json={"success": False, "error": "Route not found"})

    def client(self) -> TodoApiClient:
        http = httpx.Client(transport=httpx.MockTransport(self.handler), base_url="http://api.test")
        return TodoApiClient(client=http)


def todo(todo_id, title="Test", completed=False, priority="medium"):
    return {
        "id": todo_id,
        "title": title,
        "description": "",
        "completed": completed,
        "priority": priority,
        "created_at": "2026-01-01T00:00:00Z",
        "updated_at": "2026-01-01T00:00:00Z",
    }


def test_api_client_crud_against_app(api):
    assert api.health()["status"] == "OK"
    assert api.list() == []

    created = api.create({"title": "Write docs", "priority": "high"})
    assert api.get(created["id"]) == created

    updated = api.update(created["id"], {"completed": True})
    assert updated["completed"] is True

    api.delete(created["id"])
    with pytest.raises(TodoApiError) as exc_info:
        api.get(created["id"])
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Todo not found"


def test_api_client_surfaces_validation_details(api):
    with pytest.raises(TodoApiError) as exc_info:
        api.create({"description": "no title"})

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Validation error"
    assert any("title" in detail for detail in exc_info.value.details)


def test_api_client_delete_all_returns_count(api):
    api.create({"title": "one"})
    api.create({"title": "two"})

    assert api.delete_all() == 2
    assert api.list() == []


def test_api_client_wraps_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://api.test")
    api = TodoApiClient(client=http)

    with pytest.raises(TodoApiError) as exc_info:
        api.list()
    assert exc_info.value.status_code is None


def test_state_load_add_toggle_remove(state):
    state.load()
    assert state.todos == [] and state.loading is False and state.error == ""

    first = state.add("first")
    second = state.add("second", description="more", priority="high")
    assert [t["id"] for t in state.todos] == [second["id"], first["id"]]

    state.toggle_complete(first["id"])
    assert state.todos[1]["completed"] is True
    assert state.stats == {"total": 2, "completed": 1, "pending": 1}

    state.remove(second["id"])
    assert [t["id"] for t in state.todos] == [first["id"]]


def test_state_add_skips_blank_title(state, api):
    assert state.add("   ") is None
    assert state.todos == []
    assert api.list() == []


def test_state_add_failure_sets_error(state):
    assert state.add("a" * 201) is None
    assert state.error == "Failed to create todo"


def test_state_edit_save_replaces_with_server_record(state):
    created = state.add("Draft me", description="old", priority="low")

    state.start_edit(created["id"])
    assert state.editing_id == created["id"]
    assert state.draft == {"title": "Draft me", "description": "old", "priority": "low"}

    state.draft["title"] = "  Edited  "
    state.save_edit()

    assert state.editing_id is None
    assert state.todos[0]["title"] == "Edited"
    assert state.todos[0]["id"] == created["id"]


def test_state_cancel_edit_makes_no_request():
    server = FakeServer([todo(1)])
    state = TodoListState(api=server.client())
    state.load()
    sent = len(server.requests)

    state.start_edit(1)
    state.draft["title"] = "changed"
    state.cancel_edit()

    assert len(server.requests) == sent
    assert state.editing_id is None
    assert state.draft == {"title": "", "description": "", "priority": "medium"}
    assert state.todos[0]["title"] == "Test"


def test_state_failed_update_keeps_loaded_todos():
    server = FakeServer([todo(1), todo(2, completed=True)])
    state = TodoListState(api=server.client())
    state.load()
    loaded = [dict(t) for t in state.todos]

    server.fail.add("PUT")
    state.toggle_complete(1)

    assert state.error == "Failed to update todo"
    assert state.todos == loaded


def test_state_failed_load_keeps_previous_list():
    server = FakeServer([todo(1)])
    state = TodoListState(api=server.client())
    state.load()

    server.fail.add("GET")
    state.load()

    assert state.error == "Failed to fetch todos"
    assert [t["id"] for t in state.todos] == [1]
    assert state.loading is False


def test_state_failed_delete_keeps_todo():
    server = FakeServer([todo(1)])
    state = TodoListState(api=server.client())
    state.load()

    server.fail.add("DELETE")
    state.remove(1)

    assert state.error == "Failed to delete todo"
    assert [t["id"] for t in state.todos] == [1]


def test_state_failed_save_keeps_draft():
    server = FakeServer([todo(1)])
    state = TodoListState(api=server.client())
    state.load()
    state.start_edit(1)
    state.draft["title"] = "new title"

    server.fail.add("PUT")
    state.save_edit()

    assert state.error == "Failed to update todo"
    assert state.editing_id == 1
    assert state.draft["title"] == "new title"
