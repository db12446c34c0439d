"""
tests/test_api_tasks.py -- Integration tests for the /api/v1/tasks routes.

Every test that touches data registers at least two users so ownership is
checked against real foreign rows. Tokens come from the register endpoint, the
same way a client gets them.

Fixtures used (from conftest.py):
  - api_client: TestClient on the real app, fresh database per test
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import bearer, register_user

TASKS = "/api/v1/tasks"


def _add(client: TestClient, token: str, title: str) -> dict:
    resp = client.post(TASKS, json={"title": title}, headers=bearer(token))
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def alice(api_client: TestClient) -> str:
    return register_user(api_client, "alice@x.com")


@pytest.fixture
def bob(api_client: TestClient) -> str:
    return register_user(api_client, "bob@x.com")


class TestAuthRequired:
    @pytest.mark.parametrize(
        ("method", "path", "body"),
        [
            ("GET", TASKS, None),
            ("POST", TASKS, {"title": "x"}),
            ("PATCH", f"{TASKS}/1", {"completed": True}),
            ("DELETE", f"{TASKS}/1", None),
        ],
    )
    def test_unauthenticated_returns_401(self, api_client: TestClient, method: str, path: str, body) -> None:
        resp = api_client.request(method, path, json=body)
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "unauthorized"

    def test_auth_checked_before_body_validation(self, api_client: TestClient) -> None:
        resp = api_client.post(TASKS, json={"wrong": "shape"})
        assert resp.status_code == 401

    def test_invalid_token_returns_401(self, api_client: TestClient) -> None:
        resp = api_client.get(TASKS, headers=bearer("x.y.z"))
        assert resp.status_code == 401


class TestWalkthrough:
    def test_register_add_list_and_isolation(self, api_client: TestClient) -> None:
        t1 = register_user(api_client, "a@x.com", "p")
        task = _add(api_client, t1, "buy milk")
        assert task["id"] == 1
        assert task["title"] == "buy milk"
        assert task["completed"] is False

        listed = api_client.get(TASKS, headers=bearer(t1)).json()
        assert [t["id"] for t in listed] == [1]

        t2 = register_user(api_client, "b@x.com", "p")
        assert api_client.get(TASKS, headers=bearer(t2)).json() == []


class TestCreate:
    def test_create_sets_owner_from_token(self, api_client: TestClient, alice: str) -> None:
        me = api_client.get("/api/v1/auth/me", headers=bearer(alice)).json()
        task = _add(api_client, alice, "buy milk")
        assert task["user_id"] == me["user_id"]
        assert task["created_at"]

    def test_client_supplied_owner_is_ignored(self, api_client: TestClient, alice: str, bob: str) -> None:
        bob_id = api_client.get("/api/v1/auth/me", headers=bearer(bob)).json()["user_id"]
        resp = api_client.post(TASKS, json={"title": "sneaky", "user_id": bob_id}, headers=bearer(alice))
        assert resp.status_code == 201
        assert resp.json()["user_id"] != bob_id
        assert api_client.get(TASKS, headers=bearer(bob)).json() == []

    @pytest.mark.parametrize("body", [{}, {"title": ""}, {"title": "   "}, {"title": None}, {"title": 42}])
    def test_invalid_title_returns_400(self, api_client: TestClient, alice: str, body: dict) -> None:
        resp = api_client.post(TASKS, json=body, headers=bearer(alice))
        assert resp.status_code == 400, resp.text
        assert resp.json()["error"]["code"] == "validation_error"
        assert api_client.get(TASKS, headers=bearer(alice)).json() == []


class TestList:
    def test_list_newest_first(self, api_client: TestClient, alice: str) -> None:
        ids = [_add(api_client, alice, t)["id"] for t in ["one", "two", "three"]]
        listed = api_client.get(TASKS, headers=bearer(alice)).json()
        assert [t["id"] for t in listed] == list(reversed(ids))

    def test_list_stable_across_calls(self, api_client: TestClient, alice: str) -> None:
        for t in ["one", "two", "three"]:
            _add(api_client, alice, t)
        first = api_client.get(TASKS, headers=bearer(alice)).json()
        second = api_client.get(TASKS, headers=bearer(alice)).json()
        assert first == second

    def test_list_only_own_tasks(self, api_client: TestClient, alice: str, bob: str) -> None:
        _add(api_client, alice, "alice 1")
        _add(api_client, bob, "bob 1")
        _add(api_client, alice, "alice 2")
        titles = [t["title"] for t in api_client.get(TASKS, headers=bearer(alice)).json()]
        assert titles == ["alice 2", "alice 1"]


class TestUpdate:
    def test_patch_flips_completed(self, api_client: TestClient, alice: str) -> None:
        task = _add(api_client, alice, "buy milk")
        resp = api_client.patch(f"{TASKS}/{task['id']}", json={"completed": True}, headers=bearer(alice))
        assert resp.status_code == 200
        assert resp.json()["completed"] is True
        listed = api_client.get(TASKS, headers=bearer(alice)).json()
        assert listed[0]["completed"] is True

    @pytest.mark.parametrize("body", [{}, {"completed": "true"}, {"completed": 1}, {"completed": None}])
    def test_non_boolean_completed_returns_400(self, api_client: TestClient, alice: str, body: dict) -> None:
        task = _add(api_client, alice, "buy milk")
        resp = api_client.patch(f"{TASKS}/{task['id']}", json=body, headers=bearer(alice))
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "validation_error"

    def test_patch_foreign_task_returns_404_and_changes_nothing(
        self, api_client: TestClient, alice: str, bob: str
    ) -> None:
        task = _add(api_client, alice, "alice task")
        resp = api_client.patch(f"{TASKS}/{task['id']}", json={"completed": True}, headers=bearer(bob))
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "not_found"
        assert api_client.get(TASKS, headers=bearer(alice)).json() == [task]

    def test_patch_missing_and_foreign_ids_look_the_same(self, api_client: TestClient, alice: str, bob: str) -> None:
        task = _add(api_client, alice, "alice task")
        foreign = api_client.patch(f"{TASKS}/{task['id']}", json={"completed": True}, headers=bearer(bob))
        missing = api_client.patch(f"{TASKS}/99999", json={"completed": True}, headers=bearer(bob))
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()

    def test_non_integer_id_returns_400(self, api_client: TestClient, alice: str) -> None:
        resp = api_client.patch(f"{TASKS}/abc", json={"completed": True}, headers=bearer(alice))
        assert resp.status_code == 400

    def test_patch_id_wider_than_64_bits_returns_404(self, api_client: TestClient, alice: str) -> None:
        resp = api_client.patch(f"{TASKS}/{2**70}", json={"completed": True}, headers=bearer(alice))
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "not_found"


class TestDelete:
    def test_delete_returns_204_and_removes(self, api_client: TestClient, alice: str) -> None:
        task = _add(api_client, alice, "buy milk")
        resp = api_client.delete(f"{TASKS}/{task['id']}", headers=bearer(alice))
        assert resp.status_code == 204
        assert resp.content == b""
        assert api_client.get(TASKS, headers=bearer(alice)).json() == []

    def test_delete_twice_is_idempotent(self, api_client: TestClient, alice: str) -> None:
        task = _add(api_client, alice, "buy milk")
        first = api_client.delete(f"{TASKS}/{task['id']}", headers=bearer(alice))
        second = api_client.delete(f"{TASKS}/{task['id']}", headers=bearer(alice))
        assert first.status_code == second.status_code == 204

    def test_delete_foreign_task_is_noop(self, api_client: TestClient, alice: str, bob: str) -> None:
        task = _add(api_client, alice, "alice task")
        resp = api_client.delete(f"{TASKS}/{task['id']}", headers=bearer(bob))
        assert resp.status_code == 204
        assert api_client.get(TASKS, headers=bearer(alice)).json() == [task]

    def test_delete_id_wider_than_64_bits_returns_204(self, api_client: TestClient, alice: str) -> None:
        task = _add(api_client, alice, "keep")
        resp = api_client.delete(f"{TASKS}/{2**70}", headers=bearer(alice))
        assert resp.status_code == 204
        assert api_client.get(TASKS, headers=bearer(alice)).json() == [task]


class TestCrossUserSweep:
    def test_bob_cannot_touch_any_of_alices_tasks(self, api_client: TestClient, alice: str, bob: str) -> None:
        alice_tasks = [_add(api_client, alice, f"task {i}") for i in range(4)]
        for task in alice_tasks:
            assert (
                api_client.patch(f"{TASKS}/{task['id']}", json={"completed": True}, headers=bearer(bob)).status_code
                == 404
            )
            assert api_client.delete(f"{TASKS}/{task['id']}", headers=bearer(bob)).status_code == 204
        assert api_client.get(TASKS, headers=bearer(bob)).json() == []
        assert api_client.get(TASKS, headers=bearer(alice)).json() == list(reversed(alice_tasks))
