"""Unit tests for task routes."""

import unittest
from unittest.mock import MagicMock
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException
from fastapi.testclient import TestClient

from api.main import app
from api.models import UserResponse
from api.security import get_current_user_required
from api.dependencies import get_task_repo
from adapter.fake.task_repository import FakeTaskRepository
from domain.model.errors import StoreError
from domain.model.task import Task

BASE = datetime(2020, 6, 1, tzinfo=timezone.utc)


def make_user(user_id: str) -> UserResponse:
    now = datetime.now(timezone.utc)
    return UserResponse(id=user_id, email=f"{user_id}@example.com", created_at=now, updated_at=now)


class TasksRouteTestCase(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.repo = FakeTaskRepository()
        self.current_user = make_user("alice")
        app.dependency_overrides[get_current_user_required] = lambda: self.current_user
        app.dependency_overrides[get_task_repo] = lambda: self.repo

    def tearDown(self):
        app.dependency_overrides.clear()

    def _add(self, task_id: str, owner_id: str = "alice", minutes: int = 0, completed: bool = False) -> Task:
        at = BASE + timedelta(minutes=minutes)
        task = Task(id=task_id, title=f"Task {task_id}", owner_id=owner_id,
                    created_at=at, updated_at=at, completed=completed)
        self.repo.add(task)
        return task


class TestListTasks(TasksRouteTestCase):

    def test_lists_own_tasks_newest_first(self):
        self._add("old", minutes=1)
        self._add("new", minutes=2)
        self._add("foreign", owner_id="bob", minutes=3)

        response = self.client.get("/tasks")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual([t["id"] for t in data["tasks"]], ["new", "old"])
        self.assertEqual(data["filter"], "all")
        self.assertEqual(data["total"], 2)

    def test_active_and_completed_filters(self):
        self._add("todo", minutes=1)
        self._add("done", minutes=2, completed=True)

        active = self.client.get("/tasks", params={"filter": "active"}).json()
        completed = self.client.get("/tasks", params={"filter": "completed"}).json()

        self.assertEqual([t["id"] for t in active["tasks"]], ["todo"])
        self.assertEqual(active["filter"], "active")
        self.assertEqual([t["id"] for t in completed["tasks"]], ["done"])

    def test_unknown_filter_falls_back_to_all(self):
        self._add("todo", minutes=1)
        self._add("done", minutes=2, completed=True)

        response = self.client.get("/tasks", params={"filter": "urgent"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["filter"], "all")
        self.assertEqual(response.json()["total"], 2)

    def test_empty_list(self):
        response = self.client.get("/tasks")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["tasks"], [])

    def test_requires_authentication(self):
        def mock_auth_fail():
            raise HTTPException(status_code=401, detail="Not authenticated")

        app.dependency_overrides[get_current_user_required] = mock_auth_fail

        self.assertEqual(self.client.get("/tasks").status_code, 401)

    def test_store_failure_is_500(self):
        repo = MagicMock()
        repo.find_by_owner.side_effect = StoreError("Failed to list tasks")
        app.dependency_overrides[get_task_repo] = lambda: repo

        response = self.client.get("/tasks")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["detail"], "Failed to list tasks")


class TestCreateTask(TasksRouteTestCase):

    def test_create(self):
        response = self.client.post("/tasks", json={"title": "New task", "completed": False})

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data["title"], "New task")
        self.assertEqual(data["owner_id"], "alice")
        self.assertFalse(data["completed"])
        self.assertIn(data["id"], self.repo.store)

    def test_create_without_title(self):
        for body in ({"title": "", "completed": False}, {}):
            with self.subTest(body=body):
                response = self.client.post("/tasks", json=body)
                self.assertEqual(response.status_code, 422)
        self.assertEqual(self.repo.store, {})

    def test_owner_comes_from_current_user(self):
        response = self.client.post("/tasks", json={"title": "x", "owner_id": "bob"})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["owner_id"], "alice")


class TestShowTask(TasksRouteTestCase):

    def test_show(self):
        self._add("t1")
        response = self.client.get("/tasks/t1")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], "Task t1")

    def test_show_missing(self):
        self.assertEqual(self.client.get("/tasks/nope").status_code, 404)

    def test_show_foreign(self):
        self._add("t1", owner_id="bob")
        self.assertEqual(self.client.get("/tasks/t1").status_code, 403)


class TestUpdateTask(TasksRouteTestCase):

    def test_patch_title(self):
        self._add("t1")

        response = self.client.patch("/tasks/t1", json={"title": "Updated task"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.repo.get_by_id("t1").title, "Updated task")
        self.assertFalse(self.repo.get_by_id("t1").completed)

    def test_put_updates_both_fields(self):
        self._add("t1")

        response = self.client.put("/tasks/t1", json={"title": "Both", "completed": True})

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["completed"])

    def test_null_completed_is_ignored(self):
        self._add("t1", completed=True)

        self.client.patch("/tasks/t1", json={"completed": None})

        self.assertTrue(self.repo.get_by_id("t1").completed)

    def test_empty_title_is_422_and_unchanged(self):
        self._add("t1")

        response = self.client.patch("/tasks/t1", json={"title": ""})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(self.repo.get_by_id("t1").title, "Task t1")

    def test_foreign_task_is_403_and_unchanged(self):
        self._add("t1", owner_id="bob")

        response = self.client.patch("/tasks/t1", json={"title": "mine now"})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.repo.get_by_id("t1").title, "Task t1")

    def test_missing_task_is_404(self):
        self.assertEqual(self.client.patch("/tasks/nope", json={"title": "x"}).status_code, 404)


class TestDeleteTask(TasksRouteTestCase):

    def test_delete(self):
        self._add("t1")

        response = self.client.delete("/tasks/t1")

        self.assertEqual(response.status_code, 200)
        self.assertNotIn("t1", self.repo.store)
        self.assertEqual(self.client.get("/tasks/t1").status_code, 404)

    def test_delete_foreign(self):
        self._add("t1", owner_id="bob")
        self.assertEqual(self.client.delete("/tasks/t1").status_code, 403)
        self.assertIn("t1", self.repo.store)

    def test_delete_missing(self):
        self.assertEqual(self.client.delete("/tasks/nope").status_code, 404)


class TestToggleTask(TasksRouteTestCase):

    def test_toggle_twice(self):
        self._add("t1")

        first = self.client.patch("/tasks/t1/toggle")
        second = self.client.patch("/tasks/t1/toggle")

        self.assertEqual(first.status_code, 200)
        self.assertTrue(first.json()["completed"])
        self.assertFalse(second.json()["completed"])
        self.assertFalse(self.repo.get_by_id("t1").completed)

    def test_toggle_foreign(self):
        self._add("t1", owner_id="bob")
        self.assertEqual(self.client.patch("/tasks/t1/toggle").status_code, 403)
        self.assertFalse(self.repo.get_by_id("t1").completed)

    def test_toggle_missing(self):
        self.assertEqual(self.client.patch("/tasks/nope/toggle").status_code, 404)


if __name__ == '__main__':
    unittest.main()
