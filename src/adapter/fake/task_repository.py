"""In-memory implementation of TaskRepository for testing."""

from dataclasses import replace

from domain.model.task import Task


class FakeTaskRepository:
    def __init__(self):
        self.store: dict[str, Task] = {}

    # ── write operations ─────────────────────────────────────

    def add(self, task: Task) -> None:
        self.store[task.id] = replace(task)

    def update(self, task: Task) -> bool:
        stored = self.store.get(task.id)
        if not stored:
            return False

        stored.title = task.title
        stored.completed = task.completed
        stored.updated_at = task.updated_at
        return True

    def delete(self, task_id: str) -> bool:
        return self.store.pop(task_id, None) is not None

    def delete_by_owner(self, owner_id: str) -> int:
        doomed = [t.id for t in self.store.values() if t.owner_id == owner_id]
        for task_id in doomed:
            del self.store[task_id]
        return len(doomed)

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, task_id: str) -> Task | None:
        task = self.store.get(task_id)
        return replace(task) if task else None

    def find_by_owner(
        self,
        owner_id: str,
        completed: bool | None = None,
    ) -> list[Task]:
        results = [t for t in self.store.values() if t.owner_id == owner_id]
        if completed is not None:
            results = [t for t in results if t.completed == completed]

        results.sort(key=lambda t: (t.created_at, t.id), reverse=True)
        return [replace(t) for t in results]
