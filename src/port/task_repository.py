"""Port definition for TaskRepository."""

from typing import Protocol

from domain.model.task import Task


class TaskRepository(Protocol):
    """Persistent store of tasks.

    Implementations raise StoreError when the backing store fails.
    """

    def add(self, task: Task) -> None: ...

    def get_by_id(self, task_id: str) -> Task | None: ...

    def find_by_owner(
        self,
        owner_id: str,
        completed: bool | None = None,
    ) -> list[Task]:
        """Tasks owned by ``owner_id``, newest first.

        ``completed`` restricts the result to one status when not None.
        """
        ...

    def update(self, task: Task) -> bool:
        """Persist title, completed and updated_at. Return False if the task is gone."""
        ...

    def delete(self, task_id: str) -> bool:
        """Remove the task permanently. Return False if it did not exist."""
        ...

    def delete_by_owner(self, owner_id: str) -> int:
        """Remove every task of ``owner_id``. Return the number removed."""
        ...
