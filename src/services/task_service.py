"""Task lifecycle — create, view, update, destroy, toggle.

Pure business logic with no HTTP dependencies. The current user is always
passed in explicitly; every operation on an existing task goes through the
authorization gate before touching it.
"""

import logging

from domain.model.errors import AuthenticationRequiredError, NotFoundError
from domain.model.task import Task, TaskAction
from port.task_repository import TaskRepository
from services.authorization import require_access

logger = logging.getLogger(__name__)


def _require_user(user_id: str | None) -> str:
    if not user_id:
        raise AuthenticationRequiredError("A signed-in user is required")
    return user_id


def _load(repo: TaskRepository, user_id: str | None, task_id: str, action: TaskAction) -> Task:
    user_id = _require_user(user_id)
    return require_access(user_id, repo.get_by_id(task_id), action)


def _save(repo: TaskRepository, task: Task) -> None:
    # The task can vanish between lookup and write (concurrent destroy)
    if not repo.update(task):
        raise NotFoundError("Task not found")


def create_task(
    repo: TaskRepository,
    user_id: str | None,
    title: str | None,
    completed: bool = False,
) -> Task:
    """Create a task owned by ``user_id``.

    Raises:
        ValidationError: title is empty or missing; nothing is stored
    """
    user_id = _require_user(user_id)
    task = Task.create(owner_id=user_id, title=title, completed=completed)
    repo.add(task)

    logger.info("Task created", extra={"taskId": task.id, "userId": user_id})
    return task


def get_task(repo: TaskRepository, user_id: str | None, task_id: str) -> Task:
    return _load(repo, user_id, task_id, TaskAction.READ)


def update_task(
    repo: TaskRepository,
    user_id: str | None,
    task_id: str,
    fields: dict,
) -> Task:
    """Apply the permitted ``fields`` (title, completed) to a task.

    Either every permitted field is written or none is.

    Raises:
        NotFoundError: no task with ``task_id``
        ForbiddenError: task belongs to another user
        ValidationError: resulting title would be empty
    """
    task = _load(repo, user_id, task_id, TaskAction.UPDATE)
    updated = task.with_changes(fields)
    _save(repo, updated)

    logger.info("Task updated", extra={"taskId": task_id, "userId": user_id})
    return updated


def destroy_task(repo: TaskRepository, user_id: str | None, task_id: str) -> None:
    """Permanently remove a task."""
    _load(repo, user_id, task_id, TaskAction.DESTROY)
    if not repo.delete(task_id):
        raise NotFoundError("Task not found")

    logger.info("Task destroyed", extra={"taskId": task_id, "userId": user_id})


def toggle_task(repo: TaskRepository, user_id: str | None, task_id: str) -> Task:
    """Flip the completed flag. Calling it twice restores the original state."""
    task = _load(repo, user_id, task_id, TaskAction.TOGGLE)
    task.toggle()
    _save(repo, task)

    logger.info("Task toggled", extra={"taskId": task_id, "userId": user_id, "completed": task.completed})
    return task
