"""Authorization gate for actions on existing tasks.

Only the owner of a task may read, update, destroy or toggle it. The gate
itself answers yes/no; ``require_access`` turns a "no" into the error the
caller should see.
"""

from domain.model.errors import ForbiddenError, NotFoundError
from domain.model.task import Task, TaskAction


def authorize(user_id: str, task: Task | None, action: TaskAction) -> bool:
    """Allow iff the task exists and belongs to ``user_id``.

    Every TaskAction currently has the same rule.
    """
    return task is not None and task.is_owned_by(user_id)


def require_access(user_id: str, task: Task | None, action: TaskAction) -> Task:
    """Return ``task`` if ``user_id`` may perform ``action`` on it.

    Raises:
        NotFoundError: task does not exist
        ForbiddenError: task belongs to another user
    """
    if authorize(user_id, task, action):
        return task
    if task is None:
        raise NotFoundError("Task not found")
    raise ForbiddenError(f"You don't have permission to {action.value} this task")
