"""Ownership & filter engine for task listings.

A listing is built in three stages, each usable on its own:

1. ``scope_to_owner``      keep only the requesting user's tasks
2. ``apply_status_filter`` keep tasks matching the filter keyword
3. ``sort_newest_first``   order by created_at descending, id as tie-break

The repository is asked for the owner's tasks with the status predicate
already applied so the store can use its indexes. The stages are then run
over the result, which keeps the ownership guarantee independent of how a
given adapter builds its query.
"""

from typing import Iterable

from domain.model.errors import AuthenticationRequiredError
from domain.model.task import Task, TaskFilter, Tasks
from port.task_repository import TaskRepository


def scope_to_owner(tasks: Iterable[Task], user_id: str) -> list[Task]:
    return [t for t in tasks if t.is_owned_by(user_id)]


def apply_status_filter(tasks: Iterable[Task], task_filter: TaskFilter) -> list[Task]:
    wanted = task_filter.completed
    if wanted is None:
        return list(tasks)
    return [t for t in tasks if t.completed == wanted]


def sort_newest_first(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=lambda t: (t.created_at, t.id), reverse=True)


def list_tasks(
    repo: TaskRepository,
    user_id: str | None,
    filter_keyword: str | None = None,
) -> Tasks:
    """Return the user's tasks for ``filter_keyword``, newest first.

    Unknown keywords resolve to ``all``. An empty result is not an error.

    Raises:
        AuthenticationRequiredError: no user given
    """
    if not user_id:
        raise AuthenticationRequiredError("A signed-in user is required")

    task_filter = TaskFilter.parse(filter_keyword)
    candidates = repo.find_by_owner(user_id, completed=task_filter.completed)

    tasks = scope_to_owner(candidates, user_id)
    tasks = apply_status_filter(tasks, task_filter)
    return Tasks(items=sort_newest_first(tasks), filter=task_filter)
