"""Task routes.

Endpoints:
- GET    /tasks?filter=all|active|completed: List the current user's tasks
- GET    /tasks/{id}: Get one task
- POST   /tasks: Create a task
- PATCH  /tasks/{id} (or PUT): Update title and/or completed
- DELETE /tasks/{id}: Delete a task
- PATCH  /tasks/{id}/toggle: Flip completed

Every endpoint requires authentication and only ever touches tasks owned
by the caller.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_task_repo
from api.models import TaskCreate, TaskListResponse, TaskResponse, TaskUpdate, UserResponse
from api.security import get_current_user_required
from domain.model.errors import (
    AuthenticationRequiredError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from domain.model.task import Task
from port.task_repository import TaskRepository
from services import task_query_service, task_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _to_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        completed=task.completed,
        owner_id=task.owner_id,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def _http_error(e: DomainError) -> HTTPException:
    """Map a domain error raised by the task services to an HTTP error."""
    if isinstance(e, ValidationError):
        return HTTPException(status_code=422, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, ForbiddenError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if isinstance(e, AuthenticationRequiredError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    if isinstance(e, StoreError):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error")


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    filter: Optional[str] = None,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    """List tasks, newest first. Unknown filter values behave like ``all``."""
    try:
        tasks = task_query_service.list_tasks(repo, current_user.id, filter)
    except DomainError as e:
        raise _http_error(e)

    logger.info("Tasks listed", extra={
        "userId": current_user.id,
        "filter": tasks.filter.value,
        "count": tasks.total,
    })
    return TaskListResponse(
        tasks=[_to_response(t) for t in tasks.items],
        filter=tasks.filter.value,
        total=tasks.total,
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    request: TaskCreate,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    try:
        task = task_service.create_task(repo, current_user.id, request.title, request.completed)
    except DomainError as e:
        raise _http_error(e)
    return _to_response(task)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    try:
        task = task_service.get_task(repo, current_user.id, task_id)
    except DomainError as e:
        raise _http_error(e)
    return _to_response(task)


@router.patch("/{task_id}", response_model=TaskResponse)
@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    request: TaskUpdate,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    """Update a task. Fields left out of the body keep their current value."""
    fields = request.model_dump(exclude_unset=True)
    if fields.get('completed', False) is None:
        del fields['completed']

    try:
        task = task_service.update_task(repo, current_user.id, task_id, fields)
    except DomainError as e:
        raise _http_error(e)
    return _to_response(task)


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    try:
        task_service.destroy_task(repo, current_user.id, task_id)
    except DomainError as e:
        raise _http_error(e)
    return {"message": "Task deleted successfully"}


@router.patch("/{task_id}/toggle", response_model=TaskResponse)
async def toggle_task(
    task_id: str,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: TaskRepository = Depends(get_task_repo),
):
    try:
        task = task_service.toggle_task(repo, current_user.id, task_id)
    except DomainError as e:
        raise _http_error(e)
    return _to_response(task)
