"""Task routes. Every route acts on behalf of the authenticated user."""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import (
    get_create_task_service,
    get_delete_task_service,
    get_list_tasks_service,
    get_task_service,
    get_update_task_service,
    get_update_task_status_service,
)
from api.models import (
    TaskCreateRequest,
    TaskListResponse,
    TaskResponse,
    TaskStatusRequest,
    TaskUpdateRequest,
)
from api.security import get_current_user_id
from domain.model.task import DEFAULT_PAGE_SIZE, UNSET, Pagination, Task, TaskStatus
from services.task_service import (
    CreateTaskInput,
    CreateTaskService,
    DeleteTaskInput,
    DeleteTaskService,
    GetTaskForUserService,
    GetTaskInput,
    ListTasksForUserService,
    ListTasksInput,
    UpdateTaskInput,
    UpdateTaskService,
    UpdateTaskStatusInput,
    UpdateTaskStatusService,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _to_response(task: Task) -> TaskResponse:
    return TaskResponse(**asdict(task))


@router.get("", response_model=TaskListResponse)
def list_tasks(
    limit: int = Query(DEFAULT_PAGE_SIZE, description="Page size, clamped to 1..100"),
    cursor: Optional[str] = Query(None, description="next_cursor from the previous page"),
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    user_id: str = Depends(get_current_user_id),
    service: ListTasksForUserService = Depends(get_list_tasks_service),
):
    """List the caller's tasks, newest first."""
    page = service.execute(ListTasksInput(
        user_id=user_id,
        pagination=Pagination(limit=limit, cursor=cursor),
        status=task_status,
    ))
    return TaskListResponse(
        items=[_to_response(task) for task in page.items],
        next_cursor=page.next_cursor,
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    request: TaskCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: CreateTaskService = Depends(get_create_task_service),
):
    task = service.execute(CreateTaskInput(
        title=request.title,
        user_id=user_id,
        description=request.description,
        status=request.status,
    ))
    return _to_response(task)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: GetTaskForUserService = Depends(get_task_service),
):
    return _to_response(service.execute(GetTaskInput(task_id=task_id, user_id=user_id)))


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: UpdateTaskService = Depends(get_update_task_service),
):
    """Partially update a task. Keys absent from the body, or sent as null, are left unchanged."""
    supplied = {
        name: value
        for name, value in request.model_dump(exclude_unset=True).items()
        if value is not None
    }
    task = service.execute(UpdateTaskInput(
        task_id=task_id,
        user_id=user_id,
        title=supplied.get("title", UNSET),
        description=supplied.get("description", UNSET),
        status=supplied.get("status", UNSET),
    ))
    return _to_response(task)


@router.put("/{task_id}/status", response_model=TaskResponse)
def update_task_status(
    task_id: str,
    request: TaskStatusRequest,
    user_id: str = Depends(get_current_user_id),
    service: UpdateTaskStatusService = Depends(get_update_task_status_service),
):
    task = service.execute(UpdateTaskStatusInput(
        task_id=task_id,
        user_id=user_id,
        status=request.status,
    ))
    return _to_response(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: DeleteTaskService = Depends(get_delete_task_service),
):
    service.execute(DeleteTaskInput(task_id=task_id, user_id=user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
