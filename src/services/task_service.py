"""Task use cases — create, read, update, change status, list, delete.

Every operation on an existing task goes through the owner guard, which
always resolves the user first, then the task, then compares ownership.
"""

import logging
from dataclasses import dataclass

from domain.model.errors import NotFoundError, UnauthorizedError, ValidationError
from domain.model.task import (
    UNSET, Pagination, Task, TaskChanges, TaskPage, TaskStatus, Unset,
)
from port.task_repository import TaskRepository
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class CreateTaskInput:
    title: str
    user_id: str
    description: str | None = None
    status: TaskStatus | None = None


@dataclass
class GetTaskInput:
    task_id: str
    user_id: str


@dataclass
class UpdateTaskInput:
    """Partial update. Fields left as UNSET are not changed."""
    task_id: str
    user_id: str
    title: str | Unset = UNSET
    description: str | Unset = UNSET
    status: TaskStatus | Unset = UNSET


@dataclass
class UpdateTaskStatusInput:
    task_id: str
    user_id: str
    status: TaskStatus


@dataclass
class ListTasksInput:
    user_id: str
    pagination: Pagination | None = None
    status: TaskStatus | None = None


@dataclass
class DeleteTaskInput:
    task_id: str
    user_id: str


def _require_user(users: UserRepository, user_id: str) -> None:
    if not users.get_by_id(user_id):
        raise NotFoundError('User not found')


def _require_owned_task(
    users: UserRepository,
    tasks: TaskRepository,
    task_id: str,
    user_id: str,
    action: str = 'modify',
) -> Task:
    """Owner guard: user exists, then task exists, then user owns task."""
    _require_user(users, user_id)

    task = tasks.get_by_id(task_id)
    if not task:
        raise NotFoundError('Task not found')

    if not task.is_owned_by(user_id):
        logger.warning("Task ownership check failed", extra={
            "taskId": task_id,
            "userId": user_id,
            "action": action,
        })
        raise UnauthorizedError(f'Cannot {action} task you do not own')
    return task


class CreateTaskService:
    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self.tasks = tasks
        self.users = users

    def execute(self, data: CreateTaskInput) -> Task:
        _require_user(self.users, data.user_id)

        title = (data.title or '').strip()
        if not title:
            raise ValidationError('Task title is required')

        task = self.tasks.create(
            title=title,
            description=(data.description or '').strip(),
            status=data.status or TaskStatus.TODO,
            user_id=data.user_id,
        )
        logger.info("Task created", extra={"taskId": task.id, "userId": data.user_id})
        return task


class GetTaskForUserService:
    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self.tasks = tasks
        self.users = users

    def execute(self, data: GetTaskInput) -> Task:
        return _require_owned_task(self.users, self.tasks, data.task_id, data.user_id, action='view')


class UpdateTaskService:
    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self.tasks = tasks
        self.users = users

    def execute(self, data: UpdateTaskInput) -> Task:
        _require_owned_task(self.users, self.tasks, data.task_id, data.user_id)

        title = data.title
        if title is not UNSET:
            title = title.strip()
            if not title:
                raise ValidationError('Task title is required')
        description = data.description
        if description is not UNSET:
            description = description.strip()

        changes = TaskChanges(title=title, description=description, status=data.status)
        task = self.tasks.update(data.task_id, changes)
        logger.info("Task updated", extra={
            "taskId": task.id,
            "userId": data.user_id,
            "fields": sorted(changes.supplied()),
        })
        return task


class UpdateTaskStatusService:
    """Move a task to any status. There are no transition restrictions."""

    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self.tasks = tasks
        self.users = users

    def execute(self, data: UpdateTaskStatusInput) -> Task:
        _require_owned_task(self.users, self.tasks, data.task_id, data.user_id)

        task = self.tasks.update_status(data.task_id, data.status)
        logger.info("Task status updated", extra={"taskId": task.id, "status": task.status.value})
        return task


class ListTasksForUserService:
    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self.tasks = tasks
        self.users = users

    def execute(self, data: ListTasksInput) -> TaskPage:
        _require_user(self.users, data.user_id)
        return self.tasks.list_by_user(data.user_id, data.pagination, data.status)


class DeleteTaskService:
    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self.tasks = tasks
        self.users = users

    def execute(self, data: DeleteTaskInput) -> None:
        _require_owned_task(self.users, self.tasks, data.task_id, data.user_id, action='delete')

        self.tasks.delete(data.task_id)
        logger.info("Task deleted", extra={"taskId": data.task_id, "userId": data.user_id})
