"""Port definition for TaskRepository."""

from typing import Protocol

from domain.model.task import Pagination, Task, TaskChanges, TaskPage, TaskStatus


class TaskRepository(Protocol):
    """Task data access. Does not enforce ownership; services do.

    Mutations on an unknown id raise NotFoundError.
    """

    def create(
        self,
        title: str,
        description: str,
        status: TaskStatus,
        user_id: str,
    ) -> Task: ...

    def get_by_id(self, task_id: str) -> Task | None: ...

    def list_by_user(
        self,
        user_id: str,
        pagination: Pagination | None = None,
        status: TaskStatus | None = None,
    ) -> TaskPage:
        """List a user's tasks newest first.

        The page limit is clamped to [1, 100]. An unknown cursor is ignored.
        ``next_cursor`` is the id of the last returned task when more remain.
        """
        ...

    def update(self, task_id: str, changes: TaskChanges) -> Task: ...

    def update_status(self, task_id: str, status: TaskStatus) -> Task: ...

    def delete(self, task_id: str) -> None: ...
