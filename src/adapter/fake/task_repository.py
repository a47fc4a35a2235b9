"""In-memory implementation of TaskRepository for testing."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.errors import NotFoundError
from domain.model.task import (
    Pagination, Task, TaskChanges, TaskPage, TaskStatus, clamp_page_size,
)


class FakeTaskRepository:
    def __init__(self):
        self.store: dict[str, Task] = {}

    # ── write operations ─────────────────────────────────────

    def create(
        self,
        title: str,
        description: str,
        status: TaskStatus,
        user_id: str,
        created_at: datetime | None = None,
    ) -> Task:
        now = datetime.now(timezone.utc)
        task = Task(
            id=uuid.uuid4().hex,
            title=title,
            description=description,
            status=status,
            user_id=user_id,
            created_at=created_at or now,
            updated_at=now,
        )
        self.store[task.id] = task
        return replace(task)

    def update(self, task_id: str, changes: TaskChanges) -> Task:
        task = self._require(task_id)
        for name, value in changes.supplied().items():
            setattr(task, name, value)
        task.updated_at = datetime.now(timezone.utc)
        return replace(task)

    def update_status(self, task_id: str, status: TaskStatus) -> Task:
        return self.update(task_id, TaskChanges(status=status))

    def delete(self, task_id: str) -> None:
        self._require(task_id)
        del self.store[task_id]

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, task_id: str) -> Task | None:
        task = self.store.get(task_id)
        return replace(task) if task else None

    def list_by_user(
        self,
        user_id: str,
        pagination: Pagination | None = None,
        status: TaskStatus | None = None,
    ) -> TaskPage:
        pagination = pagination or Pagination()
        limit = clamp_page_size(pagination.limit)

        results = [t for t in self.store.values() if t.user_id == user_id]
        if status:
            results = [t for t in results if t.status == status]
        results.sort(key=lambda t: t.sort_key, reverse=True)

        anchor = self.store.get(pagination.cursor) if pagination.cursor else None
        if anchor and anchor.user_id == user_id:
            results = [t for t in results if t.sort_key < anchor.sort_key]

        items = [replace(t) for t in results[:limit]]
        next_cursor = items[-1].id if len(results) > limit else None
        return TaskPage(items=items, next_cursor=next_cursor)

    def _require(self, task_id: str) -> Task:
        task = self.store.get(task_id)
        if not task:
            raise NotFoundError('Task not found')
        return task
