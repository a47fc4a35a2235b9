# domain/model/task.py

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class TaskStatus(str, Enum):
    """Task states. Any state may move to any other."""
    TODO = 'TODO'
    IN_PROGRESS = 'IN_PROGRESS'
    DONE = 'DONE'


class Unset(Enum):
    """Marker for a partial-update field the caller did not supply."""
    UNSET = 'UNSET'

    def __repr__(self) -> str:
        return 'UNSET'


UNSET = Unset.UNSET

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def clamp_page_size(limit: int | None) -> int:
    """Clamp a requested page size to [1, MAX_PAGE_SIZE]."""
    if limit is None:
        return DEFAULT_PAGE_SIZE
    return max(1, min(limit, MAX_PAGE_SIZE))


# ── Task Domain Model ────────────────────────────────────


@dataclass
class Task:
    """Domain model representing a task."""
    id: str
    title: str
    description: str
    status: TaskStatus
    user_id: str
    created_at: datetime
    updated_at: datetime

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    @property
    def sort_key(self) -> tuple[datetime, str]:
        """Listing order key; lists are sorted by this, descending."""
        return self.created_at, self.id


# ── Value Objects ────────────────────────────────────────


@dataclass(frozen=True)
class TaskChanges:
    """Partial update of a task. Fields left as UNSET are not touched."""
    title: str | Unset = UNSET
    description: str | Unset = UNSET
    status: TaskStatus | Unset = UNSET

    def supplied(self) -> dict[str, Any]:
        """Return only the fields the caller supplied."""
        fields = {
            'title': self.title,
            'description': self.description,
            'status': self.status,
        }
        return {name: value for name, value in fields.items() if value is not UNSET}


@dataclass(frozen=True)
class Pagination:
    """Cursor pagination request. ``cursor`` is the id of the last-seen task."""
    limit: int = DEFAULT_PAGE_SIZE
    cursor: str | None = None


@dataclass
class TaskPage:
    """One page of tasks, newest first."""
    items: list[Task] = field(default_factory=list)
    next_cursor: str | None = None
